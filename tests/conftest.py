"""
Konfigurasi pytest. Database diarahkan ke SQLite in-memory SEBELUM modul
kolab diimpor, karena engine dibuat saat import.
"""

import os

os.environ["DB_URL"] = "sqlite+aiosqlite://"
os.environ["BASE_API_USER_DIRECTORY"] = "http://directory.test"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from kolab.core.domain.bus import drain_background  # noqa: E402
from kolab.core.domain.subscribers import register_event_handlers  # noqa: E402
from kolab.db.base import (  # noqa: E402
    async_session_maker,
    create_db_and_tables,
    drop_db_and_tables,
)
from kolab.db.models import load_all_models  # noqa: E402
from kolab.db.models.post_participant_model import PostParticipant  # noqa: E402
from kolab.db.models.project_member_model import (  # noqa: E402
    ProjectMember,
    RoleProject,
)
from kolab.db.uow.sqlalchemy import SQLAlchemyUnitOfWork  # noqa: E402
from kolab.main import app  # noqa: E402
from kolab.services.user_directory_service import (  # noqa: E402
    UserDirectoryService,
    get_user_directory,
)

USERS = {
    1: {"id": 1, "name": "Alice Putri", "email": "alice@kampus.ac.id"},
    2: {"id": 2, "name": "Budi Santoso", "email": "budi@kampus.ac.id"},
    3: {"id": 3, "name": "Citra Lestari", "email": "citra@kampus.ac.id"},
    4: {"id": 4, "name": "Dimas Moderator", "email": "dimas@kampus.ac.id"},
}


class FakeDirectoryClient:
    """Pengganti UserDirectoryClient: token `token-<id>` milik pengguna <id>."""

    def __init__(self, users: dict[int, dict]) -> None:
        self.users = users
        self.calls: list[tuple[str, object]] = []

    async def get_me(self, *, token: str | None = None):
        self.calls.append(("me", token))
        if not token or not token.startswith("token-"):
            return None
        return self.users.get(int(token.removeprefix("token-")))

    async def get_user(self, *, user_id: int, token: str | None = None):
        self.calls.append(("user", user_id))
        return self.users.get(user_id)

    async def get_bulk(self, *, ids: list[int], token: str | None = None):
        self.calls.append(("bulk", tuple(ids)))
        return [self.users[i] for i in ids if i in self.users]


def auth(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer token-{user_id}"}


@pytest.fixture(autouse=True)
async def database() -> AsyncGenerator[None, None]:
    load_all_models()
    register_event_handlers()
    await create_db_and_tables()
    yield
    await drain_background()
    await drop_db_and_tables()


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def uow(session: AsyncSession) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(session)


@pytest.fixture
def directory_client() -> FakeDirectoryClient:
    return FakeDirectoryClient(USERS)


@pytest.fixture
def directory(directory_client: FakeDirectoryClient) -> UserDirectoryService:
    return UserDirectoryService(client=directory_client)


@pytest.fixture
async def client(
    directory: UserDirectoryService,
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_user_directory] = lambda: directory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test/v1") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def project_members():
    """Proyek 10 dimiliki pengguna 1 dengan anggota 2 dan 3."""
    async with async_session_maker() as session:
        session.add_all(
            [
                ProjectMember(project_id=10, user_id=1, role=RoleProject.OWNER),
                ProjectMember(project_id=10, user_id=2),
                ProjectMember(project_id=10, user_id=3),
            ]
        )
        await session.commit()
    return [1, 2, 3]


@pytest.fixture
async def post_participants():
    """Post 42 diikuti pengguna 1 (penulis), 2, dan 3."""
    async with async_session_maker() as session:
        session.add_all(
            [PostParticipant(post_id=42, user_id=uid) for uid in (1, 2, 3)]
        )
        await session.commit()
    return [1, 2, 3]
