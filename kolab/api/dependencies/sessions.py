from typing import AsyncGenerator

from fastapi import BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kolab.db.base import async_session_maker
from kolab.db.uow.sqlalchemy import SQLAlchemyUnitOfWork


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Sesi database per request, ditutup setelah request selesai."""
    async with async_session_maker() as session:
        yield session


async def get_uow(
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_async_session),
) -> SQLAlchemyUnitOfWork:
    """
    Unit of work per request. Event domain yang terkumpul dijalankan sebagai
    background task setelah commit, sehingga notifikasi tidak menunda respons.
    """
    uow = SQLAlchemyUnitOfWork(session)
    uow.set_background_tasks(background_tasks)
    return uow
