from typing import Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kolab.db.models.post_participant_model import PostParticipant
from kolab.db.models.project_member_model import ProjectMember


@runtime_checkable
class InterfaceMembershipRepository(Protocol):
    """Akses baca-saja ke keanggotaan yang dimiliki modul lain."""

    async def list_project_members(self, project_id: int) -> list[int]: ...

    async def list_post_participants(self, post_id: int) -> list[int]: ...


class SQLAlchemyMembershipRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_project_members(self, project_id: int) -> list[int]:
        result = await self.session.execute(
            select(ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.user_id)
        )
        return list(result.scalars().all())

    async def list_post_participants(self, post_id: int) -> list[int]:
        result = await self.session.execute(
            select(PostParticipant.user_id)
            .where(PostParticipant.post_id == post_id)
            .order_by(PostParticipant.user_id)
        )
        return list(result.scalars().all())
