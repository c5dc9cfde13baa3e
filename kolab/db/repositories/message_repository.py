from __future__ import annotations

from typing import Protocol, runtime_checkable

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from kolab.db.models.message_model import Message


@runtime_checkable
class InterfaceMessageRepository(Protocol):
    async def create(
        self, *, sender_id: int, recipient_id: int, content: str
    ) -> Message: ...

    async def get_by_id(self, *, message_id: int) -> Message | None: ...

    async def list_between(self, *, user_a: int, user_b: int) -> list[Message]: ...

    async def list_latest_per_counterpart(self, *, user_id: int) -> list[Message]: ...

    async def list_for_user(self, *, user_id: int) -> list[Message]: ...

    async def delete(self, *, message: Message) -> None: ...


class MessageSQLAlchemyRepository(InterfaceMessageRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self, *, sender_id: int, recipient_id: int, content: str
    ) -> Message:
        message = Message(
            sender_id=sender_id, recipient_id=recipient_id, content=content
        )
        self.session.add(message)
        await self.session.flush()
        await self.session.refresh(message)
        return message

    async def get_by_id(self, *, message_id: int) -> Message | None:
        return await self.session.get(Message, message_id)

    async def list_between(self, *, user_a: int, user_b: int) -> list[Message]:
        """Semua pesan antara dua pengguna, lama ke baru, sama untuk kedua sisi."""
        stmt = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_a, Message.recipient_id == user_b),
                    and_(Message.sender_id == user_b, Message.recipient_id == user_a),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def list_latest_per_counterpart(self, *, user_id: int) -> list[Message]:
        """
        Pesan terbaru untuk setiap lawan bicara `user_id`, diurutkan dari
        percakapan yang paling baru aktif.
        """
        counterpart = case(
            (Message.sender_id == user_id, Message.recipient_id),
            else_=Message.sender_id,
        )
        ranked = (
            select(
                Message.id.label("message_id"),
                func.row_number()
                .over(
                    partition_by=counterpart,
                    order_by=(Message.created_at.desc(), Message.id.desc()),
                )
                .label("rn"),
            )
            .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
            .subquery()
        )
        latest = aliased(Message)
        stmt = (
            select(latest)
            .join(ranked, ranked.c.message_id == latest.id)
            .where(ranked.c.rn == 1)
            .order_by(latest.created_at.desc(), latest.id.desc())
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def list_for_user(self, *, user_id: int) -> list[Message]:
        stmt = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def delete(self, *, message: Message) -> None:
        await self.session.delete(message)
        await self.session.flush()
