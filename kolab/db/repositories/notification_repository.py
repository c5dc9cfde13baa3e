from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kolab.db.models.notification_model import Notification
from kolab.utils.pagination import paginate


@runtime_checkable
class InterfaceNotificationRepository(Protocol):
    async def create(
        self,
        *,
        recipient_id: int,
        type_: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
        actor_id: int | None = None,
    ) -> Notification: ...

    async def paginate_by_recipient(
        self,
        *,
        recipient_id: int,
        page: int = 1,
        per_page: int = 20,
        is_read: bool | None = None,
    ) -> dict[str, Any]: ...

    async def get_for_user(
        self, *, notif_id: int, user_id: int
    ) -> Notification | None: ...

    async def mark_read(self, *, notif: Notification) -> Notification: ...

    async def mark_all_read(self, *, user_id: int) -> int: ...

    async def count_unread(self, *, user_id: int) -> int: ...

    async def delete_for_user(self, *, notif_id: int, user_id: int) -> bool: ...


class NotificationSQLAlchemyRepository(InterfaceNotificationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _feed_stmt(
        self, recipient_id: int, is_read: bool | None = None
    ) -> Select[tuple[Notification]]:
        stmt = select(Notification).where(Notification.recipient_id == recipient_id)
        if is_read is True:
            stmt = stmt.where(Notification.is_read.is_(True))
        elif is_read is False:
            stmt = stmt.where(Notification.is_read.is_(False))
        # urutan feed: terbaru dulu, id sebagai pemecah seri
        return stmt.order_by(Notification.created_at.desc(), Notification.id.desc())

    async def create(
        self,
        *,
        recipient_id: int,
        type_: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
        actor_id: int | None = None,
    ) -> Notification:
        notif = Notification(
            recipient_id=recipient_id,
            actor_id=actor_id,
            type=str(type_),
            title=title,
            message=message,
            data=dict(data or {}),
            is_read=False,
        )
        self.session.add(notif)
        await self.session.flush()
        await self.session.refresh(notif)
        return notif

    async def paginate_by_recipient(
        self,
        *,
        recipient_id: int,
        page: int = 1,
        per_page: int = 20,
        is_read: bool | None = None,
    ) -> dict[str, Any]:
        return await paginate(
            self.session, self._feed_stmt(recipient_id, is_read), page, per_page
        )

    async def get_for_user(
        self, *, notif_id: int, user_id: int
    ) -> Notification | None:
        res = await self.session.execute(
            select(Notification).where(
                Notification.id == notif_id,
                Notification.recipient_id == user_id,
            )
        )
        return res.scalar_one_or_none()

    async def mark_read(self, *, notif: Notification) -> Notification:
        if not notif.is_read:
            notif.is_read = True
            notif.read_at = datetime.now(timezone.utc)
            self.session.add(notif)
            await self.session.flush()
            await self.session.refresh(notif)
        return notif

    async def mark_all_read(self, *, user_id: int) -> int:
        # satu UPDATE ber-scope pemilik, tidak membaca baris ke memori
        res = await self.session.execute(
            update(Notification)
            .where(
                Notification.recipient_id == user_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True, read_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return res.rowcount or 0

    async def count_unread(self, *, user_id: int) -> int:
        count = await self.session.scalar(
            select(func.count())
            .select_from(Notification)
            .where(
                Notification.recipient_id == user_id,
                Notification.is_read.is_(False),
            )
        )
        return count or 0

    async def delete_for_user(self, *, notif_id: int, user_id: int) -> bool:
        res = await self.session.execute(
            delete(Notification).where(
                Notification.id == notif_id,
                Notification.recipient_id == user_id,
            )
        )
        return bool(res.rowcount)
