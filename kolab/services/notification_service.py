from __future__ import annotations

import logging
from typing import Any

from kolab.core.config import settings
from kolab.core.domain import navigation
from kolab.db.models.notification_model import Notification
from kolab.db.uow.sqlalchemy import UnitOfWork
from kolab.schemas.notification import (
    NotificationOpenResult,
    NotificationPage,
    NotificationRead,
)
from kolab.utils import exceptions

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

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
        """Buat satu notifikasi belum dibaca untuk `recipient_id`."""
        return await self.uow.notification_repo.create(
            recipient_id=recipient_id,
            type_=type_,
            title=title,
            message=message,
            data=data,
            actor_id=actor_id,
        )

    async def list_for_user(
        self,
        *,
        user_id: int,
        page: int = 1,
        per_page: int | None = None,
        is_read: bool | None = None,
    ) -> NotificationPage:
        """
        Daftar notifikasi milik `user_id`, terbaru dulu, beserta jumlah
        notifikasi belum dibaca.
        """
        if page < 1:
            raise exceptions.InvalidArgumentError("Halaman harus dimulai dari 1")
        per_page = per_page or settings.NOTIFICATION_PAGE_SIZE
        if not 1 <= per_page <= settings.NOTIFICATION_MAX_PAGE_SIZE:
            raise exceptions.InvalidArgumentError(
                f"Limit harus antara 1 dan {settings.NOTIFICATION_MAX_PAGE_SIZE}"
            )

        result = await self.uow.notification_repo.paginate_by_recipient(
            recipient_id=user_id, page=page, per_page=per_page, is_read=is_read
        )
        unread = await self.uow.notification_repo.count_unread(user_id=user_id)
        return NotificationPage.model_validate(
            {**result, "unread_count": unread}, from_attributes=True
        )

    async def _get_owned(self, *, notif_id: int, user_id: int) -> Notification:
        notif = await self.uow.notification_repo.get_for_user(
            notif_id=notif_id, user_id=user_id
        )
        if notif is None:
            # tidak ada atau bukan milik pengguna, keduanya 404
            raise exceptions.NotificationNotFoundError
        return notif

    async def mark_read(self, *, notif_id: int, user_id: int) -> NotificationRead:
        notif = await self._get_owned(notif_id=notif_id, user_id=user_id)
        notif = await self.uow.notification_repo.mark_read(notif=notif)
        return NotificationRead.model_validate(notif)

    async def mark_all_read(self, *, user_id: int) -> int:
        count = await self.uow.notification_repo.mark_all_read(user_id=user_id)
        logger.info("Marked %d notifications read for user %s", count, user_id)
        return count

    async def unread_count(self, *, user_id: int) -> int:
        return await self.uow.notification_repo.count_unread(user_id=user_id)

    async def delete(self, *, notif_id: int, user_id: int) -> None:
        deleted = await self.uow.notification_repo.delete_for_user(
            notif_id=notif_id, user_id=user_id
        )
        if not deleted:
            raise exceptions.NotificationNotFoundError

    async def open_notification(
        self, *, notif_id: int, user_id: int
    ) -> NotificationOpenResult:
        """
        Jalankan reducer "buka notifikasi" di server: tandai dibaca lalu
        kembalikan notifikasi beserta tujuan navigasinya.
        """
        notif = await self._get_owned(notif_id=notif_id, user_id=user_id)
        result = navigation.open_notification(notif)
        if result.changed:
            self.uow.session.add(notif)
            await self.uow.session.flush()
            await self.uow.session.refresh(notif)
        return NotificationOpenResult(
            notification=NotificationRead.model_validate(notif),
            target=result.target,
        )
