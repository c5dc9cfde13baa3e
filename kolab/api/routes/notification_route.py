from fastapi import APIRouter, Depends, Query, Response, status
from fastapi_utils.cbv import cbv

from kolab.api.dependencies.services import get_notification_service
from kolab.api.dependencies.sessions import get_uow
from kolab.api.dependencies.user import get_current_user
from kolab.core.config import settings
from kolab.db.uow.sqlalchemy import UnitOfWork
from kolab.schemas.notification import (
    CountSchema,
    NotificationOpenResult,
    NotificationPage,
    NotificationRead,
)
from kolab.schemas.user import UserBase
from kolab.services.notification_service import NotificationService
from kolab.utils.exceptions import AppErrorResponse

r = router = APIRouter(tags=["Notification"])

_NOT_FOUND = {
    status.HTTP_404_NOT_FOUND: {
        "model": AppErrorResponse,
        "description": (
            "Notifikasi tidak ditemukan atau bukan milik pengguna. error_code : "
            "NOTIFICATION_NOT_FOUND"
        ),
    }
}


@cbv(r)
class _Notification:
    user: UserBase = Depends(get_current_user)
    service: NotificationService = Depends(get_notification_service)
    uow: UnitOfWork = Depends(get_uow)

    @r.get(
        "/notifications",
        response_model=NotificationPage,
        status_code=status.HTTP_200_OK,
    )
    async def list_notifications(
        self,
        page: int = Query(1, ge=1, description="Nomor halaman, dimulai dari 1"),
        limit: int = Query(
            settings.NOTIFICATION_PAGE_SIZE,
            ge=1,
            le=settings.NOTIFICATION_MAX_PAGE_SIZE,
            description="Jumlah item per halaman",
        ),
        read: bool | None = Query(
            None, description="Filter status baca: true=terbaca, false=belum"
        ),
    ):
        """Daftar notifikasi milik pengguna, terbaru dulu."""
        return await self.service.list_for_user(
            user_id=self.user.id, page=page, per_page=limit, is_read=read
        )

    @r.get(
        "/notifications/unread-count",
        response_model=CountSchema,
        status_code=status.HTTP_200_OK,
    )
    async def unread_count(self):
        return CountSchema(count=await self.service.unread_count(user_id=self.user.id))

    @r.put(
        "/notifications/read-all",
        response_model=CountSchema,
        status_code=status.HTTP_200_OK,
    )
    async def mark_all_read(self):
        """Tandai semua notifikasi belum dibaca sebagai dibaca.

        Mengembalikan jumlah notifikasi yang diperbarui.
        """
        async with self.uow:
            count = await self.service.mark_all_read(user_id=self.user.id)
            await self.uow.commit()
        return CountSchema(count=count)

    @r.put(
        "/notifications/{notif_id}/read",
        response_model=NotificationRead,
        status_code=status.HTTP_200_OK,
        responses=_NOT_FOUND,
    )
    async def mark_read(self, notif_id: int):
        """Tandai satu notifikasi sebagai dibaca. Idempoten untuk pemiliknya."""
        async with self.uow:
            item = await self.service.mark_read(notif_id=notif_id, user_id=self.user.id)
            await self.uow.commit()
        return item

    @r.post(
        "/notifications/{notif_id}/open",
        response_model=NotificationOpenResult,
        status_code=status.HTTP_200_OK,
        responses=_NOT_FOUND,
    )
    async def open_notification(self, notif_id: int):
        """Tandai dibaca dan kembalikan path tujuan navigasi notifikasi."""
        async with self.uow:
            result = await self.service.open_notification(
                notif_id=notif_id, user_id=self.user.id
            )
            await self.uow.commit()
        return result

    @r.delete(
        "/notifications/{notif_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses=_NOT_FOUND,
    )
    async def delete_notification(self, notif_id: int):
        async with self.uow:
            await self.service.delete(notif_id=notif_id, user_id=self.user.id)
            await self.uow.commit()
        return Response(status_code=status.HTTP_204_NO_CONTENT)
