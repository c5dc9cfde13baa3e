from fastapi import Depends

from kolab.api.dependencies.sessions import get_uow
from kolab.db.uow.sqlalchemy import UnitOfWork
from kolab.services.message_service import MessageService
from kolab.services.notification_service import NotificationService
from kolab.services.user_directory_service import (
    UserDirectoryService,
    get_user_directory,
)


def get_notification_service(uow: UnitOfWork = Depends(get_uow)) -> NotificationService:
    """Mendapatkan layanan notifikasi."""
    return NotificationService(uow)


def get_message_service(
    uow: UnitOfWork = Depends(get_uow),
    directory: UserDirectoryService = Depends(get_user_directory),
) -> MessageService:
    """Mendapatkan layanan pesan langsung."""
    return MessageService(uow, directory)
