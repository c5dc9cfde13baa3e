from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from kolab.core.domain.bus import dispatch_pending_events
from kolab.db.repositories.membership_repository import (
    InterfaceMembershipRepository,
    SQLAlchemyMembershipRepository,
)
from kolab.db.repositories.message_repository import (
    InterfaceMessageRepository,
    MessageSQLAlchemyRepository,
)
from kolab.db.repositories.notification_repository import (
    InterfaceNotificationRepository,
    NotificationSQLAlchemyRepository,
)

if TYPE_CHECKING:
    from kolab.core.domain.event import DomainEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class UnitOfWork(Protocol):
    session: AsyncSession

    @property
    def notification_repo(self) -> InterfaceNotificationRepository: ...

    @property
    def message_repo(self) -> InterfaceMessageRepository: ...

    @property
    def membership_repo(self) -> InterfaceMembershipRepository: ...

    background_tasks: BackgroundTasks | None

    def add_event(self, event: "DomainEvent") -> None: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def __aenter__(self) -> "UnitOfWork": ...
    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    def set_background_tasks(self, background_tasks: BackgroundTasks) -> None: ...


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._events: List["DomainEvent"] = []
        self._committed = False

        # init repo
        self._notification_repo: InterfaceNotificationRepository | None = None
        self._message_repo: InterfaceMessageRepository | None = None
        self._membership_repo: InterfaceMembershipRepository | None = None

        self.background_tasks = None

    @property
    def notification_repo(self) -> InterfaceNotificationRepository:
        if self._notification_repo is None:
            self._notification_repo = NotificationSQLAlchemyRepository(self.session)
        return self._notification_repo

    @property
    def message_repo(self) -> InterfaceMessageRepository:
        if self._message_repo is None:
            self._message_repo = MessageSQLAlchemyRepository(self.session)
        return self._message_repo

    @property
    def membership_repo(self) -> InterfaceMembershipRepository:
        if self._membership_repo is None:
            self._membership_repo = SQLAlchemyMembershipRepository(self.session)
        return self._membership_repo

    def add_event(self, event: "DomainEvent") -> None:
        """Menambahkan event ke dalam unit of work.

        Event baru dipublikasikan setelah commit berhasil, sehingga handler
        tidak pernah melihat data yang akhirnya di-rollback.

        Args:
            event (DomainEvent): Event yang akan ditambahkan.
        """
        logger.info("Event enqueued: %s", event.describe())
        self._events.append(event)

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()
        events, self._events = self._events, []
        if events:
            logger.info("Transaction committed, dispatching %d events", len(events))
            await dispatch_pending_events(events, self.background_tasks)

        self._committed = True

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self.session.rollback()
        self._events.clear()
        self._committed = False

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Masuk ke dalam konteks unit of work."""
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        """Keluar dari konteks unit of work.

        Args:
            exc_type (type): Tipe exception yang terjadi, jika ada.
            exc (Exception): Exception yang terjadi, jika ada.
            tb (Traceback): Traceback dari exception yang terjadi, jika ada.
        """
        if exc:
            await self.rollback()

    def set_background_tasks(self, background_tasks: BackgroundTasks) -> None:
        """Set background tasks untuk unit of work.

        Args:
            background_tasks (BackgroundTasks): Background tasks yang akan diset.
        """
        self.background_tasks = background_tasks
