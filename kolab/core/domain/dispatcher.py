"""
Dispatcher notifikasi: mengubah satu intent menjadi satu baris notifikasi per
penerima.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kolab.core.domain.bus import schedule_background
from kolab.core.domain.intent import (
    NotificationIntent,
    PostParticipantsExceptActor,
    ProjectMembersExceptActor,
    SingleUser,
    UserGroupExceptActor,
)
from kolab.db.base import async_session_maker
from kolab.db.uow.sqlalchemy import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


def _normalize_recipients(
    recipients: Iterable[int | None], actor_id: int | None, *, exclude_actor: bool
) -> list[int]:
    # unik dengan urutan tetap, buang None/0/negatif, dan (untuk broadcast)
    # jangan kirim ke pelaku sendiri
    seen: dict[int, None] = {}
    for r in recipients:
        if r is None or int(r) <= 0:
            continue
        seen.setdefault(int(r), None)
    if exclude_actor and actor_id is not None:
        seen.pop(int(actor_id), None)
    return list(seen)


@dataclass
class DispatchReport:
    notification_type: str
    recipients: list[int] = field(default_factory=list)
    created: list[int] = field(default_factory=list)
    """ID notifikasi yang berhasil dibuat."""
    failed: list[int] = field(default_factory=list)
    """ID penerima yang gagal ditulis."""

    @property
    def delivered(self) -> int:
        return len(self.created)


class NotificationDispatcher:
    """
    Resolusi penerima dilakukan saat dispatch, sehingga perubahan keanggotaan
    setelahnya tidak memengaruhi notifikasi yang sudah dibuat. Setiap penerima
    ditulis dalam sesi dan transaksinya sendiri: kegagalan satu penerima
    dicatat lalu dilewati.

    Tidak ada deduplikasi: setiap intent menghasilkan tepat satu baris per
    penerima.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory or async_session_maker

    async def resolve_recipients(self, intent: NotificationIntent) -> list[int]:
        target = intent.target
        if isinstance(target, SingleUser):
            return _normalize_recipients(
                [target.user_id], intent.actor_id, exclude_actor=False
            )
        if isinstance(target, UserGroupExceptActor):
            return _normalize_recipients(
                target.user_ids, intent.actor_id, exclude_actor=True
            )

        async with self._session_factory() as session:
            repo = SQLAlchemyUnitOfWork(session).membership_repo
            if isinstance(target, ProjectMembersExceptActor):
                members = await repo.list_project_members(target.project_id)
            elif isinstance(target, PostParticipantsExceptActor):
                members = await repo.list_post_participants(target.post_id)
            else:
                raise TypeError(f"Target notifikasi tidak dikenal: {target!r}")
        return _normalize_recipients(members, intent.actor_id, exclude_actor=True)

    async def _write_one(self, intent: NotificationIntent, recipient_id: int) -> int:
        async with self._session_factory() as session:
            uow = SQLAlchemyUnitOfWork(session)
            notif = await uow.notification_repo.create(
                recipient_id=recipient_id,
                actor_id=intent.actor_id,
                type_=intent.event_type,
                title=intent.title,
                message=intent.message,
                data=intent.data,
            )
            await uow.commit()
            return notif.id

    async def dispatch(self, intent: NotificationIntent) -> DispatchReport:
        report = DispatchReport(notification_type=str(intent.event_type))
        try:
            report.recipients = await self.resolve_recipients(intent)
        except Exception:
            logger.exception(
                "notification.resolve.error type=%s target=%r",
                intent.event_type,
                intent.target,
            )
            return report

        for recipient_id in report.recipients:
            try:
                report.created.append(await self._write_one(intent, recipient_id))
            except Exception:
                report.failed.append(recipient_id)
                logger.exception(
                    "notification.write.error type=%s recipient=%s",
                    intent.event_type,
                    recipient_id,
                )

        logger.debug(
            "Dispatched %s: %d created, %d failed, recipients=%s actor=%s",
            intent.event_type,
            report.delivered,
            len(report.failed),
            report.recipients,
            intent.actor_id,
        )
        return report


_dispatcher = NotificationDispatcher()


def get_dispatcher() -> NotificationDispatcher:
    return _dispatcher


def set_dispatcher(dispatcher: NotificationDispatcher) -> None:
    global _dispatcher
    _dispatcher = dispatcher


async def deliver(intent: NotificationIntent) -> None:
    """Jalankan dispatch sekarang (dipakai oleh handler yang sudah di background)."""
    await get_dispatcher().dispatch(intent)


def emit(
    intent: NotificationIntent, background_tasks: BackgroundTasks | None = None
) -> None:
    """
    Titik masuk produsen. Fire-and-forget: dispatch dijadwalkan di
    BackgroundTasks request aktif, atau asyncio task bila di luar request.
    Kegagalan hanya dicatat dan tidak pernah sampai ke pemanggil.
    """
    schedule_background([deliver], intent, background_tasks)
