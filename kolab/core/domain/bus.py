from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from contextvars import ContextVar
from enum import StrEnum
from typing import (
    Any,
    Awaitable,
    Callable,
    Coroutine,
    DefaultDict,
    Iterable,
    List,
    Type,
    TypeVar,
)

from fastapi import BackgroundTasks

from kolab.core.domain.event import DomainEvent

logger = logging.getLogger(__name__)


# ContextVar untuk menyimpan BackgroundTasks saat ada request FastAPI aktif
_BG_TASKS_VAR: ContextVar[BackgroundTasks | None] = ContextVar(
    "event_bg_tasks", default=None
)

# referensi kuat untuk task fallback agar tidak dikumpulkan GC sebelum selesai
_background_handlers: set[asyncio.Task] = set()


def set_event_background(bg_tasks: BackgroundTasks | None) -> None:
    """
    Set BackgroundTasks aktif untuk request saat ini.
    - bg_tasks diharapkan objek fastapi.BackgroundTasks (punya .add_task(fn, *args))
    """
    _BG_TASKS_VAR.set(bg_tasks)


def get_event_background() -> BackgroundTasks | None:
    """
    Get BackgroundTasks aktif untuk request saat ini.
    """
    return _BG_TASKS_VAR.get()


T_contra = TypeVar("T_contra", bound=DomainEvent, contravariant=True)

Handler = (
    Callable[[T_contra], Awaitable[None]]
    | Callable[[T_contra], Coroutine[Any, Any, None]]
)


class HandlerMode(StrEnum):
    IMMEDIATE = "immediate"
    BACKGROUND = "background"


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__name__", str(handler))


async def _run_safely(handler: Handler, event: DomainEvent) -> None:
    # kegagalan handler background tidak boleh merambat ke aksi pemicunya
    try:
        await handler(event)
    except Exception:
        logger.exception(
            "event.background.error %s -> %s", event.describe(), _handler_name(handler)
        )


class EventBus:
    """
    EventBus adalah utilitas sederhana untuk membangun arsitektur event-driven dengan
    pola publish-subscribe. Kelas ini menyimpan peta tipe event ke daftar handler dan
    menjalankan handler secara konkuren menggunakan asyncio.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[
            Type[DomainEvent], List[tuple[Handler, HandlerMode]]
        ] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler) -> None:
        self._handlers[event_type].append((handler, HandlerMode.IMMEDIATE))

        logger.info(
            "event.subscribe immediate %s -> %s",
            event_type.__name__,
            _handler_name(handler),
        )

    def subscribe_background(
        self, event_type: Type[DomainEvent], handler: Handler
    ) -> None:
        # daftar sebagai handler background
        self._handlers[event_type].append((handler, HandlerMode.BACKGROUND))
        logger.debug(
            "event.subscribe background %s -> %s",
            event_type.__name__,
            _handler_name(handler),
        )

    def clear(self) -> None:
        self._handlers.clear()

    async def publish(
        self, event: DomainEvent, background_tasks: BackgroundTasks | None = None
    ) -> None:
        pairs = self._handlers.get(type(event), [])
        if not pairs:
            logger.debug("event.no_handlers %s", event.name)
            return

        # Pisahkan immediate vs background
        immediate: list[Handler] = []
        background: list[Handler] = []
        for h, mode in pairs:
            if mode is HandlerMode.IMMEDIATE:
                immediate.append(h)
            elif mode is HandlerMode.BACKGROUND:
                background.append(h)
            logger.debug("event.publish %s -> %s (%s)", event.name, _handler_name(h), mode)

        # Jalankan immediate secara konkuren dan ditunggu selesai
        if immediate:
            await asyncio.gather(
                *(h(event) for h in immediate), return_exceptions=False
            )

        if background:
            schedule_background(background, event, background_tasks)


def schedule_background(
    handlers: Iterable[Handler],
    event: DomainEvent,
    background_tasks: BackgroundTasks | None = None,
) -> None:
    """
    Jadwalkan handler background: pakai FastAPI BackgroundTasks jika ada, kalau
    tidak fallback ke asyncio.create_task.
    """
    bg_tasks = background_tasks or _BG_TASKS_VAR.get()
    for h in handlers:
        if bg_tasks is not None and hasattr(bg_tasks, "add_task"):
            bg_tasks.add_task(_run_safely, h, event)
        else:
            logger.debug("Using asyncio.create_task for background handler")
            task = asyncio.create_task(_run_safely(h, event))

            # Untuk mencegah penyimpanan referensi ke tugas yang telah
            # selesai selamanya, buat setiap tugas menghapus referensinya
            # sendiri dari kumpulan setelah selesai:
            _background_handlers.add(task)
            task.add_done_callback(_background_handlers.discard)


async def drain_background() -> None:
    """Tunggu semua task fallback selesai (dipakai saat shutdown dan di test)."""
    while _background_handlers:
        await asyncio.gather(*list(_background_handlers), return_exceptions=True)


_event_bus = EventBus()
subscribe = _event_bus.subscribe
subscribe_background = _event_bus.subscribe_background
publish = _event_bus.publish


def get_event_bus() -> EventBus:
    return _event_bus


async def dispatch_pending_events(
    events: Iterable[DomainEvent], background_tasks: BackgroundTasks | None = None
) -> None:
    """
    Menjalankan event yang tertunda setelah transaksi berhasil di-commit.

    Args:
        events: Event yang dikumpulkan unit of work.
        background_tasks: BackgroundTasks request aktif, bila ada.
    """
    for ev in events:
        try:
            await publish(ev, background_tasks)
        except Exception:
            logger.exception("event.handler.error %s", ev.describe())
