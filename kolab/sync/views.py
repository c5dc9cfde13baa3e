"""
View session untuk client: masing-masing memiliki task polling sendiri yang
dibatalkan saat view ditutup.

Fetch "visible" menampilkan loading dan error; fetch "silent" (polling)
hanya mencatat kegagalan ke log.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from kolab.core.domain import navigation
from kolab.schemas.message import ConversationRead, MessageRead
from kolab.schemas.notification import NotificationRead
from kolab.sync.api_client import ApiError, KolabApiClient
from kolab.sync.config import SyncSettings
from kolab.sync.polling import PollingTask, SequenceGuard

logger = logging.getLogger(__name__)

_FETCH_ERRORS = (ApiError, httpx.HTTPError)


def _error_text(exc: Exception) -> str:
    if isinstance(exc, ApiError):
        return exc.message
    return "Tidak dapat terhubung ke server. Silakan coba lagi."


class _PollingView:
    poll_interval: float | None = None

    def __init__(self, api: KolabApiClient, *, poll_interval: float | None = None):
        self.api = api
        if poll_interval is not None:
            self.poll_interval = poll_interval
        self.loading = False
        self.error: str | None = None
        self._guard = SequenceGuard()
        self._poller: PollingTask | None = None

    async def _fetch(self) -> Any:
        raise NotImplementedError

    def _apply(self, data: Any) -> None:
        raise NotImplementedError

    async def refresh(self, *, silent: bool = False) -> bool:
        """Ambil ulang data. Mengembalikan True jika hasilnya diterapkan."""
        ticket = self._guard.next_ticket()
        if not silent:
            self.loading = True
            self.error = None
        try:
            data = await self._fetch()
        except _FETCH_ERRORS as exc:
            if silent:
                logger.warning("%s silent refresh failed: %s", type(self).__name__, exc)
            else:
                self.error = _error_text(exc)
            return False
        finally:
            if not silent:
                self.loading = False

        if not self._guard.try_apply(ticket):
            logger.debug("%s discarded stale response #%d", type(self).__name__, ticket)
            return False
        self._apply(data)
        return True

    async def _silent_refresh(self) -> None:
        await self.refresh(silent=True)

    async def open(self) -> None:
        await self.refresh()
        if self.poll_interval and self._poller is None:
            self._poller = PollingTask(
                self._silent_refresh,
                self.poll_interval,
                name=f"{type(self).__name__}.poll",
            ).start()

    async def close(self) -> None:
        if self._poller is not None:
            await self._poller.stop()
            self._poller = None

    @property
    def polling(self) -> bool:
        return self._poller is not None and self._poller.running

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class NotificationFeedView(_PollingView):
    def __init__(
        self,
        api: KolabApiClient,
        *,
        settings: SyncSettings | None = None,
        poll_interval: float | None = None,
    ) -> None:
        settings = settings or api.settings
        self.poll_interval = settings.NOTIFICATION_POLL_INTERVAL
        self.page_size = settings.NOTIFICATION_PAGE_SIZE
        super().__init__(api, poll_interval=poll_interval)
        self.items: list[NotificationRead] = []
        self.unread_count = 0

    async def _fetch(self):
        return await self.api.list_notifications(page=1, limit=self.page_size)

    def _apply(self, data) -> None:
        self.items = list(data.items)
        self.unread_count = data.unread_count

    def _find(self, notification_id: int) -> NotificationRead | None:
        for item in self.items:
            if item.id == notification_id:
                return item
        return None

    async def open_notification(self, notification_id: int) -> str | None:
        """
        Klik notifikasi: tandai dibaca secara lokal, kirim ke server, lalu
        kembalikan path tujuan navigasi (None jika tidak ada).

        Gagal menandai di server dicatat dan status lokal dikembalikan, sehingga
        klik berikutnya mengirim ulang (operasi ini idempoten di server).
        """
        item = self._find(notification_id)
        if item is None:
            try:
                result = await self.api.open_notification(notification_id)
            except _FETCH_ERRORS as exc:
                self.error = _error_text(exc)
                return None
            return result.target

        unread_before = self.unread_count
        result = navigation.open_notification(item)
        if result.changed:
            self.unread_count = max(0, self.unread_count - 1)
            # respons polling yang sudah berjalan membawa status lama
            self._guard.invalidate()
            try:
                await self.api.mark_read(notification_id)
            except _FETCH_ERRORS as exc:
                logger.warning("mark read %s failed: %s", notification_id, exc)
                # kembalikan status agar klik berikutnya mengirim ulang
                item.is_read = False
                item.read_at = None
                self.unread_count = unread_before
        return result.target

    async def mark_all_read(self) -> int:
        for item in self.items:
            navigation.open_notification(item)
        self.unread_count = 0
        self._guard.invalidate()
        try:
            return await self.api.mark_all_read()
        except _FETCH_ERRORS as exc:
            self.error = _error_text(exc)
            await self.refresh(silent=True)
            return 0


@dataclass
class PendingMessage:
    """Pesan yang sedang dikirim (tampil optimistis sebelum dikonfirmasi)."""

    local_id: int
    sender_id: int
    recipient_id: int
    content: str
    pending: bool = True


class MessageThreadView(_PollingView):
    def __init__(
        self,
        api: KolabApiClient,
        *,
        user_id: int,
        partner_id: int,
        settings: SyncSettings | None = None,
        poll_interval: float | None = None,
        on_scroll_to_latest: Callable[[], None] | None = None,
    ) -> None:
        settings = settings or api.settings
        self.poll_interval = settings.THREAD_POLL_INTERVAL
        super().__init__(api, poll_interval=poll_interval)
        self.user_id = user_id
        self.partner_id = partner_id
        self.messages: list[MessageRead] = []
        self.pending: list[PendingMessage] = []
        self.draft = ""
        self.scroll_requests = 0
        self._on_scroll_to_latest = on_scroll_to_latest
        self._local_ids = itertools.count(1)

    @property
    def entries(self) -> list[MessageRead | PendingMessage]:
        """Pesan terkonfirmasi diikuti pesan yang masih pending."""
        return [*self.messages, *self.pending]

    def _scroll_to_latest(self) -> None:
        self.scroll_requests += 1
        if self._on_scroll_to_latest is not None:
            self._on_scroll_to_latest()

    async def _fetch(self):
        return await self.api.fetch_thread(self.partner_id)

    def _apply(self, data: list[MessageRead]) -> None:
        grew = len(data) > len(self.messages)
        self.messages = list(data)
        if grew:
            self._scroll_to_latest()

    async def set_partner(self, partner_id: int) -> None:
        if partner_id == self.partner_id:
            return
        self.partner_id = partner_id
        self.messages = []
        self.pending = []
        self._guard.invalidate()
        await self.refresh()

    async def send(self) -> MessageRead | None:
        """
        Kirim draft dua fase. Draft dikosongkan dan entri pending tampil
        segera; jika berhasil, thread diambil ulang secara silent. Jika gagal,
        entri pending dihapus, draft dikembalikan, dan error ditampilkan.

        Bila lawan bicara diganti selama pengiriman, hasilnya tidak lagi
        diterapkan ke view (thread baru sudah diambil oleh `set_partner`).
        """
        original = self.draft
        content = original.strip()
        if not content:
            self.error = "Isi pesan tidak boleh kosong"
            return None

        partner_id = self.partner_id
        entry = PendingMessage(
            local_id=next(self._local_ids),
            sender_id=self.user_id,
            recipient_id=partner_id,
            content=content,
        )
        self.draft = ""
        self.error = None
        self.pending.append(entry)

        try:
            message = await self.api.send_message(partner_id, content)
        except _FETCH_ERRORS as exc:
            self._drop_pending(entry)
            if self.partner_id != partner_id:
                logger.warning("send to %s failed after switch: %s", partner_id, exc)
                return None
            self.draft = original
            self.error = _error_text(exc)
            return None

        self._drop_pending(entry)
        if self.partner_id != partner_id:
            return message
        await self.refresh(silent=True)
        if all(m.id != message.id for m in self.messages):
            self.messages.append(message)
        self._scroll_to_latest()
        return message

    def _drop_pending(self, entry: PendingMessage) -> None:
        # `set_partner` mengganti daftar pending, entri bisa sudah hilang
        if entry in self.pending:
            self.pending.remove(entry)


class InboxView(_PollingView):
    def __init__(
        self,
        api: KolabApiClient,
        *,
        settings: SyncSettings | None = None,
        poll_interval: float | None = None,
    ) -> None:
        settings = settings or api.settings
        self.poll_interval = settings.INBOX_POLL_INTERVAL
        super().__init__(api, poll_interval=poll_interval)
        self.conversations: list[ConversationRead] = []

    async def _fetch(self):
        return await self.api.list_conversations()

    def _apply(self, data: list[ConversationRead]) -> None:
        self.conversations = list(data)
