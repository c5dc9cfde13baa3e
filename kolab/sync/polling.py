import asyncio
import contextlib
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class SequenceGuard:
    """
    Penjaga urutan respons. Setiap fetch mengambil tiket; respons hanya boleh
    diterapkan jika tiketnya lebih baru dari tiket terakhir yang diterapkan,
    sehingga respons lama yang datang terlambat tidak menimpa data baru.
    """

    def __init__(self) -> None:
        self._issued = 0
        self._applied = 0

    @property
    def last_applied(self) -> int:
        return self._applied

    def next_ticket(self) -> int:
        self._issued += 1
        return self._issued

    def try_apply(self, ticket: int) -> bool:
        if ticket <= self._applied:
            return False
        self._applied = ticket
        return True

    def invalidate(self) -> None:
        """Buang semua fetch yang sedang berjalan (dipakai setelah mutasi lokal)."""
        self._applied = self.next_ticket()


class PollingTask:
    """Task periodik yang dapat dibatalkan dan dimiliki oleh satu view."""

    def __init__(
        self,
        callback: Callable[[], Awaitable[object]],
        interval: float,
        *,
        name: str = "poll",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval polling harus lebih dari 0")
        self._callback = callback
        self.interval = interval
        self.name = name
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "PollingTask":
        if not self.running:
            self._task = asyncio.create_task(self._run(), name=self.name)
        return self

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._callback()
            except Exception:
                # satu tick yang gagal tidak boleh menghentikan loop
                logger.exception("polling.tick.error %s", self.name)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
