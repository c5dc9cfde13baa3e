import datetime
from dataclasses import dataclass, field


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Fakta yang sudah terjadi di modul lain (proyek, komunitas, moderasi, pesan)
    dan menjadi sumber notifikasi. Event bersifat immutable.
    """

    actor_id: int | None = None
    """Pengguna yang memicu event. Kosong untuk event sistem."""

    occurred_on: datetime.datetime = field(default_factory=_utc_now)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def describe(self) -> str:
        """Ringkasan singkat untuk log."""
        actor = self.actor_id if self.actor_id is not None else "system"
        return f"{self.name}(actor={actor})"
