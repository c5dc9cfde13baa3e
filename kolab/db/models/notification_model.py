import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kolab.db.base import Base
from kolab.db.models.mixin import CreateStampMixin


class Notification(Base, CreateStampMixin):
    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_feed", "recipient_id", "created_at", "id"),
        Index("ix_notification_recipient_unread", "recipient_id", "is_read"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True, nullable=False
    )
    """ID notifikasi unik."""

    recipient_id: Mapped[int] = mapped_column(Integer, nullable=False)
    """ID pengguna penerima notifikasi."""

    actor_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, default=None
    )
    """
    ID pengguna yang melakukan aksi pemicu notifikasi. Kosong untuk notifikasi
    sistem (mis. lencana).
    """

    type: Mapped[str] = mapped_column(String(50), nullable=False)
    """
    Tipe notifikasi. Disimpan sebagai string agar tipe yang belum dikenal tetap
    bisa dibaca (lihat NotificationType).
    """

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    """Judul notifikasi, tidak berubah setelah dibuat."""

    message: Mapped[str] = mapped_column(Text, nullable=False)
    """Pesan notifikasi, tidak berubah setelah dibuat."""

    data: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    """Payload kontekstual (projectId, resourceId, userId, contentUrl, link)."""

    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    """Status apakah notifikasi sudah dibaca atau belum."""

    read_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    """Waktu ketika notifikasi dibaca."""
