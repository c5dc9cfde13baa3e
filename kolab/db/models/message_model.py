from sqlalchemy import CheckConstraint, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from kolab.db.base import Base
from kolab.db.models.mixin import CreateStampMixin


class Message(Base, CreateStampMixin):
    __tablename__ = "message"
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="no_self_message"),
        Index("ix_message_pair", "sender_id", "recipient_id", "created_at", "id"),
        Index("ix_message_recipient", "recipient_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, nullable=False
    )
    """ID pesan unik."""

    sender_id: Mapped[int] = mapped_column(Integer, nullable=False)
    """ID pengguna pengirim pesan."""

    recipient_id: Mapped[int] = mapped_column(Integer, nullable=False)
    """ID pengguna penerima pesan."""

    content: Mapped[str] = mapped_column(Text, nullable=False)
    """Isi pesan (sudah di-trim, tidak pernah kosong)."""
