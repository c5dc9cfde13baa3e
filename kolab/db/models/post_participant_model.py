from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from kolab.db.base import Base
from kolab.db.models.mixin import CreateStampMixin


class PostParticipant(Base, CreateStampMixin):
    """
    Partisipan sebuah post komunitas (penulis dan para komentator). Diisi oleh
    modul komunitas; inti notifikasi hanya membacanya.
    """

    __tablename__ = "post_participant"

    post_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False
    )
    """ID post"""

    user_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False
    )
    """ID pengguna yang menulis atau mengomentari post"""
