from enum import StrEnum

from sqlalchemy import Enum, Integer
from sqlalchemy.orm import Mapped, mapped_column

from kolab.db.base import Base
from kolab.db.models.mixin import TimeStampMixin


class RoleProject(StrEnum):
    OWNER = "owner"
    MEMBER = "member"


class ProjectMember(Base, TimeStampMixin):
    """
    Keanggotaan proyek. Tabel ini dimiliki modul proyek; inti notifikasi hanya
    membacanya untuk menentukan penerima broadcast.
    """

    __tablename__ = "project_member"

    project_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False
    )
    """ID proyek"""

    user_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False
    )
    """ID pengguna"""

    role: Mapped[RoleProject] = mapped_column(
        Enum(RoleProject, name="role_project"), default=RoleProject.MEMBER
    )
    """Role anggota proyek"""
