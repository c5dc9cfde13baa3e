from pydantic import Field

from kolab.schemas.base import BaseSchema


class UserBase(BaseSchema):
    id: int = Field(..., description="ID pengguna")
    name: str = Field(..., description="Nama pengguna")
    email: str | None = Field(None, description="Email pengguna")
    avatar_url: str | None = Field(None, description="URL foto profil pengguna")


class UserSnapshot(BaseSchema):
    """Cuplikan tampilan pengguna yang digabung saat membaca pesan."""

    id: int = Field(..., description="ID pengguna")
    name: str | None = Field(None, description="Nama pengguna")
    avatar_url: str | None = Field(None, description="URL foto profil pengguna")
