from typing import Generic, TypeVar

from pydantic import Field

from kolab.schemas.base import BaseSchema

_T = TypeVar("_T")


class PaginationSchema(BaseSchema, Generic[_T]):
    """Satu halaman hasil, dengan tautan ke halaman sebelum dan sesudahnya."""

    count: int = Field(..., description="Jumlah seluruh item yang cocok")
    items: list[_T]
    curr_page: int
    total_page: int
    next_page: str | None = Field(None, description="URL halaman berikutnya")
    previous_page: str | None = Field(None, description="URL halaman sebelumnya")
    per_page: int | None = None
    total_items: int | None = None
    has_next: bool = False
    has_prev: bool = False
