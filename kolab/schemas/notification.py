from datetime import datetime
from typing import Any

from pydantic import Field, computed_field

from kolab.core.domain.notification_types import (
    NotificationCategory,
    category_of,
    icon_of,
)
from kolab.schemas.base import BaseSchema
from kolab.schemas.pagination import PaginationSchema


class NotificationRead(BaseSchema):
    id: int
    recipient_id: int
    actor_id: int | None = None

    type: str
    title: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)

    is_read: bool = False
    read_at: datetime | None = None
    created_at: datetime

    @computed_field
    @property
    def category(self) -> NotificationCategory:
        return category_of(self.type)

    @computed_field
    @property
    def icon(self) -> str:
        return icon_of(self.type)


class NotificationPage(PaginationSchema[NotificationRead]):
    unread_count: int = Field(0, description="Jumlah notifikasi belum dibaca")


class CountSchema(BaseSchema):
    count: int = Field(..., description="Jumlah baris yang terdampak atau dihitung")


class NotificationOpenResult(BaseSchema):
    notification: NotificationRead
    target: str | None = Field(
        None, description="Path tujuan navigasi, kosong jika tidak ada navigasi"
    )
