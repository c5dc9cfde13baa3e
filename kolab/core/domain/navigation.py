"""Reducer murni untuk interaksi "buka notifikasi"."""

import dataclasses
import datetime
from typing import Generic, Protocol, TypeVar

from kolab.core.domain.notification_types import (
    ProfilePayload,
    ProjectPayload,
    ReportPayload,
    ResourcePayload,
    parse_payload,
)


class Openable(Protocol):
    type: str
    data: dict
    is_read: bool
    read_at: datetime.datetime | None


T = TypeVar("T", bound=Openable)


@dataclasses.dataclass(frozen=True)
class OpenResult(Generic[T]):
    notification: T
    target: str | None
    changed: bool


def resolve_target(type_: str | None, data: dict | None) -> str | None:
    """
    Tentukan path tujuan navigasi. Aturan pertama yang cocok menang:

    1. `link` eksplisit
    2. proyek -> /projects/{projectId}
    3. resource -> /resources/{resourceId}
    4. laporan konten -> contentUrl
    5. profil -> /profile/{userId}
    6. tidak ada navigasi
    """
    payload = parse_payload(type_, data)

    if payload.link:
        return payload.link

    if isinstance(payload, ProjectPayload) and payload.project_id:
        return f"/projects/{payload.project_id}"
    if isinstance(payload, ResourcePayload) and payload.resource_id:
        return f"/resources/{payload.resource_id}"
    if isinstance(payload, ReportPayload) and payload.content_url:
        return payload.content_url
    if isinstance(payload, ProfilePayload) and payload.user_id:
        return f"/profile/{payload.user_id}"
    return None


def open_notification(
    notification: T, *, now: datetime.datetime | None = None
) -> OpenResult[T]:
    """
    Tandai notifikasi sebagai dibaca (no-op bila sudah dibaca) lalu hitung
    tujuan navigasinya. Objek masukan dimutasi langsung supaya bisa dipakai
    untuk model ORM maupun state lokal di klien.
    """
    changed = False
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = now or datetime.datetime.now(datetime.timezone.utc)
        changed = True

    return OpenResult(
        notification=notification,
        target=resolve_target(notification.type, notification.data),
        changed=changed,
    )
