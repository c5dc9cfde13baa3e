"""
Tipe notifikasi, kategori, dan payload ter-tag per kategori.

Kolom `type` pada tabel notifikasi disimpan sebagai string biasa sehingga
pembaca harus aman terhadap nilai yang tidak dikenal: nilai seperti itu
dipetakan ke kategori GENERIC (ikon umum, tanpa navigasi).
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping


class NotificationType(StrEnum):
    PROJECT_INVITE = "PROJECT_INVITE"
    PROJECT_UPDATE = "PROJECT_UPDATE"
    JOIN_REQUEST = "JOIN_REQUEST"
    JOIN_REQUEST_RESPONSE = "JOIN_REQUEST_RESPONSE"
    SKILL_ENDORSEMENT = "SKILL_ENDORSEMENT"
    BADGE_EARNED = "BADGE_EARNED"
    RESOURCE_RATING = "RESOURCE_RATING"
    COMMENT = "COMMENT"
    REPLY = "REPLY"
    LIKE = "LIKE"
    CONTENT_REPORTED = "CONTENT_REPORTED"
    FOLLOW = "FOLLOW"
    MESSAGE = "MESSAGE"

    @classmethod
    def parse(cls, value: str | None) -> "NotificationType | None":
        """Kembalikan tipe yang dikenal atau None untuk string asing."""
        try:
            return cls(value)
        except ValueError:
            return None


class NotificationCategory(StrEnum):
    PROJECT = "project"
    RESOURCE = "resource"
    MODERATION = "moderation"
    PROFILE = "profile"
    GENERIC = "generic"


CATEGORY_BY_TYPE: dict[NotificationType, NotificationCategory] = {
    NotificationType.PROJECT_INVITE: NotificationCategory.PROJECT,
    NotificationType.PROJECT_UPDATE: NotificationCategory.PROJECT,
    NotificationType.JOIN_REQUEST: NotificationCategory.PROJECT,
    NotificationType.JOIN_REQUEST_RESPONSE: NotificationCategory.PROJECT,
    NotificationType.RESOURCE_RATING: NotificationCategory.RESOURCE,
    NotificationType.CONTENT_REPORTED: NotificationCategory.MODERATION,
    NotificationType.SKILL_ENDORSEMENT: NotificationCategory.PROFILE,
    NotificationType.FOLLOW: NotificationCategory.PROFILE,
}

ICON_BY_TYPE: dict[NotificationType, str] = {
    NotificationType.PROJECT_INVITE: "folder-plus",
    NotificationType.PROJECT_UPDATE: "star",
    NotificationType.JOIN_REQUEST: "user-plus",
    NotificationType.JOIN_REQUEST_RESPONSE: "user-check",
    NotificationType.SKILL_ENDORSEMENT: "award",
    NotificationType.BADGE_EARNED: "medal",
    NotificationType.RESOURCE_RATING: "star",
    NotificationType.COMMENT: "message-circle",
    NotificationType.REPLY: "message-circle",
    NotificationType.LIKE: "heart",
    NotificationType.CONTENT_REPORTED: "flag",
    NotificationType.FOLLOW: "users",
    NotificationType.MESSAGE: "mail",
}

GENERIC_ICON = "bell"


def category_of(type_: str | None) -> NotificationCategory:
    known = NotificationType.parse(type_)
    if known is None:
        return NotificationCategory.GENERIC
    return CATEGORY_BY_TYPE.get(known, NotificationCategory.GENERIC)


def icon_of(type_: str | None) -> str:
    known = NotificationType.parse(type_)
    if known is None:
        return GENERIC_ICON
    return ICON_BY_TYPE.get(known, GENERIC_ICON)


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------


_OPAQUE_ID = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_id(value: Any) -> int | str | None:
    """
    Id numerik positif menjadi int; id string opak (mis. UUID) diterima bila
    berupa satu segmen path. Selain itu (bool, <= 0, mengandung `/` atau
    spasi) dianggap tidak ada.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value.isdigit():
        return int(value) or None
    if _OPAQUE_ID.fullmatch(value):
        return value
    return None


def _as_path(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@dataclass(frozen=True)
class GenericPayload:
    link: str | None = None


@dataclass(frozen=True)
class ProjectPayload(GenericPayload):
    project_id: int | str | None = None


@dataclass(frozen=True)
class ResourcePayload(GenericPayload):
    resource_id: int | str | None = None


@dataclass(frozen=True)
class ReportPayload(GenericPayload):
    content_url: str | None = None


@dataclass(frozen=True)
class ProfilePayload(GenericPayload):
    user_id: int | str | None = None


NotificationPayload = (
    ProjectPayload | ResourcePayload | ReportPayload | ProfilePayload | GenericPayload
)


def parse_payload(type_: str | None, data: Any) -> NotificationPayload:
    """
    Parse `data` notifikasi menjadi payload sesuai kategori tipe.

    Kunci camelCase (format asli dari produsen) maupun snake_case diterima.
    Data yang bukan mapping atau nilai yang rusak diperlakukan sebagai
    "tidak ada", tidak pernah melempar exception.
    """
    if not isinstance(data, Mapping):
        data = {}

    link = _as_path(data.get("link"))
    category = category_of(type_)

    if category is NotificationCategory.PROJECT:
        return ProjectPayload(
            link=link, project_id=_as_id(_pick(data, "projectId", "project_id"))
        )
    if category is NotificationCategory.RESOURCE:
        return ResourcePayload(
            link=link, resource_id=_as_id(_pick(data, "resourceId", "resource_id"))
        )
    if category is NotificationCategory.MODERATION:
        return ReportPayload(
            link=link, content_url=_as_path(_pick(data, "contentUrl", "content_url"))
        )
    if category is NotificationCategory.PROFILE:
        return ProfilePayload(
            link=link, user_id=_as_id(_pick(data, "userId", "user_id"))
        )
    return GenericPayload(link=link)
