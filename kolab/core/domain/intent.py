"""
Intent notifikasi: deskripsi terstruktur "sesuatu terjadi dan pengguna tertentu
perlu diberi tahu", terpisah dari cara pengirimannya.
"""

from dataclasses import dataclass, field
from typing import Any

from kolab.core.domain.event import DomainEvent
from kolab.core.domain.notification_types import NotificationType


@dataclass(frozen=True)
class SingleUser:
    user_id: int


@dataclass(frozen=True)
class ProjectMembersExceptActor:
    project_id: int


@dataclass(frozen=True)
class PostParticipantsExceptActor:
    post_id: int


@dataclass(frozen=True)
class UserGroupExceptActor:
    """Daftar penerima eksplisit, mis. seluruh moderator."""

    user_ids: tuple[int, ...]


Target = (
    SingleUser
    | ProjectMembersExceptActor
    | PostParticipantsExceptActor
    | UserGroupExceptActor
)


@dataclass(frozen=True, kw_only=True)
class NotificationIntent(DomainEvent):
    event_type: NotificationType
    target: Target
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_broadcast(self) -> bool:
        return not isinstance(self.target, SingleUser)
