from dataclasses import dataclass
from typing import Literal

from kolab.core.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ProjectInviteSentEvent(DomainEvent):
    project_id: int
    project_title: str
    invitee_id: int
    inviter_name: str


@dataclass(frozen=True, kw_only=True)
class ProjectUpdatedEvent(DomainEvent):
    project_id: int
    project_title: str
    updater_name: str


@dataclass(frozen=True, kw_only=True)
class JoinRequestCreatedEvent(DomainEvent):
    project_id: int
    project_title: str
    owner_id: int
    request_id: int
    requester_name: str


@dataclass(frozen=True, kw_only=True)
class JoinRequestAnsweredEvent(DomainEvent):
    project_id: int
    project_title: str
    requester_id: int
    status: Literal["ACCEPTED", "REJECTED"]
