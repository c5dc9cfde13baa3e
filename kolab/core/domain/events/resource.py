from dataclasses import dataclass

from kolab.core.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ResourceRatedEvent(DomainEvent):
    resource_id: int
    resource_title: str
    owner_id: int
    rating: int
    reviewer_name: str
