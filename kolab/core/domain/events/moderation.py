from dataclasses import dataclass, field

from kolab.core.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ContentReportedEvent(DomainEvent):
    report_id: int
    reporter_name: str
    target_type: str
    target_id: int
    content_title: str
    content_url: str
    moderator_ids: list[int] = field(default_factory=list)
