from dataclasses import dataclass

from kolab.core.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class MessageSentEvent(DomainEvent):
    message_id: int
    sender_id: int
    recipient_id: int
    sender_name: str | None = None
