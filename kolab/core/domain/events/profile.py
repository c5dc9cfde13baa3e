from dataclasses import dataclass

from kolab.core.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class SkillEndorsedEvent(DomainEvent):
    owner_id: int
    skill_id: int
    skill_name: str
    endorser_name: str


@dataclass(frozen=True, kw_only=True)
class BadgeEarnedEvent(DomainEvent):
    user_id: int
    badge_id: int
    badge_name: str


@dataclass(frozen=True, kw_only=True)
class UserFollowedEvent(DomainEvent):
    followed_id: int
    follower_name: str
