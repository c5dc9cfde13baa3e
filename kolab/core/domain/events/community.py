from dataclasses import dataclass

from kolab.core.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CommentPostedEvent(DomainEvent):
    post_id: int
    post_title: str
    comment_id: int
    commenter_name: str


@dataclass(frozen=True, kw_only=True)
class ReplyPostedEvent(DomainEvent):
    post_id: int
    comment_id: int
    parent_author_id: int
    replier_name: str


@dataclass(frozen=True, kw_only=True)
class PostLikedEvent(DomainEvent):
    post_id: int
    post_title: str
    author_id: int
    liker_name: str
