from kolab.core.domain.bus import subscribe_background
from kolab.core.domain.dispatcher import deliver
from kolab.core.domain.events.community import (
    CommentPostedEvent,
    PostLikedEvent,
    ReplyPostedEvent,
)
from kolab.core.domain.intent import (
    NotificationIntent,
    PostParticipantsExceptActor,
    SingleUser,
)
from kolab.core.domain.notification_types import NotificationType


def _post_link(post_id: int) -> str:
    return f"/community/{post_id}"


async def notification_on_comment_posted(ev: CommentPostedEvent) -> None:
    """Komentar baru dikirim ke semua partisipan post kecuali komentatornya."""
    await deliver(
        NotificationIntent(
            event_type=NotificationType.COMMENT,
            actor_id=ev.actor_id,
            target=PostParticipantsExceptActor(ev.post_id),
            title="New Comment",
            message=f'{ev.commenter_name} commented on "{ev.post_title}"',
            data={
                "postId": ev.post_id,
                "postTitle": ev.post_title,
                "commentId": ev.comment_id,
                "commenterName": ev.commenter_name,
                "link": _post_link(ev.post_id),
            },
        )
    )


async def notification_on_reply_posted(ev: ReplyPostedEvent) -> None:
    await deliver(
        NotificationIntent(
            event_type=NotificationType.REPLY,
            actor_id=ev.actor_id,
            target=SingleUser(ev.parent_author_id),
            title="New Reply",
            message=f"{ev.replier_name} replied to your comment",
            data={
                "postId": ev.post_id,
                "commentId": ev.comment_id,
                "link": _post_link(ev.post_id),
            },
        )
    )


async def notification_on_post_liked(ev: PostLikedEvent) -> None:
    await deliver(
        NotificationIntent(
            event_type=NotificationType.LIKE,
            actor_id=ev.actor_id,
            target=SingleUser(ev.author_id),
            title="Post Liked",
            message=f'{ev.liker_name} liked your post "{ev.post_title}"',
            data={
                "postId": ev.post_id,
                "postTitle": ev.post_title,
                "likerName": ev.liker_name,
                "link": _post_link(ev.post_id),
            },
        )
    )


def register_event_handlers():
    subscribe_background(CommentPostedEvent, notification_on_comment_posted)
    subscribe_background(ReplyPostedEvent, notification_on_reply_posted)
    subscribe_background(PostLikedEvent, notification_on_post_liked)
