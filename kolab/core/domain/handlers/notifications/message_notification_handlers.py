from kolab.core.domain.bus import subscribe_background
from kolab.core.domain.dispatcher import deliver
from kolab.core.domain.events.message import MessageSentEvent
from kolab.core.domain.intent import NotificationIntent, SingleUser
from kolab.core.domain.notification_types import NotificationType


async def notification_on_message_sent(ev: MessageSentEvent) -> None:
    sender = ev.sender_name or "Someone"
    await deliver(
        NotificationIntent(
            event_type=NotificationType.MESSAGE,
            actor_id=ev.sender_id,
            target=SingleUser(ev.recipient_id),
            title="New direct message",
            message=f"You have a new message from {sender}",
            data={
                "messageId": ev.message_id,
                "userId": ev.sender_id,
                "link": f"/messages/{ev.sender_id}",
            },
        )
    )


def register_event_handlers():
    subscribe_background(MessageSentEvent, notification_on_message_sent)
