from kolab.core.domain.bus import subscribe_background
from kolab.core.domain.dispatcher import deliver
from kolab.core.domain.events.moderation import ContentReportedEvent
from kolab.core.domain.intent import NotificationIntent, UserGroupExceptActor
from kolab.core.domain.notification_types import NotificationType


async def notification_on_content_reported(ev: ContentReportedEvent) -> None:
    """Laporan konten dikirim ke seluruh moderator, kecuali pelapornya."""
    await deliver(
        NotificationIntent(
            event_type=NotificationType.CONTENT_REPORTED,
            actor_id=ev.actor_id,
            target=UserGroupExceptActor(tuple(ev.moderator_ids)),
            title="Content Reported",
            message=f"{ev.reporter_name} reported {ev.content_title}",
            data={
                "reportId": ev.report_id,
                "reporterId": ev.actor_id,
                "targetType": ev.target_type,
                "targetId": ev.target_id,
                "contentUrl": ev.content_url,
            },
        )
    )


def register_event_handlers():
    subscribe_background(ContentReportedEvent, notification_on_content_reported)
