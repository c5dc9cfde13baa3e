from kolab.core.domain.bus import subscribe_background
from kolab.core.domain.dispatcher import deliver
from kolab.core.domain.events.resource import ResourceRatedEvent
from kolab.core.domain.intent import NotificationIntent, SingleUser
from kolab.core.domain.notification_types import NotificationType


async def notification_on_resource_rated(ev: ResourceRatedEvent) -> None:
    await deliver(
        NotificationIntent(
            event_type=NotificationType.RESOURCE_RATING,
            actor_id=ev.actor_id,
            target=SingleUser(ev.owner_id),
            title="Resource Rated",
            message=(
                f'{ev.reviewer_name} rated your resource "{ev.resource_title}" '
                f"{ev.rating} stars"
            ),
            data={
                "resourceId": ev.resource_id,
                "resourceTitle": ev.resource_title,
                "rating": ev.rating,
                "reviewerName": ev.reviewer_name,
            },
        )
    )


def register_event_handlers():
    subscribe_background(ResourceRatedEvent, notification_on_resource_rated)
