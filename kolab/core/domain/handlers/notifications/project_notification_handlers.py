import logging

from kolab.core.domain.bus import subscribe_background
from kolab.core.domain.dispatcher import deliver
from kolab.core.domain.events.project import (
    JoinRequestAnsweredEvent,
    JoinRequestCreatedEvent,
    ProjectInviteSentEvent,
    ProjectUpdatedEvent,
)
from kolab.core.domain.intent import (
    NotificationIntent,
    ProjectMembersExceptActor,
    SingleUser,
)
from kolab.core.domain.notification_types import NotificationType

logger = logging.getLogger(__name__)


async def notification_on_project_invite(ev: ProjectInviteSentEvent) -> None:
    """Hendel undangan bergabung ke proyek.

    Args:
        ev (ProjectInviteSentEvent): event undangan proyek
    """
    await deliver(
        NotificationIntent(
            event_type=NotificationType.PROJECT_INVITE,
            actor_id=ev.actor_id,
            target=SingleUser(ev.invitee_id),
            title="Project Invitation",
            message=f'{ev.inviter_name} has invited you to join "{ev.project_title}"',
            data={
                "projectId": ev.project_id,
                "projectTitle": ev.project_title,
                "inviterName": ev.inviter_name,
            },
        )
    )


async def notification_on_project_updated(ev: ProjectUpdatedEvent) -> None:
    # anggota dibaca saat dispatch, bukan saat event dibuat
    await deliver(
        NotificationIntent(
            event_type=NotificationType.PROJECT_UPDATE,
            actor_id=ev.actor_id,
            target=ProjectMembersExceptActor(ev.project_id),
            title="Project Updated",
            message=f'{ev.updater_name} updated the project "{ev.project_title}"',
            data={"projectId": ev.project_id, "projectTitle": ev.project_title},
        )
    )


async def notification_on_join_request(ev: JoinRequestCreatedEvent) -> None:
    """Beri tahu pemilik proyek bahwa ada permintaan bergabung."""
    await deliver(
        NotificationIntent(
            event_type=NotificationType.JOIN_REQUEST,
            actor_id=ev.actor_id,
            target=SingleUser(ev.owner_id),
            title="Join Request",
            message=(
                f'{ev.requester_name} wants to join your project "{ev.project_title}"'
            ),
            data={
                "projectId": ev.project_id,
                "projectTitle": ev.project_title,
                "requesterName": ev.requester_name,
                "requestId": ev.request_id,
            },
        )
    )


async def notification_on_join_request_answered(
    ev: JoinRequestAnsweredEvent,
) -> None:
    """Beri tahu pemohon hasil permintaan bergabungnya."""
    await deliver(
        NotificationIntent(
            event_type=NotificationType.JOIN_REQUEST_RESPONSE,
            actor_id=ev.actor_id,
            target=SingleUser(ev.requester_id),
            title="Join Request Response",
            message=(
                f'Your request to join "{ev.project_title}" has been '
                f"{ev.status.lower()}"
            ),
            data={
                "projectId": ev.project_id,
                "projectTitle": ev.project_title,
                "status": ev.status,
            },
        )
    )


def register_event_handlers():
    subscribe_background(ProjectInviteSentEvent, notification_on_project_invite)
    subscribe_background(ProjectUpdatedEvent, notification_on_project_updated)
    subscribe_background(JoinRequestCreatedEvent, notification_on_join_request)
    subscribe_background(
        JoinRequestAnsweredEvent, notification_on_join_request_answered
    )
