from kolab.core.domain.bus import subscribe_background
from kolab.core.domain.dispatcher import deliver
from kolab.core.domain.events.profile import (
    BadgeEarnedEvent,
    SkillEndorsedEvent,
    UserFollowedEvent,
)
from kolab.core.domain.intent import NotificationIntent, SingleUser
from kolab.core.domain.notification_types import NotificationType


async def notification_on_skill_endorsed(ev: SkillEndorsedEvent) -> None:
    await deliver(
        NotificationIntent(
            event_type=NotificationType.SKILL_ENDORSEMENT,
            actor_id=ev.actor_id,
            target=SingleUser(ev.owner_id),
            title="Skill Endorsed",
            message=f"{ev.endorser_name} has endorsed your {ev.skill_name} skill",
            data={
                # userId menunjuk ke profil pemberi endorse
                "userId": ev.actor_id,
                "skillId": ev.skill_id,
                "skillName": ev.skill_name,
                "endorserName": ev.endorser_name,
            },
        )
    )


async def notification_on_badge_earned(ev: BadgeEarnedEvent) -> None:
    await deliver(
        NotificationIntent(
            event_type=NotificationType.BADGE_EARNED,
            actor_id=ev.actor_id,
            target=SingleUser(ev.user_id),
            title="Badge Earned!",
            message=f'Congratulations! You\'ve earned the "{ev.badge_name}" badge',
            data={"badgeId": ev.badge_id, "badgeName": ev.badge_name},
        )
    )


async def notification_on_user_followed(ev: UserFollowedEvent) -> None:
    await deliver(
        NotificationIntent(
            event_type=NotificationType.FOLLOW,
            actor_id=ev.actor_id,
            target=SingleUser(ev.followed_id),
            title="New Follower",
            message=f"{ev.follower_name} started following you",
            data={"userId": ev.actor_id, "followerName": ev.follower_name},
        )
    )


def register_event_handlers():
    subscribe_background(SkillEndorsedEvent, notification_on_skill_endorsed)
    subscribe_background(BadgeEarnedEvent, notification_on_badge_earned)
    subscribe_background(UserFollowedEvent, notification_on_user_followed)
