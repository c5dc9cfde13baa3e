from kolab.core.domain.handlers.notifications.community_notification_handlers import (
    register_event_handlers as register_community_notification_handlers,
)
from kolab.core.domain.handlers.notifications.message_notification_handlers import (
    register_event_handlers as register_message_notification_handlers,
)
from kolab.core.domain.handlers.notifications.moderation_notification_handlers import (
    register_event_handlers as register_moderation_notification_handlers,
)
from kolab.core.domain.handlers.notifications.profile_notification_handlers import (
    register_event_handlers as register_profile_notification_handlers,
)
from kolab.core.domain.handlers.notifications.project_notification_handlers import (
    register_event_handlers as register_project_notification_handlers,
)
from kolab.core.domain.handlers.notifications.resource_notification_handlers import (
    register_event_handlers as register_resource_notification_handlers,
)

_registered = False


def register_event_handlers():
    global _registered
    if _registered:
        return

    register_project_notification_handlers()
    register_profile_notification_handlers()
    register_resource_notification_handlers()
    register_community_notification_handlers()
    register_moderation_notification_handlers()
    register_message_notification_handlers()
    _registered = True
