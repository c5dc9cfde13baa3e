from fastapi import APIRouter, Depends

from kolab.api.dependencies.events import inject_event_background
from kolab.core.config import settings

from .routes import message_route as message
from .routes import notification_route as notification

# url prefix for all routes ex: /v1
router = APIRouter(
    prefix=settings.version_url, dependencies=[Depends(inject_event_background)]
)
router.include_router(notification.router)
router.include_router(message.router)
