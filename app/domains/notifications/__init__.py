from app.domains.notifications.entities import (
    Notification, NotificationType, render_access_request_message
)
from app.domains.notifications.schemas import (
    AccessRequestCreate, NotificationResponse, InboxResponse
)
from app.domains.notifications.services import NotificationService

__all__ = [
    "Notification", "NotificationType", "render_access_request_message",
    "AccessRequestCreate", "NotificationResponse", "InboxResponse",
    "NotificationService"
]
