from .auth import Token
from .notification import (
    CountRead,
    NotificationCreate,
    NotificationCreated,
    NotificationRead,
    NotificationStatusUpdate,
    NotificationUpdate,
    PageResponse,
    UserNotificationRead,
)

__all__ = [
    "CountRead",
    "NotificationCreate",
    "NotificationCreated",
    "NotificationRead",
    "NotificationStatusUpdate",
    "NotificationUpdate",
    "PageResponse",
    "Token",
    "UserNotificationRead",
]
