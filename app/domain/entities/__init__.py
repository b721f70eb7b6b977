"""Domain entities exposed by the application."""

from .cluster import Cluster, Department, DepartmentMembership
from .directory import (
    NOTIFICATION_STATUS_NAMES,
    NOTIFICATION_TYPE_NAMES,
    NotificationStatus,
    NotificationStatusCode,
    NotificationType,
    NotificationTypeCode,
)
from .notification import Notification
from .notification_user import NotificationUser, UserNotification
from .query import (
    MAX_RECORD_ID,
    NotificationCriteria,
    PageRequest,
    PagedResult,
    SortSpec,
    UserNotificationCriteria,
)
from .role import (
    DEFAULT_ROLES,
    ROLE_SYSTEM_ADMIN,
    ROLE_SYSTEM_OPERATOR,
    ROLE_USER,
    Role,
)
from .user import User

__all__ = [
    "Cluster",
    "Department",
    "DepartmentMembership",
    "NOTIFICATION_STATUS_NAMES",
    "NOTIFICATION_TYPE_NAMES",
    "NotificationStatus",
    "NotificationStatusCode",
    "NotificationType",
    "NotificationTypeCode",
    "Notification",
    "NotificationUser",
    "UserNotification",
    "MAX_RECORD_ID",
    "NotificationCriteria",
    "PageRequest",
    "PagedResult",
    "SortSpec",
    "UserNotificationCriteria",
    "DEFAULT_ROLES",
    "ROLE_SYSTEM_ADMIN",
    "ROLE_SYSTEM_OPERATOR",
    "ROLE_USER",
    "Role",
    "User",
]
