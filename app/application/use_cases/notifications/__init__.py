"""Use cases for creating, querying and tracking notifications."""

from .create_notification import CreatedNotification, create_notification
from .delete_notification import delete_notification
from .fan_out import expand_cluster_members, fan_out_to_cluster, fan_out_to_users
from .get_notification import get_notification
from .list_notifications import count_notifications, list_notifications
from .list_user_notifications import count_user_notifications, list_user_notifications
from .update_notification import update_notification
from .update_status import mark_all_read, update_notification_status

__all__ = [
    "CreatedNotification",
    "create_notification",
    "delete_notification",
    "expand_cluster_members",
    "fan_out_to_cluster",
    "fan_out_to_users",
    "get_notification",
    "count_notifications",
    "list_notifications",
    "count_user_notifications",
    "list_user_notifications",
    "update_notification",
    "mark_all_read",
    "update_notification_status",
]
