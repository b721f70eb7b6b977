"""Domain entity for the per-recipient ledger of a notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .directory import NotificationStatus
from .notification import Notification


@dataclass
class NotificationUser:
    """Delivery/read status of one notification for one recipient."""

    id: int | None
    notification_id: int
    user_id: int
    notification_status: NotificationStatus
    created_by: int | None = None
    created_at: datetime | None = None


@dataclass
class UserNotification:
    """A ledger entry joined to the notification content it refers to."""

    entry: NotificationUser
    notification: Notification


__all__ = ["NotificationUser", "UserNotification"]
