"""Directory values for notification types and statuses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class NotificationTypeCode(IntEnum):
    """Known notification type identifiers."""

    SYSTEM = 1
    NEWS = 2


class NotificationStatusCode(IntEnum):
    """Delivery/read status identifiers.

    Every value may be written over any other one; fan-out always starts
    entries at ``CREATED`` and ``DISABLED`` is reachable from any state.
    """

    UNKNOWN = 1
    CREATED = 2
    SENT = 3
    READ = 4
    DISABLED = 5


NOTIFICATION_TYPE_NAMES: dict[NotificationTypeCode, str] = {
    NotificationTypeCode.SYSTEM: "System",
    NotificationTypeCode.NEWS: "News",
}

NOTIFICATION_STATUS_NAMES: dict[NotificationStatusCode, str] = {
    NotificationStatusCode.UNKNOWN: "Unknown",
    NotificationStatusCode.CREATED: "Created",
    NotificationStatusCode.SENT: "Sent",
    NotificationStatusCode.READ: "Read",
    NotificationStatusCode.DISABLED: "Disabled",
}


@dataclass(frozen=True)
class NotificationType:
    """Canonical notification type record."""

    id: int
    name: str


@dataclass(frozen=True)
class NotificationStatus:
    """Canonical notification status record."""

    id: int
    name: str


__all__ = [
    "NOTIFICATION_STATUS_NAMES",
    "NOTIFICATION_TYPE_NAMES",
    "NotificationStatus",
    "NotificationStatusCode",
    "NotificationType",
    "NotificationTypeCode",
]
