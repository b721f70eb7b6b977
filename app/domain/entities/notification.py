"""Domain entity representing the content of a notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .directory import NotificationType


@dataclass
class Notification:
    """Message authored by a sender and delivered to many recipients."""

    id: int | None
    subject: str
    body: str
    sender_id: int
    notification_type: NotificationType
    time_to_turn_off: datetime | None = None
    created_at: datetime | None = None
    sender_name: str | None = None

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` once ``now`` has passed ``time_to_turn_off``."""

        if self.time_to_turn_off is None:
            return False
        return now >= self.time_to_turn_off


__all__ = ["Notification"]
