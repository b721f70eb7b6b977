"""Use cases that move recipient ledger entries between statuses.

Any of the directory statuses may be written over any other; there is no
transition table.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import NotificationStatus, NotificationStatusCode
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import (
    DirectoryRepository,
    NotificationUserRepository,
)

logger = logging.getLogger(__name__)


def _resolve_status(session: Session, status_id: int) -> NotificationStatus:
    status = DirectoryRepository(session).get_notification_status(status_id)
    if status is None:
        raise ValidationError(f"Notification status #{status_id} not found")
    return status


def update_notification_status(
    session: Session,
    *,
    notification_id: int,
    status_id: int,
    user_id: int | None = None,
) -> int:
    """Apply ``status_id`` to the entries of ``notification_id``.

    Every recipient is updated unless ``user_id`` narrows it to one
    recipient's copy. Returns the number of entries written.
    """

    status = _resolve_status(session, status_id)
    ledger = NotificationUserRepository(session)
    if ledger.count_by_notification(notification_id, user_id=user_id) == 0:
        if user_id is None:
            msg = f"Notification with id #{notification_id} not found"
        else:
            msg = f"Notification with id #{notification_id} and user id #{user_id} not found"
        raise NotFoundError(msg)

    updated = ledger.set_status(notification_id, status, user_id=user_id)
    logger.info(
        "Notification #%s status set to %s on %s entries",
        notification_id,
        status.name,
        updated,
    )
    return updated


def mark_all_read(session: Session, *, user_id: int) -> int:
    """Mark every entry addressed to ``user_id`` as read.

    Succeeds without changes when the user has no entries.
    """

    status = _resolve_status(session, NotificationStatusCode.READ)
    updated = NotificationUserRepository(session).set_status_for_user(user_id, status)
    logger.info("Marked %s notifications as read for user #%s", updated, user_id)
    return updated


__all__ = ["mark_all_read", "update_notification_status"]
