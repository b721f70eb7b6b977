"""Use case for creating a notification and delivering it to its recipients."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationStatusCode, User
from app.domain.exceptions import NoRecipientsError, ValidationError
from app.infrastructure.repositories import (
    DirectoryRepository,
    NotificationRepository,
    UserRepository,
)

from .fan_out import fan_out_to_cluster, fan_out_to_users

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedNotification:
    """Outcome of a creation request."""

    notification: Notification
    direct_entries: int
    cluster_entries: int

    @property
    def total_entries(self) -> int:
        return self.direct_entries + self.cluster_entries


def create_notification(
    session: Session,
    *,
    acting_user: User,
    subject: str,
    body: str,
    notification_type_id: int,
    recipient_ids: Sequence[int] = (),
    cluster_id: int = 0,
    sender_id: int | None = None,
    time_to_turn_off: datetime | None = None,
) -> CreatedNotification:
    """Store the notification content and fan it out.

    Direct recipients are written first. When ``cluster_id`` is set and the
    cluster does not exist, :class:`~app.domain.exceptions.NotFoundError`
    propagates; the content record and the direct entries stay committed.
    """

    if not recipient_ids and not cluster_id:
        raise NoRecipientsError()

    if sender_id is None or sender_id == acting_user.id:
        sender = acting_user
    else:
        sender = UserRepository(session).get(sender_id)
        if sender is None:
            raise ValidationError(f"Sender #{sender_id} not found")

    directory = DirectoryRepository(session)
    notification_type = directory.get_notification_type(notification_type_id)
    if notification_type is None:
        raise ValidationError(f"Notification type #{notification_type_id} not found")
    created_status = directory.get_notification_status(NotificationStatusCode.CREATED)
    if created_status is None:  # pragma: no cover - directories are seeded at start-up
        raise RuntimeError("Notification status directory is not initialized")

    notification = NotificationRepository(session).create(
        Notification(
            id=None,
            subject=subject,
            body=body,
            sender_id=sender.id,
            notification_type=notification_type,
            time_to_turn_off=time_to_turn_off,
        )
    )
    logger.info("Notification #%s created by user #%s", notification.id, acting_user.id)

    direct_entries = fan_out_to_users(
        session,
        notification=notification,
        recipient_ids=recipient_ids,
        status=created_status,
        created_by=acting_user.id,
    )

    cluster_entries = 0
    if cluster_id:
        cluster_entries = fan_out_to_cluster(
            session,
            notification=notification,
            cluster_id=cluster_id,
            status=created_status,
        )

    return CreatedNotification(
        notification=notification,
        direct_entries=direct_entries,
        cluster_entries=cluster_entries,
    )


__all__ = ["CreatedNotification", "create_notification"]
