"""Use case for replacing the content of a notification."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import (
    DirectoryRepository,
    NotificationRepository,
    UserRepository,
)


def update_notification(
    session: Session,
    *,
    notification_id: int,
    subject: str,
    body: str,
    sender_id: int,
    notification_type_id: int,
) -> Notification:
    """Replace subject, body, sender and type of an existing notification.

    Recipients, statuses, expiry and creation time are left untouched.
    """

    repository = NotificationRepository(session)
    current = repository.get(notification_id)
    if current is None:
        raise NotFoundError(f"Notification with id #{notification_id} not found")

    sender = UserRepository(session).get(sender_id)
    if sender is None:
        raise ValidationError(f"Sender #{sender_id} not found")

    notification_type = DirectoryRepository(session).get_notification_type(
        notification_type_id
    )
    if notification_type is None:
        raise ValidationError(f"Notification type #{notification_type_id} not found")

    updated = replace(
        current,
        subject=subject,
        body=body,
        sender_id=sender.id,
        notification_type=notification_type,
    )
    return repository.update(updated)
