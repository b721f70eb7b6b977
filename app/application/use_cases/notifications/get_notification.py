"""Use case for retrieving a single notification."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository


def get_notification(session: Session, notification_id: int) -> Notification:
    """Return the requested notification or raise an error if it does not exist."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFoundError(f"Notification with id #{notification_id} not found")
    return notification
