"""Use case for deleting a notification."""

import logging

from sqlalchemy.orm import Session

from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def delete_notification(session: Session, notification_id: int) -> None:
    """Delete the notification and, by cascade, every recipient entry."""

    if not NotificationRepository(session).delete(notification_id):
        raise NotFoundError(f"Notification with id #{notification_id} not found")
    logger.info("Notification #%s deleted", notification_id)
