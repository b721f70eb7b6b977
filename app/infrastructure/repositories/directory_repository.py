"""Lookup of notification type and status directory entries."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy.orm import Session

from app.domain.entities import NotificationStatus, NotificationType
from app.infrastructure.models import NotificationStatusModel, NotificationTypeModel


class DirectoryRepository:
    """Resolve small integer codes to canonical directory records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_notification_type(self, type_id: int) -> NotificationType | None:
        model = self.session.get(NotificationTypeModel, type_id)
        return self._type_to_entity(model) if model else None

    def get_notification_status(self, status_id: int) -> NotificationStatus | None:
        model = self.session.get(NotificationStatusModel, status_id)
        return self._status_to_entity(model) if model else None

    def ensure_entries(
        self,
        *,
        types: Mapping[int, str],
        statuses: Mapping[int, str],
    ) -> None:
        """Insert the given directory entries that are not stored yet."""

        for type_id, name in types.items():
            if self.session.get(NotificationTypeModel, type_id) is None:
                self.session.add(NotificationTypeModel(id=type_id, name=name))
        for status_id, name in statuses.items():
            if self.session.get(NotificationStatusModel, status_id) is None:
                self.session.add(NotificationStatusModel(id=status_id, name=name))
        self.session.commit()

    @staticmethod
    def _type_to_entity(model: NotificationTypeModel) -> NotificationType:
        return NotificationType(id=model.id, name=model.name)

    @staticmethod
    def _status_to_entity(model: NotificationStatusModel) -> NotificationStatus:
        return NotificationStatus(id=model.id, name=model.name)


__all__ = ["DirectoryRepository"]
