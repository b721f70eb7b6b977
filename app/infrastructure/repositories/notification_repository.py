"""Persistence helpers for notification content records."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, joinedload

from app.domain.entities import (
    Notification,
    NotificationCriteria,
    NotificationType,
    SortSpec,
)
from app.domain.exceptions import NotFoundError
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

SORTABLE_COLUMNS = {
    "id": NotificationModel.id,
    "created_on": NotificationModel.created_at,
    "subject": NotificationModel.subject,
}


def apply_notification_criteria(query: Query, criteria: NotificationCriteria | None) -> Query:
    """Restrict ``query`` (which must involve ``NotificationModel``) to ``criteria``."""

    if criteria is None:
        return query
    if criteria.text:
        needle = criteria.text.strip().lower()
        if needle:
            query = query.filter(
                or_(
                    func.lower(NotificationModel.subject).contains(needle, autoescape=True),
                    func.lower(NotificationModel.body).contains(needle, autoescape=True),
                )
            )
    if criteria.notification_type_id is not None:
        query = query.filter(
            NotificationModel.notification_type_id == criteria.notification_type_id
        )
    return query


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def exists(self, notification_id: int) -> bool:
        found = (
            self.session.query(NotificationModel.id)
            .filter(NotificationModel.id == notification_id)
            .first()
        )
        return found is not None

    def update(self, notification: Notification) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id #{notification.id} not found"
            raise NotFoundError(msg)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, notification_id: int) -> bool:
        """Delete a notification together with its recipient ledger rows.

        Returns ``False`` when the notification does not exist.
        """

        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    def list(
        self,
        criteria: NotificationCriteria | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = self._filtered_query(criteria).options(
            joinedload(NotificationModel.sender),
            joinedload(NotificationModel.notification_type),
        )
        query = query.order_by(*self._order_by(sort))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(self, criteria: NotificationCriteria | None = None) -> int:
        total = self._filtered_query(criteria, columns=(func.count(NotificationModel.id),))
        return int(total.scalar() or 0)

    def _filtered_query(
        self,
        criteria: NotificationCriteria | None,
        *,
        columns: tuple = (),
    ) -> Query:
        query = self.session.query(*columns) if columns else self.session.query(NotificationModel)
        if columns:
            query = query.select_from(NotificationModel)
        query = apply_notification_criteria(query, criteria)
        if criteria is not None:
            if criteria.date_from is not None:
                query = query.filter(
                    NotificationModel.created_at >= ensure_app_naive_datetime(criteria.date_from)
                )
            if criteria.date_to is not None:
                query = query.filter(
                    NotificationModel.created_at <= ensure_app_naive_datetime(criteria.date_to)
                )
        return query

    @staticmethod
    def _order_by(sort: SortSpec | None) -> list:
        sort = sort or SortSpec()
        column = SORTABLE_COLUMNS.get(sort.field, NotificationModel.id)
        ordering = [column.desc() if sort.descending else column.asc()]
        if column is not NotificationModel.id:
            ordering.append(NotificationModel.id.asc())
        return ordering

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
            model.time_to_turn_off = ensure_app_naive_datetime(notification.time_to_turn_off)
        model.subject = notification.subject
        model.body = notification.body
        model.sender_id = notification.sender_id
        model.notification_type_id = notification.notification_type.id

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        notification_type = model.notification_type
        return Notification(
            id=model.id,
            subject=model.subject,
            body=model.body,
            sender_id=model.sender_id,
            notification_type=NotificationType(
                id=notification_type.id, name=notification_type.name
            ),
            time_to_turn_off=ensure_app_timezone(model.time_to_turn_off),
            created_at=ensure_app_timezone(model.created_at),
            sender_name=model.sender.name if model.sender is not None else None,
        )


__all__ = ["NotificationRepository", "SORTABLE_COLUMNS", "apply_notification_criteria"]
