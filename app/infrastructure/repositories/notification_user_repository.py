"""Persistence helpers for the notification recipient ledger."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, contains_eager, joinedload

from app.domain.entities import (
    NotificationStatus,
    NotificationUser,
    SortSpec,
    UserNotification,
    UserNotificationCriteria,
)
from app.infrastructure.models import NotificationModel, NotificationUserModel
from app.infrastructure.repositories.notification_repository import (
    NotificationRepository,
    apply_notification_criteria,
)
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

SORTABLE_COLUMNS = {
    "id": NotificationModel.id,
    "created_on": NotificationUserModel.created_at,
    "subject": NotificationModel.subject,
    "status": NotificationUserModel.notification_status_id,
}


class NotificationUserRepository:
    """Store and query per-recipient :class:`NotificationUser` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: NotificationUser) -> NotificationUser:
        model = NotificationUserModel()
        model.notification_id = entry.notification_id
        model.user_id = entry.user_id
        model.notification_status_id = entry.notification_status.id
        model.created_by = entry.created_by
        model.created_at = (
            ensure_app_naive_datetime(entry.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_by_notification(
        self, notification_id: int, *, user_id: int | None = None
    ) -> Sequence[NotificationUser]:
        query = self.session.query(NotificationUserModel).filter(
            NotificationUserModel.notification_id == notification_id
        )
        if user_id is not None:
            query = query.filter(NotificationUserModel.user_id == user_id)
        query = query.order_by(NotificationUserModel.id)
        return [self._to_entity(model) for model in query.all()]

    def count_by_notification(
        self, notification_id: int, *, user_id: int | None = None
    ) -> int:
        query = self.session.query(func.count(NotificationUserModel.id)).filter(
            NotificationUserModel.notification_id == notification_id
        )
        if user_id is not None:
            query = query.filter(NotificationUserModel.user_id == user_id)
        return int(query.scalar() or 0)

    def set_status(
        self,
        notification_id: int,
        status: NotificationStatus,
        *,
        user_id: int | None = None,
    ) -> int:
        """Write ``status`` on every matching entry and return how many changed."""

        query = self.session.query(NotificationUserModel).filter(
            NotificationUserModel.notification_id == notification_id
        )
        if user_id is not None:
            query = query.filter(NotificationUserModel.user_id == user_id)
        updated = query.update(
            {NotificationUserModel.notification_status_id: status.id},
            synchronize_session=False,
        )
        self.session.commit()
        return int(updated or 0)

    def set_status_for_user(self, user_id: int, status: NotificationStatus) -> int:
        updated = (
            self.session.query(NotificationUserModel)
            .filter(NotificationUserModel.user_id == user_id)
            .filter(NotificationUserModel.notification_status_id != status.id)
            .update(
                {NotificationUserModel.notification_status_id: status.id},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    def list_for_user(
        self,
        user_id: int,
        criteria: UserNotificationCriteria | None = None,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[UserNotification]:
        query = self._user_query(user_id, criteria).options(
            contains_eager(NotificationUserModel.notification).joinedload(
                NotificationModel.sender
            ),
            contains_eager(NotificationUserModel.notification).joinedload(
                NotificationModel.notification_type
            ),
            joinedload(NotificationUserModel.notification_status),
        )
        query = query.order_by(*self._order_by(sort))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [
            UserNotification(
                entry=self._to_entity(model),
                notification=NotificationRepository._to_entity(model.notification),
            )
            for model in query.all()
        ]

    def count_for_user(
        self, user_id: int, criteria: UserNotificationCriteria | None = None
    ) -> int:
        query = self._user_query(
            user_id, criteria, columns=(func.count(NotificationUserModel.id),)
        )
        return int(query.scalar() or 0)

    def _user_query(
        self,
        user_id: int,
        criteria: UserNotificationCriteria | None,
        *,
        columns: tuple = (),
    ) -> Query:
        if columns:
            query = self.session.query(*columns).select_from(NotificationUserModel)
        else:
            query = self.session.query(NotificationUserModel)
        query = query.join(
            NotificationModel, NotificationUserModel.notification_id == NotificationModel.id
        ).filter(NotificationUserModel.user_id == user_id)
        query = apply_notification_criteria(query, criteria)
        if criteria is None:
            return query
        if criteria.notification_status_id is not None:
            query = query.filter(
                NotificationUserModel.notification_status_id
                == criteria.notification_status_id
            )
        if criteria.date_from is not None:
            query = query.filter(
                NotificationUserModel.created_at
                >= ensure_app_naive_datetime(criteria.date_from)
            )
        if criteria.date_to is not None:
            query = query.filter(
                NotificationUserModel.created_at <= ensure_app_naive_datetime(criteria.date_to)
            )
        return query

    @staticmethod
    def _order_by(sort: SortSpec | None) -> list:
        sort = sort or SortSpec()
        column = SORTABLE_COLUMNS.get(sort.field, NotificationModel.id)
        ordering = [column.desc() if sort.descending else column.asc()]
        ordering.append(NotificationUserModel.id.asc())
        return ordering

    @staticmethod
    def _to_entity(model: NotificationUserModel) -> NotificationUser:
        status = model.notification_status
        return NotificationUser(
            id=model.id,
            notification_id=model.notification_id,
            user_id=model.user_id,
            notification_status=NotificationStatus(id=status.id, name=status.name),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationUserRepository", "SORTABLE_COLUMNS"]
