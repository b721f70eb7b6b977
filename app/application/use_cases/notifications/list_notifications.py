"""Use cases for the administrative notification catalog."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.application.pagination import normalize_page_request, parse_sort
from app.domain.entities import Notification, NotificationCriteria, PagedResult
from app.infrastructure.repositories import NotificationRepository
from app.infrastructure.repositories.notification_repository import SORTABLE_COLUMNS


def list_notifications(
    session: Session,
    *,
    page: int | None = 1,
    limit: int | None = None,
    text: str | None = None,
    notification_type_id: int | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    sort: str | None = None,
) -> PagedResult[Notification]:
    """Return one page of notifications with the total and filtered counts."""

    page_request = normalize_page_request(page, limit)
    sort_spec = parse_sort(sort, SORTABLE_COLUMNS)
    criteria = NotificationCriteria(
        text=text,
        notification_type_id=notification_type_id,
        date_from=date_from,
        date_to=date_to,
    )

    repository = NotificationRepository(session)
    items = repository.list(
        criteria,
        sort=sort_spec,
        skip=page_request.offset,
        limit=page_request.limit,
    )
    return PagedResult(
        items=items,
        total_count=repository.count(),
        total_filtered_count=repository.count(criteria),
        page=page_request,
        sort=sort_spec,
    )


def count_notifications(
    session: Session,
    *,
    text: str | None = None,
    notification_type_id: int | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> int:
    """Count notifications using the same predicate as :func:`list_notifications`."""

    criteria = NotificationCriteria(
        text=text,
        notification_type_id=notification_type_id,
        date_from=date_from,
        date_to=date_to,
    )
    return NotificationRepository(session).count(criteria)


__all__ = ["count_notifications", "list_notifications"]
