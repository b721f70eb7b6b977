"""Use cases for a recipient's view of their notifications."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.application.pagination import normalize_page_request, parse_sort
from app.domain.entities import PagedResult, UserNotification, UserNotificationCriteria
from app.infrastructure.repositories import NotificationUserRepository
from app.infrastructure.repositories.notification_user_repository import SORTABLE_COLUMNS


def list_user_notifications(
    session: Session,
    *,
    user_id: int,
    page: int | None = 1,
    limit: int | None = None,
    text: str | None = None,
    notification_type_id: int | None = None,
    notification_status_id: int | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    sort: str | None = None,
) -> PagedResult[UserNotification]:
    """Return one page of ``user_id``'s entries joined to their content.

    ``total_count`` matches only the recipient; ``total_filtered_count``
    applies every filter, exactly as the page does.
    """

    page_request = normalize_page_request(page, limit)
    sort_spec = parse_sort(sort, SORTABLE_COLUMNS)
    criteria = UserNotificationCriteria(
        text=text,
        notification_type_id=notification_type_id,
        notification_status_id=notification_status_id,
        date_from=date_from,
        date_to=date_to,
    )

    ledger = NotificationUserRepository(session)
    items = ledger.list_for_user(
        user_id,
        criteria,
        sort=sort_spec,
        skip=page_request.offset,
        limit=page_request.limit,
    )
    return PagedResult(
        items=items,
        total_count=ledger.count_for_user(user_id),
        total_filtered_count=ledger.count_for_user(user_id, criteria),
        page=page_request,
        sort=sort_spec,
    )


def count_user_notifications(
    session: Session,
    *,
    user_id: int,
    text: str | None = None,
    notification_type_id: int | None = None,
    notification_status_id: int | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> int:
    criteria = UserNotificationCriteria(
        text=text,
        notification_type_id=notification_type_id,
        notification_status_id=notification_status_id,
        date_from=date_from,
        date_to=date_to,
    )
    return NotificationUserRepository(session).count_for_user(user_id, criteria)


__all__ = ["count_user_notifications", "list_user_notifications"]
