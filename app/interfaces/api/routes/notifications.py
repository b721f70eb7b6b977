"""Routes for creating, querying and tracking notifications."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    count_notifications as count_notifications_uc,
    count_user_notifications as count_user_notifications_uc,
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    get_notification as get_notification_uc,
    list_notifications as list_notifications_uc,
    list_user_notifications as list_user_notifications_uc,
    mark_all_read as mark_all_read_uc,
    update_notification as update_notification_uc,
    update_notification_status as update_notification_status_uc,
)
from app.domain.entities import MAX_RECORD_ID, Notification, User, UserNotification
from app.domain.exceptions import NoRecipientsError, NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    Capability,
    authorize,
    get_current_active_user,
    require_capability,
)
from app.interfaces.api.routes_helpers import page_envelope
from app.interfaces.api.schemas import (
    CountRead,
    NotificationCreate,
    NotificationCreated,
    NotificationRead,
    NotificationStatusUpdate,
    NotificationUpdate,
    PageResponse,
    UserNotificationRead,
)
from app.utils import now_in_app_timezone

ROUTE = "/Notifications"

router = APIRouter(prefix=ROUTE, tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        notification_id=notification.id or 0,
        subject=notification.subject,
        body=notification.body,
        sender_id=notification.sender_id,
        sender_name=notification.sender_name,
        notification_type_id=notification.notification_type.id,
        time_to_turn_off=notification.time_to_turn_off,
        is_expired=notification.is_expired(now_in_app_timezone()),
        created_at=notification.created_at,
    )


def _user_notification_to_schema(row: UserNotification) -> UserNotificationRead:
    notification = row.notification
    return UserNotificationRead(
        notification_id=notification.id or 0,
        subject=notification.subject,
        body=notification.body,
        sender_id=notification.sender_id,
        sender_name=notification.sender_name,
        notification_type_id=notification.notification_type.id,
        time_to_turn_off=notification.time_to_turn_off,
        is_expired=notification.is_expired(now_in_app_timezone()),
        created_at=row.entry.created_at,
        recipient_id=row.entry.user_id,
        notification_status_id=row.entry.notification_status.id,
    )


def _not_found(exc: Exception) -> HTTPException:
    logger.warning("%s", exc)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _bad_request(exc: Exception) -> HTTPException:
    logger.warning("%s", exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=PageResponse[NotificationRead])
def list_notifications(
    page: int = 1,
    limit: int = 10,
    filter_text: str = Query("", alias="filter"),
    notification_type: int | None = Query(None, le=MAX_RECORD_ID),
    sort: str = "",
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.ADMIN_ONLY)),
):
    """Return the notification catalog, one page at a time."""

    logger.info(
        "Start list_notifications: page=%s, limit=%s, filter=%s, notification_type=%s, "
        "sort=%s, date_from=%s, date_to=%s",
        page,
        limit,
        filter_text,
        notification_type,
        sort,
        date_from,
        date_to,
    )
    result = list_notifications_uc(
        db,
        page=page,
        limit=limit,
        text=filter_text,
        notification_type_id=notification_type,
        date_from=date_from,
        date_to=date_to,
        sort=sort,
    )
    data = [_notification_to_schema(notification) for notification in result.items]
    logger.info("list_notifications completed: found %s records", len(data))
    return page_envelope(
        ROUTE,
        result,
        data=data,
        filter_text=filter_text,
        params={"notification_type": notification_type},
    )


@router.get("/Count", response_model=CountRead)
def count_notifications(
    filter_text: str = Query("", alias="filter"),
    notification_type: int | None = Query(None, le=MAX_RECORD_ID),
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.ADMIN_ONLY)),
):
    """Count notifications matching the same filters as the listing."""

    logger.info(
        "Start count_notifications: filter=%s, notification_type=%s, date_from=%s, date_to=%s",
        filter_text,
        notification_type,
        date_from,
        date_to,
    )
    count = count_notifications_uc(
        db,
        text=filter_text,
        notification_type_id=notification_type,
        date_from=date_from,
        date_to=date_to,
    )
    logger.info("count_notifications completed: found %s records", count)
    return CountRead(count=count)


@router.post("", response_model=NotificationCreated)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_capability(Capability.ADMIN_OR_OPERATOR)),
):
    """Create a notification for users and/or every member of a cluster.

    Every recipient entry starts with status 2 - Created.
    """

    logger.info(
        "Start create_notification: user_id=%s, payload=%s",
        current_user.id,
        payload.model_dump(mode="json"),
    )
    if payload.sender_id is not None:
        authorize(current_user, Capability.SENDER_OR_ADMIN, subject_id=payload.sender_id)

    try:
        created = create_notification_uc(
            db,
            acting_user=current_user,
            subject=payload.subject,
            body=payload.body,
            notification_type_id=payload.notification_type_id,
            recipient_ids=payload.user_ids,
            cluster_id=payload.cluster_id,
            sender_id=payload.sender_id,
            time_to_turn_off=payload.time_to_turn_off,
        )
    except (NoRecipientsError, NotFoundError) as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise _bad_request(exc) from exc

    logger.info(
        "Notification created with id %s and %s recipient entries",
        created.notification.id,
        created.total_entries,
    )
    return NotificationCreated(notification_id=created.notification.id)


@router.get("/User/{user_id}", response_model=PageResponse[UserNotificationRead])
def list_user_notifications(
    user_id: int = Path(..., le=MAX_RECORD_ID),
    page: int = 1,
    limit: int = 10,
    filter_text: str = Query("", alias="filter"),
    notification_type: int | None = Query(None, le=MAX_RECORD_ID),
    notification_status: int | None = Query(None, le=MAX_RECORD_ID),
    sort: str = "",
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.SELF_OR_ADMIN)),
):
    """Return the notifications addressed to ``user_id`` with their status."""

    logger.debug(
        "Start list_user_notifications: user_id=%s, page=%s, limit=%s, filter=%s, sort=%s",
        user_id,
        page,
        limit,
        filter_text,
        sort,
    )
    result = list_user_notifications_uc(
        db,
        user_id=user_id,
        page=page,
        limit=limit,
        text=filter_text,
        notification_type_id=notification_type,
        notification_status_id=notification_status,
        date_from=date_from,
        date_to=date_to,
        sort=sort,
    )
    data = [_user_notification_to_schema(row) for row in result.items]
    logger.debug("list_user_notifications completed: found %s records", len(data))
    return page_envelope(
        f"{ROUTE}/User/{user_id}",
        result,
        data=data,
        filter_text=filter_text,
        params={
            "notification_type": notification_type,
            "notification_status": notification_status,
        },
    )


@router.get("/User/{user_id}/Count", response_model=CountRead)
def count_user_notifications(
    user_id: int = Path(..., le=MAX_RECORD_ID),
    filter_text: str = Query("", alias="filter"),
    notification_type: int | None = Query(None, le=MAX_RECORD_ID),
    notification_status: int | None = Query(None, le=MAX_RECORD_ID),
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.SELF_OR_ADMIN)),
):
    """Count the notifications addressed to ``user_id``."""

    logger.debug(
        "Start count_user_notifications: user_id=%s, filter=%s, notification_type=%s, "
        "notification_status=%s, date_from=%s, date_to=%s",
        user_id,
        filter_text,
        notification_type,
        notification_status,
        date_from,
        date_to,
    )
    count = count_user_notifications_uc(
        db,
        user_id=user_id,
        text=filter_text,
        notification_type_id=notification_type,
        notification_status_id=notification_status,
        date_from=date_from,
        date_to=date_to,
    )
    logger.debug("count_user_notifications completed: found %s records", count)
    return CountRead(count=count)


@router.post("/User/{user_id}/ReadAll", status_code=status.HTTP_200_OK)
def mark_all_user_notifications_read(
    user_id: int = Path(..., le=MAX_RECORD_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.SELF_OR_ADMIN)),
) -> dict[str, int]:
    """Mark every notification addressed to ``user_id`` as read."""

    logger.info("Start mark_all_user_notifications_read: user_id=%s", user_id)
    updated = mark_all_read_uc(db, user_id=user_id)
    logger.info("mark_all_user_notifications_read completed: updated %s records", updated)
    return {"updated": updated}


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int = Path(..., le=MAX_RECORD_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.ADMIN_ONLY)),
):
    """Return a single notification."""

    logger.debug("Start read_notification: notification_id=%s", notification_id)
    try:
        notification = get_notification_uc(db, notification_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    logger.debug("read_notification completed: notification_id=%s", notification_id)
    return _notification_to_schema(notification)


@router.put("/{notification_id}", response_model=NotificationRead)
def update_notification(
    payload: NotificationUpdate,
    notification_id: int = Path(..., le=MAX_RECORD_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Replace subject, body, sender and type of a notification.

    Allowed to administrators and to the sender of the notification.
    """

    logger.debug(
        "Start update_notification: notification_id=%s, payload=%s",
        notification_id,
        payload.model_dump(mode="json"),
    )
    authorize(current_user, Capability.SENDER_OR_ADMIN, subject_id=payload.sender_id)
    try:
        current = get_notification_uc(db, notification_id)
        authorize(current_user, Capability.SENDER_OR_ADMIN, subject_id=current.sender_id)
        notification = update_notification_uc(
            db,
            notification_id=notification_id,
            subject=payload.subject,
            body=payload.body,
            sender_id=payload.sender_id,
            notification_type_id=payload.notification_type_id,
        )
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    logger.debug("Update notification #%s completed", notification_id)
    return _notification_to_schema(notification)


@router.patch("/{notification_id}", status_code=status.HTTP_200_OK)
def update_notification_status(
    payload: NotificationStatusUpdate,
    notification_id: int = Path(..., le=MAX_RECORD_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.ADMIN_ONLY)),
) -> dict[str, int]:
    """Set the status of every recipient entry of a notification."""

    logger.info(
        "Start update_notification_status: notification_id=%s, notification_status_id=%s",
        notification_id,
        payload.notification_status_id,
    )
    try:
        updated = update_notification_status_uc(
            db,
            notification_id=notification_id,
            status_id=payload.notification_status_id,
        )
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    logger.info("update_notification_status completed: updated %s records", updated)
    return {"updated": updated}


@router.patch("/{notification_id}/User/{user_id}", status_code=status.HTTP_200_OK)
def update_user_notification_status(
    payload: NotificationStatusUpdate,
    notification_id: int = Path(..., le=MAX_RECORD_ID),
    user_id: int = Path(..., le=MAX_RECORD_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.SELF_OR_ADMIN)),
) -> dict[str, int]:
    """Set the status of one recipient's copy of a notification."""

    logger.info(
        "Start update_user_notification_status: notification_id=%s, user_id=%s, "
        "notification_status_id=%s",
        notification_id,
        user_id,
        payload.notification_status_id,
    )
    try:
        updated = update_notification_status_uc(
            db,
            notification_id=notification_id,
            status_id=payload.notification_status_id,
            user_id=user_id,
        )
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    logger.info("update_user_notification_status completed: updated %s records", updated)
    return {"updated": updated}


@router.delete("/{notification_id}", status_code=status.HTTP_200_OK)
def delete_notification(
    notification_id: int = Path(..., le=MAX_RECORD_ID),
    db: Session = Depends(get_db),
    _: User = Depends(require_capability(Capability.ADMIN_ONLY)),
) -> dict[str, int]:
    """Delete a notification and all of its recipient entries."""

    logger.info("Start delete_notification: notification_id=%s", notification_id)
    try:
        delete_notification_uc(db, notification_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    logger.info("delete_notification completed: notification_id=%s", notification_id)
    return {"deleted": notification_id}
