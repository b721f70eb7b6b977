"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import MAX_RECORD_ID, NotificationStatusCode

T = TypeVar("T")


class NotificationCreate(BaseModel):
    """Payload used to create a notification for users and/or a cluster."""

    model_config = ConfigDict(extra="forbid")

    subject: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    notification_type_id: int = Field(
        ..., ge=1, le=MAX_RECORD_ID, description="1 - System, 2 - News"
    )
    user_ids: list[int] = Field(default_factory=list, description="Direct recipients")
    cluster_id: int = Field(default=0, ge=0, description="Cluster whose members receive it")
    sender_id: int | None = Field(
        default=None,
        ge=1,
        le=MAX_RECORD_ID,
        description="Sender; only administrators may name a user other than themselves",
    )
    time_to_turn_off: datetime | None = Field(
        default=None, description="Instant after which the notification is expired"
    )


class NotificationUpdate(BaseModel):
    """Full replacement of a notification's content."""

    model_config = ConfigDict(extra="forbid")

    subject: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    sender_id: int = Field(..., ge=1, le=MAX_RECORD_ID)
    notification_type_id: int = Field(..., ge=1, le=MAX_RECORD_ID)


class NotificationStatusUpdate(BaseModel):
    """New status for the recipient entries of a notification."""

    notification_status_id: int = Field(
        ...,
        ge=int(min(NotificationStatusCode)),
        le=int(max(NotificationStatusCode)),
        description="Unknown - 1, Created - 2, Sent - 3, Read - 4, Disabled - 5",
    )


class NotificationCreated(BaseModel):
    notification_id: int


class CountRead(BaseModel):
    count: int


class NotificationRead(BaseModel):
    """Representation of a notification's content."""

    notification_id: int
    subject: str
    body: str
    sender_id: int
    sender_name: str | None = None
    notification_type_id: int
    time_to_turn_off: datetime | None = None
    is_expired: bool = False
    created_at: datetime | None = None


class UserNotificationRead(NotificationRead):
    """A notification as seen by one recipient, with that recipient's status."""

    recipient_id: int
    notification_status_id: int


class PageResponse(BaseModel, Generic[T]):
    """Paginated envelope returned by list endpoints."""

    route: str
    page: int
    limit: int
    total_count: int
    total_filtered_count: int
    sort: str
    filter: str
    params: str
    next_page: str | None = None
    previous_page: str | None = None
    data: list[T] = Field(default_factory=list)


__all__ = [
    "CountRead",
    "NotificationCreate",
    "NotificationCreated",
    "NotificationRead",
    "NotificationStatusUpdate",
    "NotificationUpdate",
    "PageResponse",
    "UserNotificationRead",
]
