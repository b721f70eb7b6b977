"""Filter, sort and page descriptions shared by list and count queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")

# Largest identifier or page number the store can bind.
MAX_RECORD_ID = 2**31 - 1


@dataclass(frozen=True)
class SortSpec:
    """Allow-listed sort field and direction."""

    field: str = "id"
    descending: bool = False

    @property
    def token(self) -> str:
        return f"{self.field}|desc" if self.descending else self.field


@dataclass(frozen=True)
class PageRequest:
    """Zero-based offset page window."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class NotificationCriteria:
    """Predicate applied to notification content rows.

    The same instance drives both a listing and its count so the two always
    agree.
    """

    text: str | None = None
    notification_type_id: int | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None


@dataclass(frozen=True)
class UserNotificationCriteria(NotificationCriteria):
    """Predicate applied to one recipient's ledger rows."""

    notification_status_id: int | None = None


@dataclass
class PagedResult(Generic[T]):
    """One page of results with the counts that go with it."""

    items: Sequence[T]
    total_count: int
    total_filtered_count: int
    page: PageRequest
    sort: SortSpec = field(default_factory=SortSpec)


__all__ = [
    "MAX_RECORD_ID",
    "NotificationCriteria",
    "PageRequest",
    "PagedResult",
    "SortSpec",
    "UserNotificationCriteria",
]
