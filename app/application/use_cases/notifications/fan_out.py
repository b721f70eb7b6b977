"""Expansion of a notification into per-recipient ledger entries."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import (
    MAX_RECORD_ID,
    Cluster,
    Notification,
    NotificationStatus,
    NotificationUser,
)
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import (
    ClusterRepository,
    NotificationUserRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


def unique_ids(candidates: Iterable[int]) -> list[int]:
    """Return storable identifiers from ``candidates`` without repeats, in order.

    Values outside ``1..MAX_RECORD_ID`` cannot name a stored user and are dropped.
    """

    ordered: list[int] = []
    seen: set[int] = set()
    for candidate in candidates:
        if candidate is None or not 1 <= candidate <= MAX_RECORD_ID or candidate in seen:
            continue
        seen.add(candidate)
        ordered.append(candidate)
    return ordered


def expand_cluster_members(cluster: Cluster) -> list[int]:
    """Flatten cluster -> departments -> memberships into user identifiers."""

    return unique_ids(
        membership.user_id
        for department in cluster.departments
        for membership in department.memberships
    )


def fan_out_to_users(
    session: Session,
    *,
    notification: Notification,
    recipient_ids: Iterable[int],
    status: NotificationStatus,
    created_by: int | None,
) -> int:
    """Create one ledger entry per known user in ``recipient_ids``.

    Identifiers that do not resolve to a user are skipped. Returns the number
    of entries inserted.
    """

    requested = unique_ids(recipient_ids)
    known_users = UserRepository(session).get_map_by_ids(requested)
    ledger = NotificationUserRepository(session)

    created = 0
    for user_id in requested:
        if user_id not in known_users:
            logger.debug("Skipping unknown recipient #%s", user_id)
            continue
        ledger.create(
            NotificationUser(
                id=None,
                notification_id=notification.id,
                user_id=user_id,
                notification_status=status,
                created_by=created_by,
            )
        )
        created += 1
    return created


def fan_out_to_cluster(
    session: Session,
    *,
    notification: Notification,
    cluster_id: int,
    status: NotificationStatus,
) -> int:
    """Create one ledger entry per member of ``cluster_id``.

    Raises :class:`NotFoundError` before inserting anything when the cluster
    does not exist. Cluster entries carry no creator.
    """

    cluster = None
    if 1 <= cluster_id <= MAX_RECORD_ID:
        cluster = ClusterRepository(session).get_cluster_users(cluster_id)
    if cluster is None:
        raise NotFoundError(f"Record ClusterId #{cluster_id} not found")

    member_ids = expand_cluster_members(cluster)
    ledger = NotificationUserRepository(session)
    for user_id in member_ids:
        ledger.create(
            NotificationUser(
                id=None,
                notification_id=notification.id,
                user_id=user_id,
                notification_status=status,
                created_by=None,
            )
        )
    logger.debug(
        "Cluster #%s expanded to %s recipients for notification #%s",
        cluster_id,
        len(member_ids),
        notification.id,
    )
    return len(member_ids)


__all__ = [
    "expand_cluster_members",
    "fan_out_to_cluster",
    "fan_out_to_users",
    "unique_ids",
]
