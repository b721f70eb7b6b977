"""Reference data that must exist before the API can serve requests."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import (
    DEFAULT_ROLES,
    NOTIFICATION_STATUS_NAMES,
    NOTIFICATION_TYPE_NAMES,
)
from app.infrastructure.repositories import DirectoryRepository, RoleRepository

logger = logging.getLogger(__name__)


def seed_reference_data(session: Session) -> None:
    """Create the roles and the type/status directories when missing."""

    role_repository = RoleRepository(session)
    for name, alias in DEFAULT_ROLES:
        role_repository.ensure(name=name, alias=alias)

    DirectoryRepository(session).ensure_entries(
        types={int(code): name for code, name in NOTIFICATION_TYPE_NAMES.items()},
        statuses={int(code): name for code, name in NOTIFICATION_STATUS_NAMES.items()},
    )
    logger.debug("Reference data verified")


__all__ = ["seed_reference_data"]
