"""FastAPI dependency utilities."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")
logger = logging.getLogger(__name__)


class Capability(Enum):
    """Access requirement declared once per operation."""

    ADMIN_ONLY = "admin_only"
    ADMIN_OR_OPERATOR = "admin_or_operator"
    SELF_OR_ADMIN = "self_or_admin"
    SENDER_OR_ADMIN = "sender_or_admin"


def _credentials_exception(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    email = payload.get("sub")
    if not isinstance(email, str) or not email:
        raise _credentials_exception()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_exception("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def is_authorized(user: User, capability: Capability, *, subject_id: int | None = None) -> bool:
    """Return ``True`` when ``user`` satisfies ``capability``.

    ``subject_id`` is the user the operation acts on (the path user for
    ``SELF_OR_ADMIN``, the sender for ``SENDER_OR_ADMIN``).
    """

    if user.is_admin():
        return True
    if capability is Capability.ADMIN_ONLY:
        return False
    if capability is Capability.ADMIN_OR_OPERATOR:
        return user.is_operator()
    return subject_id is not None and subject_id == user.id


def authorize(user: User, capability: Capability, *, subject_id: int | None = None) -> None:
    """Raise ``403`` unless ``user`` satisfies ``capability``."""

    if not is_authorized(user, capability, subject_id=subject_id):
        logger.warning(
            "Access denied for user %s (%s, subject=%s)",
            user.email,
            capability.value,
            subject_id,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


def require_capability(capability: Capability) -> Callable[..., User]:
    """Build a dependency that authorizes the current user for ``capability``.

    For ``SELF_OR_ADMIN`` the subject is taken from the ``user_id`` path
    parameter.
    """

    def _dependency(
        request: Request,
        current_user: User = Depends(get_current_active_user),
    ) -> User:
        subject_id: int | None = None
        raw_subject = request.path_params.get("user_id")
        if raw_subject is not None:
            try:
                subject_id = int(raw_subject)
            except (TypeError, ValueError):
                subject_id = None
        authorize(current_user, capability, subject_id=subject_id)
        return current_user

    return _dependency


__all__ = [
    "Capability",
    "authorize",
    "get_current_active_user",
    "get_current_user",
    "is_authorized",
    "oauth2_scheme",
    "require_capability",
    "resolve_current_user",
]
