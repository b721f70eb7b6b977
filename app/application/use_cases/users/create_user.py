"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import RoleRepository, UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    name: str,
    role_alias: str,
    email: str,
    password: str,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if repository.get_by_email(email):
        raise ValueError("Email address is already registered")

    role = RoleRepository(session).get_by_alias(role_alias)
    if role is None:
        raise ValueError(f"Role '{role_alias}' not found")

    user = User(
        id=None,
        role=role,
        name=name,
        email=email,
        password=get_password_hash(password),
        last_login=None,
        created_at=now_in_app_timezone(),
        is_active=True,
    )
    return repository.create(user)
