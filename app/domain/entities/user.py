"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


from .role import (
    ROLE_SYSTEM_ADMIN,
    ROLE_SYSTEM_OPERATOR,
    Role,
)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    role: Role
    name: str
    email: str
    password: str
    last_login: datetime | None
    created_at: datetime | None
    is_active: bool

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is a system administrator."""

        return self.has_role(ROLE_SYSTEM_ADMIN)

    def is_operator(self) -> bool:
        return self.has_role(ROLE_SYSTEM_OPERATOR)
