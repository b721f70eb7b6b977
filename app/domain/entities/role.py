"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_SYSTEM_ADMIN = "SystemAdmin"
ROLE_SYSTEM_OPERATOR = "SystemOperator"
ROLE_USER = "User"

DEFAULT_ROLES: tuple[tuple[str, str], ...] = (
    ("System administrator", ROLE_SYSTEM_ADMIN),
    ("System operator", ROLE_SYSTEM_OPERATOR),
    ("User", ROLE_USER),
)


@dataclass
class Role:
    """Core attributes describing a role that can be assigned to a user."""

    id: int
    name: str
    alias: str


__all__ = [
    "DEFAULT_ROLES",
    "ROLE_SYSTEM_ADMIN",
    "ROLE_SYSTEM_OPERATOR",
    "ROLE_USER",
    "Role",
]
