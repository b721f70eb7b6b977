"""Read-only view of a cluster's department membership tree."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DepartmentMembership:
    """A user belonging to a department."""

    user_id: int


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    memberships: tuple[DepartmentMembership, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Cluster:
    """Organizational grouping of departments."""

    id: int
    name: str
    departments: tuple[Department, ...] = field(default_factory=tuple)


__all__ = ["Cluster", "Department", "DepartmentMembership"]
