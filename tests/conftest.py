"""Shared fixtures: a throw-away SQLite database, users, clusters and a client."""

from __future__ import annotations

import itertools
import os
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="notifications-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"

from app.domain.entities import ROLE_USER, User  # noqa: E402
from app.infrastructure import database  # noqa: E402
from app.infrastructure import models  # noqa: E402,F401
from app.infrastructure.models import (  # noqa: E402
    ClusterModel,
    DepartmentModel,
    UserDepartmentModel,
)
from app.infrastructure.repositories import RoleRepository, UserRepository  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402
from app.infrastructure.seed import seed_reference_data  # noqa: E402


@pytest.fixture()
def session():
    """Return a session bound to a freshly created and seeded schema."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    db = database.SessionLocal()
    seed_reference_data(db)
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Create users with the requested role alias."""

    counter = itertools.count(1)

    def _make(role_alias: str = ROLE_USER, *, name: str | None = None, is_active: bool = True) -> User:
        index = next(counter)
        role = RoleRepository(session).get_by_alias(role_alias)
        assert role is not None
        return UserRepository(session).create(
            User(
                id=None,
                role=role,
                name=name or f"User {index}",
                email=f"user{index}.{role_alias.lower()}@example.com",
                password="not-a-real-hash",
                last_login=None,
                created_at=None,
                is_active=is_active,
            )
        )

    return _make


@pytest.fixture()
def make_cluster(session):
    """Create a cluster whose departments contain the given user ids."""

    def _make(*departments: Sequence[int], name: str = "Cluster") -> int:
        cluster = ClusterModel(name=name)
        for index, member_ids in enumerate(departments, start=1):
            department = DepartmentModel(name=f"Department {index}")
            department.memberships = [
                UserDepartmentModel(user_id=user_id) for user_id in member_ids
            ]
            cluster.departments.append(department)
        session.add(cluster)
        session.commit()
        return cluster.id

    return _make


@pytest.fixture()
def auth_headers():
    """Return bearer headers for ``user``."""

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": user.email, "role": user.role.alias})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def client(session):
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
