"""Read-only access to cluster membership trees."""

from __future__ import annotations

from sqlalchemy.orm import Session, selectinload

from app.domain.entities import Cluster, Department, DepartmentMembership
from app.infrastructure.models import ClusterModel, DepartmentModel


class ClusterRepository:
    """Materialize a cluster with its departments and user memberships."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_cluster_users(self, cluster_id: int) -> Cluster | None:
        model = (
            self.session.query(ClusterModel)
            .options(
                selectinload(ClusterModel.departments).selectinload(
                    DepartmentModel.memberships
                )
            )
            .filter(ClusterModel.id == cluster_id)
            .first()
        )
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: ClusterModel) -> Cluster:
        departments = tuple(
            Department(
                id=department.id,
                name=department.name,
                memberships=tuple(
                    DepartmentMembership(user_id=membership.user_id)
                    for membership in department.memberships
                ),
            )
            for department in model.departments
        )
        return Cluster(id=model.id, name=model.name, departments=departments)


__all__ = ["ClusterRepository"]
