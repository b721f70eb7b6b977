"""SQLAlchemy models for organizational clusters and their memberships."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class ClusterModel(Base):
    """A grouping of departments."""

    __tablename__ = "cluster"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)

    departments = relationship(
        "DepartmentModel",
        back_populates="cluster",
        order_by="DepartmentModel.id",
        cascade="all, delete-orphan",
    )


class DepartmentModel(Base):
    """A department that belongs to a cluster."""

    __tablename__ = "department"

    id = Column(Integer, primary_key=True, index=True)
    cluster_id = Column(
        Integer,
        ForeignKey("cluster.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(120), nullable=False)

    cluster = relationship("ClusterModel", back_populates="departments")
    memberships = relationship(
        "UserDepartmentModel",
        back_populates="department",
        order_by="UserDepartmentModel.id",
        cascade="all, delete-orphan",
    )


class UserDepartmentModel(Base):
    """Membership of a user in a department."""

    __tablename__ = "user_department"

    id = Column(Integer, primary_key=True, index=True)
    department_id = Column(
        Integer,
        ForeignKey("department.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    department = relationship("DepartmentModel", back_populates="memberships")


__all__ = ["ClusterModel", "DepartmentModel", "UserDepartmentModel"]
