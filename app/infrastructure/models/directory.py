"""SQLAlchemy models for the notification directories."""

from sqlalchemy import Column, Integer, String

from app.infrastructure.database import Base


class NotificationTypeModel(Base):
    """Directory entry describing the kind of a notification."""

    __tablename__ = "notification_type"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(50), nullable=False, unique=True)


class NotificationStatusModel(Base):
    """Directory entry describing a delivery/read status."""

    __tablename__ = "notification_status"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(50), nullable=False, unique=True)


__all__ = ["NotificationStatusModel", "NotificationTypeModel"]
