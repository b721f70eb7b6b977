"""SQLAlchemy model for notification content records."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a notification's content."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    notification_type_id = Column(
        Integer, ForeignKey("notification_type.id"), nullable=False, index=True
    )
    time_to_turn_off = Column(DateTime(), nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )

    sender = relationship("UserModel", lazy="joined")
    notification_type = relationship("NotificationTypeModel", lazy="joined")
    recipients = relationship(
        "NotificationUserModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["NotificationModel"]
