"""SQLAlchemy model for per-recipient notification ledger rows."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationUserModel(Base):
    """Delivery and read status of one notification for one recipient."""

    __tablename__ = "notification_user"

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    notification_status_id = Column(
        Integer, ForeignKey("notification_status.id"), nullable=False, index=True
    )
    created_by = Column(Integer, ForeignKey("user.id"), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    notification = relationship("NotificationModel", back_populates="recipients")
    notification_status = relationship("NotificationStatusModel", lazy="joined")


__all__ = ["NotificationUserModel"]
