"""SQLAlchemy model for per-user notification type flags."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, UniqueConstraint

from campus_notify.infrastructure.database import Base
from campus_notify.utils import now_in_app_naive_datetime

from .notification import notification_type_enum


class NotificationPreferenceModel(Base):
    __tablename__ = "notification_preference"
    __table_args__ = (
        UniqueConstraint("user_id", "notification_type", name="uq_preference_user_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notification_type = Column(notification_type_enum, nullable=False)
    enabled = Column(Boolean, nullable=False, default=True)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationPreferenceModel"]
