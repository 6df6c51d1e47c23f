"""SQLAlchemy models for notifications and their per-recipient deliveries."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from campus_notify.domain.entities import NotificationPriority, NotificationType
from campus_notify.infrastructure.database import Base
from campus_notify.utils import now_in_app_naive_datetime


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


notification_type_enum = SQLEnum(
    NotificationType, name="notification_type", values_callable=_enum_values
)


class NotificationModel(Base):
    """Broadcast definition; immutable apart from ``recipient_count``."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    type = Column(notification_type_enum, nullable=False, index=True)
    priority = Column(
        SQLEnum(
            NotificationPriority,
            name="notification_priority",
            values_callable=_enum_values,
        ),
        nullable=False,
        default=NotificationPriority.NORMAL,
    )
    targeting = Column(JSON, nullable=False)
    scheduled_for = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    expires_at = Column(DateTime(), nullable=True, index=True)
    related_resource_kind = Column(String(50), nullable=True)
    related_resource_id = Column(String(64), nullable=True)
    extra_data = Column("metadata", JSON, nullable=False, default=dict)
    dedupe_key = Column(String(160), nullable=True, unique=True)
    created_by = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=True, index=True
    )
    recipient_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    deliveries = relationship(
        "DeliveryModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class DeliveryModel(Base):
    """One row per (notification, recipient); the pair is unique."""

    __tablename__ = "notification_delivery"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_delivery_notification_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    read_at = Column(DateTime(), nullable=True)
    is_dismissed = Column(Boolean, nullable=False, default=False)
    dismissed_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    notification = relationship("NotificationModel", back_populates="deliveries")


__all__ = ["DeliveryModel", "NotificationModel", "notification_type_enum"]
