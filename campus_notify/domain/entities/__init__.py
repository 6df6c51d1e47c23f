"""Domain entities exposed by the application."""

from .delivery import Delivery, NotificationPage, NotificationStats, UserNotification
from .domain_event import (
    OUTBOX_STATUS_FAILED,
    OUTBOX_STATUS_PENDING,
    OUTBOX_STATUS_PROCESSED,
    DomainEventKind,
    ExamReminderWindow,
    OutboxEvent,
    PostedOpportunity,
    PublishedEvent,
    RegisteredUser,
    ScheduledExam,
    TimetableChange,
)
from .notification import (
    Notification,
    NotificationPriority,
    NotificationType,
    RelatedResource,
)
from .preference import NotificationPreference
from .role import Role
from .targeting import (
    AllUsers,
    ExplicitUsers,
    Filtered,
    TargetingSpec,
    explicit_users,
    filtered,
    targeting_from_payload,
    targeting_to_payload,
)
from .user import User

__all__ = [
    "AllUsers",
    "Delivery",
    "DomainEventKind",
    "ExamReminderWindow",
    "ExplicitUsers",
    "Filtered",
    "Notification",
    "NotificationPage",
    "NotificationPreference",
    "NotificationPriority",
    "NotificationStats",
    "NotificationType",
    "OUTBOX_STATUS_FAILED",
    "OUTBOX_STATUS_PENDING",
    "OUTBOX_STATUS_PROCESSED",
    "OutboxEvent",
    "PostedOpportunity",
    "PublishedEvent",
    "RegisteredUser",
    "RelatedResource",
    "Role",
    "ScheduledExam",
    "TargetingSpec",
    "TimetableChange",
    "User",
    "explicit_users",
    "filtered",
    "targeting_from_payload",
    "targeting_to_payload",
]
