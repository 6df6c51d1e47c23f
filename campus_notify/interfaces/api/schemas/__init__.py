from .domain_event import (
    DomainEventCreate,
    DomainEventRead,
    ExamSweepRequest,
    ExamSweepResult,
    OutboxRunRead,
    ScheduledExamPayload,
)
from .notification import (
    MarkAllReadResult,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationPageRead,
    NotificationRead,
    NotificationStatsRead,
    ReadStateResult,
    RelatedResourcePayload,
    TargetingPayload,
    UnreadCountRead,
    UserNotificationRead,
)
from .preference import PreferencesRead, PreferencesUpdate
from .user import UserCreate, UserRead

__all__ = [
    "DomainEventCreate",
    "DomainEventRead",
    "ExamSweepRequest",
    "ExamSweepResult",
    "MarkAllReadResult",
    "NotificationCreate",
    "NotificationMarkReadRequest",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationStatsRead",
    "OutboxRunRead",
    "PreferencesRead",
    "PreferencesUpdate",
    "ReadStateResult",
    "RelatedResourcePayload",
    "ScheduledExamPayload",
    "TargetingPayload",
    "UnreadCountRead",
    "UserCreate",
    "UserNotificationRead",
    "UserRead",
]
