"""Domain entities describing a broadcast notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .targeting import AllUsers, TargetingSpec


class NotificationType(str, Enum):
    CUSTOM = "custom"
    EXAM_REMINDER = "exam_reminder"
    OPPORTUNITY = "opportunity"
    EVENT = "event"
    TIMETABLE_UPDATE = "timetable_update"
    ANNOUNCEMENT = "announcement"
    WELCOME = "welcome"


class NotificationPriority(str, Enum):
    """Priority levels shown to recipients."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


@dataclass(frozen=True)
class RelatedResource:
    """Back-reference to the domain object that caused an auto-generated notification."""

    kind: str
    id: str


@dataclass
class Notification:
    """Immutable broadcast definition shared by all of its deliveries.

    Only ``recipient_count`` changes after creation; it is recomputed from the
    delivery rows whenever fan-out completes.
    """

    id: int | None
    title: str
    body: str
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.NORMAL
    targeting: TargetingSpec = field(default_factory=AllUsers)
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None
    related_resource: RelatedResource | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    dedupe_key: str | None = None
    created_by: int | None = None
    recipient_count: int = 0
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "RelatedResource",
]
