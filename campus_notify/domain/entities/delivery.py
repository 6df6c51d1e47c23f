"""Domain entities for per-recipient delivery state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .notification import Notification


@dataclass
class Delivery:
    """Read and dismiss state of one notification for one recipient."""

    notification_id: int
    user_id: int
    is_read: bool = False
    read_at: datetime | None = None
    is_dismissed: bool = False
    dismissed_at: datetime | None = None
    created_at: datetime | None = None


@dataclass
class UserNotification:
    """A delivery joined with the notification it belongs to."""

    delivery: Delivery
    notification: Notification


@dataclass
class NotificationPage:
    items: list[UserNotification]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class NotificationStats:
    total_notifications: int
    total_recipients: int
    read_deliveries: int
    unread_deliveries: int


__all__ = ["Delivery", "NotificationPage", "NotificationStats", "UserNotification"]
