"""Use cases for creating, delivering and reading notifications."""

from .audience import resolve_audience
from .cleanup import purge_expired_notifications
from .create_and_deliver import create_and_deliver_notification
from .create_notification import create_notification
from .deliver_notification import deliver_notification
from .queries import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    delete_notification,
    get_notification,
    get_notification_stats,
    get_user_notifications,
    list_notifications,
)
from .read_state import (
    dismiss_notification,
    get_unread_notification_count,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "create_and_deliver_notification",
    "create_notification",
    "delete_notification",
    "deliver_notification",
    "dismiss_notification",
    "get_notification",
    "get_notification_stats",
    "get_unread_notification_count",
    "get_user_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "purge_expired_notifications",
    "resolve_audience",
]
