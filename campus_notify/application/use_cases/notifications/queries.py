"""Read-side use cases for notifications."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from campus_notify.application.use_cases.roles.guard import Action, ensure_authorized
from campus_notify.domain.entities import (
    Notification,
    NotificationPage,
    NotificationStats,
    Role,
)
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import (
    DeliveryRepository,
    NotificationRepository,
    UserRepository,
)
from campus_notify.utils import now_in_app_timezone

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def get_user_notifications(
    session: Session,
    *,
    user_id: int,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    include_dismissed: bool = False,
) -> NotificationPage:
    """Return the user's live notifications, newest first.

    Expired or not yet scheduled notifications are filtered at read time; their
    delivery rows are kept.
    """

    if UserRepository(session).get(user_id) is None:
        raise NotFound("User not found")
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    offset = max(offset, 0)
    items, total = DeliveryRepository(session).list_live_for_user(
        user_id,
        now=now_in_app_timezone(),
        limit=limit,
        offset=offset,
        include_dismissed=include_dismissed,
    )
    return NotificationPage(items=items, total=total, limit=limit, offset=offset)


def get_notification(
    session: Session, *, notification_id: int, actor_role: Role
) -> Notification:
    ensure_authorized(actor_role, Action.MANAGE_NOTIFICATIONS)
    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFound(f"Notification {notification_id} not found")
    return notification


def list_notifications(
    session: Session, *, actor_role: Role, skip: int = 0, limit: int = 50
) -> Sequence[Notification]:
    """Return stored definitions for the admin dashboard, newest first."""

    ensure_authorized(actor_role, Action.MANAGE_NOTIFICATIONS)
    return NotificationRepository(session).list(skip=skip, limit=limit)


def get_notification_stats(session: Session, *, actor_role: Role) -> NotificationStats:
    ensure_authorized(actor_role, Action.MANAGE_NOTIFICATIONS)
    return NotificationRepository(session).stats()


def delete_notification(session: Session, *, notification_id: int, actor_role: Role) -> None:
    """Delete a notification and all of its deliveries."""

    ensure_authorized(actor_role, Action.MANAGE_NOTIFICATIONS)
    if not NotificationRepository(session).delete(notification_id):
        session.rollback()
        raise NotFound(f"Notification {notification_id} not found")
    session.commit()


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "delete_notification",
    "get_notification",
    "get_notification_stats",
    "get_user_notifications",
    "list_notifications",
]
