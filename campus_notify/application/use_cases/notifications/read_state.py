"""Use cases mutating per-recipient read and dismiss state."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import DeliveryRepository, UserRepository
from campus_notify.utils import now_in_app_timezone


def mark_notification_read(session: Session, *, notification_id: int, user_id: int) -> bool:
    """Mark the user's delivery as read.

    Marking an already read delivery again is a no-op and still returns
    ``True``. Raises :class:`NotFound` when the user never received the
    notification.
    """

    repository = DeliveryRepository(session)
    if repository.get(notification_id, user_id) is None:
        raise NotFound(f"Notification {notification_id} was not delivered to user {user_id}")
    repository.mark_read(notification_id, user_id, read_at=now_in_app_timezone())
    session.commit()
    return True


def mark_all_notifications_read(
    session: Session,
    *,
    user_id: int,
    notification_ids: Iterable[int] | None = None,
) -> int:
    """Mark every unread delivery of ``user_id`` as read and return how many changed."""

    updated = DeliveryRepository(session).mark_all_read(
        user_id, read_at=now_in_app_timezone(), notification_ids=notification_ids
    )
    session.commit()
    return updated


def dismiss_notification(session: Session, *, notification_id: int, user_id: int) -> bool:
    """Hide the notification from the user's listing; dismissing also marks it read."""

    repository = DeliveryRepository(session)
    if repository.get(notification_id, user_id) is None:
        raise NotFound(f"Notification {notification_id} was not delivered to user {user_id}")
    repository.dismiss(notification_id, user_id, dismissed_at=now_in_app_timezone())
    session.commit()
    return True


def get_unread_notification_count(session: Session, *, user_id: int) -> int:
    """Count unread deliveries whose notification is currently live."""

    if UserRepository(session).get(user_id) is None:
        raise NotFound("User not found")
    return DeliveryRepository(session).count_unread_live(user_id, now=now_in_app_timezone())


__all__ = [
    "dismiss_notification",
    "get_unread_notification_count",
    "mark_all_notifications_read",
    "mark_notification_read",
]
