"""Use case for fanning a notification out to its audience."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import (
    DeliveryRepository,
    NotificationRepository,
)
from campus_notify.utils import now_in_app_timezone

from .audience import resolve_audience

logger = logging.getLogger(__name__)


def deliver_notification(session: Session, *, notification_id: int) -> int:
    """Create one delivery row per resolved recipient and return the recipient count.

    Existing ``(notification, user)`` pairs are skipped, so retrying after a
    partial failure never duplicates rows. ``recipient_count`` is recomputed
    from the stored rows rather than incremented. Commits the transaction.
    """

    notification_repo = NotificationRepository(session)
    notification = notification_repo.get(notification_id)
    if notification is None:
        raise NotFound(f"Notification {notification_id} not found")

    audience = resolve_audience(
        session, notification.targeting, notification_type=notification.type
    )
    inserted = DeliveryRepository(session).insert_many(
        notification_id, audience, created_at=now_in_app_timezone()
    )
    recipient_count = notification_repo.refresh_recipient_count(notification_id)
    session.commit()

    logger.info(
        "Notification %s delivered: %s new rows, %s recipients in total",
        notification_id,
        inserted,
        recipient_count,
    )
    return recipient_count


__all__ = ["deliver_notification"]
