"""Use case combining notification creation with its fan-out."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_notify.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    RelatedResource,
    Role,
    TargetingSpec,
)
from campus_notify.infrastructure.repositories import NotificationRepository

from .create_notification import create_notification
from .deliver_notification import deliver_notification

logger = logging.getLogger(__name__)


def create_and_deliver_notification(
    session: Session,
    *,
    title: str,
    body: str,
    notification_type: NotificationType,
    priority: NotificationPriority = NotificationPriority.NORMAL,
    targeting: TargetingSpec,
    scheduled_for: datetime | None = None,
    expires_at: datetime | None = None,
    related_resource: RelatedResource | None = None,
    metadata: dict[str, Any] | None = None,
    dedupe_key: str | None = None,
    created_by: int | None,
    creator_role: Role,
) -> Notification:
    """Store a notification and deliver it in a single transaction.

    Nothing is written when authorization or targeting validation fails. When
    ``dedupe_key`` matches an existing notification that notification is
    returned untouched.
    """

    repository = NotificationRepository(session)
    if dedupe_key:
        existing = repository.get_by_dedupe_key(dedupe_key)
        if existing is not None:
            logger.debug("Notification with key %s already exists", dedupe_key)
            return existing

    definition = Notification(
        id=None,
        title=title,
        body=body,
        type=notification_type,
        priority=priority,
        targeting=targeting,
        scheduled_for=scheduled_for,
        expires_at=expires_at,
        related_resource=related_resource,
        metadata=metadata or {},
        dedupe_key=dedupe_key,
        created_by=created_by,
    )

    try:
        notification = create_notification(
            session, definition=definition, creator_role=creator_role
        )
        deliver_notification(session, notification_id=notification.id)
    except IntegrityError:
        session.rollback()
        existing = repository.get_by_dedupe_key(dedupe_key) if dedupe_key else None
        if existing is None:
            raise
        logger.info("Notification with key %s was created concurrently", dedupe_key)
        return existing
    except Exception:
        session.rollback()
        raise

    return repository.get(notification.id)


__all__ = ["create_and_deliver_notification"]
