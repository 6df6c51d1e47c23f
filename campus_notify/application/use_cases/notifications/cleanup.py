"""Storage reclamation for long-expired notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from campus_notify.config import get_settings
from campus_notify.infrastructure.repositories import NotificationRepository
from campus_notify.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def purge_expired_notifications(
    session: Session,
    *,
    retention: timedelta | None = None,
    now: datetime | None = None,
) -> int:
    """Delete notifications that expired more than ``retention`` ago.

    Read paths already hide expired notifications, so running this late or not
    at all never changes what users see.
    """

    if retention is None:
        retention = timedelta(days=get_settings().notification_retention_days)
    cutoff = (now or now_in_app_timezone()) - retention
    removed = NotificationRepository(session).delete_expired_before(cutoff)
    session.commit()
    if removed:
        logger.info("Purged %s notifications expired before %s", removed, cutoff.isoformat())
    return removed


__all__ = ["purge_expired_notifications"]
