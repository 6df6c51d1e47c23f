"""Use case for storing a notification definition."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from campus_notify.application.use_cases.roles.guard import Action, ensure_authorized
from campus_notify.domain.entities import (
    AllUsers,
    ExplicitUsers,
    Filtered,
    Notification,
    Role,
)
from campus_notify.domain.exceptions import InvalidTargeting
from campus_notify.infrastructure.repositories import NotificationRepository
from campus_notify.utils import ensure_app_timezone, now_in_app_timezone

_TARGETING_VARIANTS = (AllUsers, Filtered, ExplicitUsers)


def create_notification(
    session: Session, *, definition: Notification, creator_role: Role
) -> Notification:
    """Persist ``definition`` and return it with its identifier.

    The record is flushed but not committed; :func:`deliver_notification`
    commits it together with the delivery rows. A definition whose
    ``dedupe_key`` is already stored returns the existing notification.
    """

    ensure_authorized(creator_role, Action.CREATE_BROADCAST)
    if not isinstance(definition.targeting, _TARGETING_VARIANTS):
        raise InvalidTargeting(
            f"Unsupported targeting specification: {definition.targeting!r}"
        )

    repository = NotificationRepository(session)
    if definition.dedupe_key:
        existing = repository.get_by_dedupe_key(definition.dedupe_key)
        if existing is not None:
            return existing

    now = now_in_app_timezone()
    scheduled_for = ensure_app_timezone(definition.scheduled_for) or now
    expires_at = ensure_app_timezone(definition.expires_at)
    if expires_at is not None and expires_at <= scheduled_for:
        raise ValueError("expires_at must be later than scheduled_for")

    return repository.create(
        replace(
            definition,
            id=None,
            scheduled_for=scheduled_for,
            expires_at=expires_at,
            recipient_count=0,
            created_at=now,
        )
    )


__all__ = ["create_notification"]
