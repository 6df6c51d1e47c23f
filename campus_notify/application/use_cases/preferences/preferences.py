"""Read and update the notification types a user wants to receive."""

from collections.abc import Mapping

from sqlalchemy.orm import Session

from campus_notify.domain.entities import NotificationPreference, NotificationType
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import PreferenceRepository, UserRepository


def get_preferences(session: Session, *, user_id: int) -> NotificationPreference:
    if UserRepository(session).get(user_id) is None:
        raise NotFound("User not found")
    return PreferenceRepository(session).get(user_id)


def update_preferences(
    session: Session, *, user_id: int, flags: Mapping[NotificationType, bool]
) -> NotificationPreference:
    """Store the given flags; types not mentioned keep their current value."""

    if UserRepository(session).get(user_id) is None:
        raise NotFound("User not found")
    preference = PreferenceRepository(session).upsert(user_id, flags)
    session.commit()
    return preference
