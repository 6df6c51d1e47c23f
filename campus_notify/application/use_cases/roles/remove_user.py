"""Use case for removing a user account."""

import logging

from sqlalchemy.orm import Session

from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import UserRepository

from .guard import Action, ensure_authorized

logger = logging.getLogger(__name__)


def remove_user(session: Session, *, actor: User, target_user_id: int) -> None:
    """Delete the account together with its deliveries, preferences and authored notifications."""

    repository = UserRepository(session)
    target = repository.get(target_user_id)
    if target is None:
        raise NotFound("User not found")
    ensure_authorized(actor.role, Action.REMOVE, target.role)

    repository.delete(target_user_id)
    session.commit()
    logger.info("User %s removed user %s", actor.id, target_user_id)
