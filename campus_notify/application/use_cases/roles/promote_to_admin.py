"""Use case for elevating a student to administrator."""

import logging

from sqlalchemy.orm import Session

from campus_notify.domain.entities import Role, User
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import UserRepository

from .guard import Action, ensure_authorized

logger = logging.getLogger(__name__)


def promote_to_admin(session: Session, *, actor: User, target_user_id: int) -> User:
    """Promote ``target_user_id`` to admin on behalf of ``actor``."""

    repository = UserRepository(session)
    target = repository.get(target_user_id)
    if target is None:
        raise NotFound("User not found")
    ensure_authorized(actor.role, Action.PROMOTE, target.role)

    updated = repository.update_role(target_user_id, Role.ADMIN)
    session.commit()
    logger.info("User %s promoted user %s to admin", actor.id, target_user_id)
    return updated
