"""Use case for returning an administrator to the student role."""

import logging

from sqlalchemy.orm import Session

from campus_notify.domain.entities import Role, User
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import UserRepository

from .guard import Action, ensure_authorized

logger = logging.getLogger(__name__)


def demote_to_student(session: Session, *, actor: User, target_user_id: int) -> User:
    """Demote ``target_user_id`` to student. Owners only; owners are never demoted."""

    repository = UserRepository(session)
    target = repository.get(target_user_id)
    if target is None:
        raise NotFound("User not found")
    ensure_authorized(actor.role, Action.DEMOTE, target.role)

    updated = repository.update_role(target_user_id, Role.STUDENT)
    session.commit()
    logger.info("User %s demoted user %s to student", actor.id, target_user_id)
    return updated
