"""Use case guaranteeing that the directory has an owner."""

import logging

from sqlalchemy.orm import Session

from campus_notify.domain.entities import Role, User
from campus_notify.infrastructure.repositories import UserRepository

from .create_user import create_user

logger = logging.getLogger(__name__)


def ensure_initial_owner(session: Session, *, name: str, email: str) -> tuple[User, bool]:
    """Return the owner account for ``email``, creating or elevating it if needed.

    The second element is ``True`` when the directory changed. Once any owner
    exists the call never elevates another account; further owners can only be
    created by an owner through the API.
    """

    repository = UserRepository(session)
    normalized_email = email.strip().lower()
    existing = repository.get_by_email(normalized_email)

    if repository.count_by_role(Role.OWNER) > 0:
        if existing is not None and existing.is_owner():
            return existing, False
        raise ValueError("An owner already exists; ask them to create further owners")

    if existing is not None:
        owner = repository.update_role(existing.id, Role.OWNER)
        session.commit()
        logger.info("User %s elevated to owner during bootstrap", owner.id)
        return owner, True

    owner = create_user(session, name=name, email=normalized_email, role=Role.OWNER)
    logger.info("Owner %s created during bootstrap", owner.id)
    return owner, True
