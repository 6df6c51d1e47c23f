"""Use case for the user management listing."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from campus_notify.application.use_cases.roles.guard import Action, ensure_authorized
from campus_notify.domain.entities import User
from campus_notify.infrastructure.repositories import UserRepository


def list_users_for_management(
    session: Session, *, actor: User, skip: int = 0, limit: int = 100
) -> Sequence[User]:
    """Return users ordered owners first, then admins, then students, newest first."""

    ensure_authorized(actor.role, Action.VIEW_DIRECTORY)
    return UserRepository(session).list_for_management(skip=skip, limit=limit)
