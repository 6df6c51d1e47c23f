"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int, *, include_inactive: bool = False) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFound("User not found")
    if not include_inactive and not user.is_active:
        raise NotFound("User is inactive")
    return user
