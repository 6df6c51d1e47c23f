"""Use case for adding a user to the directory."""

import logging

from sqlalchemy.orm import Session

from campus_notify.application.use_cases.domain_events import enqueue_domain_event
from campus_notify.application.use_cases.roles.guard import Action, ensure_authorized
from campus_notify.domain.entities import DomainEventKind, RegisteredUser, Role, User
from campus_notify.infrastructure.repositories import UserRepository
from campus_notify.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    role: Role = Role.STUDENT,
    branch_id: str | None = None,
    year: int | None = None,
    semester: int | None = None,
    actor: User | None = None,
) -> User:
    """Create a user and record the ``user.registered`` event in the same transaction.

    ``actor`` is the administrator adding the account; it is omitted only when
    the directory bootstraps its first owner.
    """

    if actor is not None:
        ensure_authorized(actor.role, Action.CREATE_USER, role)

    normalized_email = email.strip().lower()
    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ValueError("Email is already registered")

    user = repository.create(
        User(
            id=None,
            name=name.strip(),
            email=normalized_email,
            role=role,
            branch_id=branch_id,
            year=year,
            semester=semester,
            is_active=True,
            created_at=now_in_app_timezone(),
        )
    )
    enqueue_domain_event(
        session,
        kind=DomainEventKind.USER_REGISTERED,
        payload=RegisteredUser(id=user.id, name=user.name),
    )
    session.commit()
    logger.info("Registered user %s with role %s", user.id, user.role.value)
    return user
