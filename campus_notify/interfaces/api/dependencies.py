"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from campus_notify.application.use_cases.domain_events.adapters import (
    SessionFactory,
    default_session_factory,
)
from campus_notify.application.use_cases.users import get_user
from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.database import get_db
from campus_notify.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token.

    The ``sub`` claim carries the user id. The role is always read from the
    directory, never from the token.
    """

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_error() from exc

    try:
        return get_user(db, user_id, include_inactive=True)
    except NotFound as exc:
        raise _credentials_error("User not found") from exc


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_session_factory() -> SessionFactory:
    """Return the factory adapters use to open their isolated sessions."""

    return default_session_factory()
