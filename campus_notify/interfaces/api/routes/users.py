"""Routes for the user directory and the role hierarchy."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from campus_notify.application.use_cases.roles import (
    demote_to_student,
    promote_to_admin,
    remove_user as remove_user_uc,
)
from campus_notify.application.use_cases.users import (
    create_user as create_user_uc,
    list_users_for_management,
)
from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotificationError
from campus_notify.infrastructure.database import get_db
from campus_notify.interfaces.api.dependencies import get_current_active_user
from campus_notify.interfaces.api.routes_helpers import http_error_from
from campus_notify.interfaces.api.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Add a user to the directory. Only owners may create other owners."""

    try:
        user = create_user_uc(
            db,
            name=user_in.name,
            email=user_in.email,
            role=user_in.role,
            branch_id=user_in.branch_id,
            year=user_in.year,
            semester=user_in.semester,
            actor=current_user,
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""

    return _to_read_model(current_user)


@router.get("/", response_model=list[UserRead])
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return users ordered owners first, then admins, then students."""

    try:
        users = list_users_for_management(db, actor=current_user, skip=skip, limit=limit)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return [_to_read_model(user) for user in users]


@router.post("/{user_id}/promote", response_model=UserRead)
def promote_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = promote_to_admin(db, actor=current_user, target_user_id=user_id)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(user)


@router.post("/{user_id}/demote", response_model=UserRead)
def demote_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = demote_to_student(db, actor=current_user, target_user_id=user_id)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Remove a user with their deliveries, preferences and authored notifications."""

    try:
        remove_user_uc(db, actor=current_user, target_user_id=user_id)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
