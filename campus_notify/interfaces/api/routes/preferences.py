"""Routes letting users manage which notification types they receive."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_notify.application.use_cases.preferences import get_preferences, update_preferences
from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotificationError
from campus_notify.infrastructure.database import get_db
from campus_notify.interfaces.api.dependencies import get_current_active_user
from campus_notify.interfaces.api.routes_helpers import http_error_from
from campus_notify.interfaces.api.schemas import PreferencesRead, PreferencesUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/me", response_model=PreferencesRead)
def read_my_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PreferencesRead:
    try:
        preference = get_preferences(db, user_id=current_user.id)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return PreferencesRead.from_entity(preference)


@router.put("/me", response_model=PreferencesRead)
def update_my_preferences(
    preferences_in: PreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PreferencesRead:
    """Store opt-in flags; disabled types are skipped by future fan-outs."""

    try:
        preference = update_preferences(
            db, user_id=current_user.id, flags=preferences_in.preferences
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return PreferencesRead.from_entity(preference)
