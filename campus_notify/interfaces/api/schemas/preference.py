"""Schemas for per-user notification preferences."""

from pydantic import BaseModel, Field

from campus_notify.domain.entities import NotificationPreference, NotificationType


class PreferencesRead(BaseModel):
    user_id: int
    preferences: dict[NotificationType, bool]

    @classmethod
    def from_entity(cls, preference: NotificationPreference) -> "PreferencesRead":
        return cls(user_id=preference.user_id, preferences=preference.as_full_mapping())


class PreferencesUpdate(BaseModel):
    """Flags to store; notification types left out keep their current value."""

    preferences: dict[NotificationType, bool] = Field(..., min_length=1)
