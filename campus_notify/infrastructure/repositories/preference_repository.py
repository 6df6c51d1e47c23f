"""Persistence layer for notification preferences."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy.orm import Session

from campus_notify.domain.entities import NotificationPreference, NotificationType
from campus_notify.infrastructure.models import NotificationPreferenceModel


class PreferenceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> NotificationPreference:
        models = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .all()
        )
        return NotificationPreference(
            user_id=user_id,
            flags={NotificationType(model.notification_type): model.enabled for model in models},
        )

    def upsert(
        self, user_id: int, flags: Mapping[NotificationType, bool]
    ) -> NotificationPreference:
        existing = {
            NotificationType(model.notification_type): model
            for model in self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .all()
        }
        for notification_type, enabled in flags.items():
            model = existing.get(notification_type)
            if model is None:
                model = NotificationPreferenceModel(
                    user_id=user_id, notification_type=notification_type
                )
            model.enabled = bool(enabled)
            self.session.add(model)
        self.session.flush()
        return self.get(user_id)


__all__ = ["PreferenceRepository"]
