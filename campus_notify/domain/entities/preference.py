"""Domain entity describing per-user notification opt-outs."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import NotificationType


@dataclass
class NotificationPreference:
    """Per-type opt-in flags for one user. Types without a stored flag are enabled."""

    user_id: int
    flags: dict[NotificationType, bool] = field(default_factory=dict)

    def is_enabled(self, notification_type: NotificationType) -> bool:
        return self.flags.get(notification_type, True)

    def as_full_mapping(self) -> dict[NotificationType, bool]:
        return {kind: self.is_enabled(kind) for kind in NotificationType}


__all__ = ["NotificationPreference"]
