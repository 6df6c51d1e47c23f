"""ORM models used by the application infrastructure."""

from .notification import DeliveryModel, NotificationModel
from .outbox import OutboxEventModel
from .preference import NotificationPreferenceModel
from .user import UserModel

__all__ = [
    "DeliveryModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "OutboxEventModel",
    "UserModel",
]
