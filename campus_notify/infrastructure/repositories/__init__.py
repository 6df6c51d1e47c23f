"""Repository implementations for infrastructure layer."""

from .delivery_repository import DeliveryRepository
from .notification_repository import NotificationRepository
from .outbox_repository import OutboxRepository
from .preference_repository import PreferenceRepository
from .user_repository import UserRepository

__all__ = [
    "DeliveryRepository",
    "NotificationRepository",
    "OutboxRepository",
    "PreferenceRepository",
    "UserRepository",
]
