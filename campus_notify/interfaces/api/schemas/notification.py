"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from campus_notify.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    RelatedResource,
    TargetingSpec,
    UserNotification,
    targeting_from_payload,
    targeting_to_payload,
)


class TargetingPayload(BaseModel):
    """Audience selector; omitted filter dimensions match everyone."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["all", "filtered", "users"]
    branches: list[str] | None = None
    semesters: list[int] | None = None
    years: list[int] | None = None
    user_ids: list[int] | None = None

    def to_spec(self) -> TargetingSpec:
        """Return the domain targeting variant; raises ``InvalidTargeting``."""

        return targeting_from_payload(self.model_dump())


class RelatedResourcePayload(BaseModel):
    kind: str = Field(..., min_length=1, max_length=50)
    id: str = Field(..., min_length=1, max_length=64)


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.CUSTOM
    priority: NotificationPriority = NotificationPriority.NORMAL
    targeting: TargetingPayload
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None
    related_resource: RelatedResourcePayload | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def related_resource_entity(self) -> RelatedResource | None:
        if self.related_resource is None:
            return None
        return RelatedResource(kind=self.related_resource.kind, id=self.related_resource.id)


class NotificationRead(BaseModel):
    """Stored broadcast definition as seen by administrators."""

    id: int
    title: str
    body: str
    type: NotificationType
    priority: NotificationPriority
    targeting: dict[str, Any]
    scheduled_for: datetime | None
    expires_at: datetime | None
    related_resource: RelatedResourcePayload | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_by: int | None
    recipient_count: int
    created_at: datetime | None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or 0,
            title=notification.title,
            body=notification.body,
            type=notification.type,
            priority=notification.priority,
            targeting=targeting_to_payload(notification.targeting),
            scheduled_for=notification.scheduled_for,
            expires_at=notification.expires_at,
            related_resource=_related_resource(notification),
            metadata=notification.metadata or {},
            created_by=notification.created_by,
            recipient_count=notification.recipient_count,
            created_at=notification.created_at,
        )


class UserNotificationRead(BaseModel):
    """A notification delivered to the authenticated user, with its read state."""

    id: int
    title: str
    body: str
    type: NotificationType
    priority: NotificationPriority
    related_resource: RelatedResourcePayload | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    scheduled_for: datetime | None
    expires_at: datetime | None
    created_at: datetime | None
    is_read: bool
    read_at: datetime | None = None
    is_dismissed: bool = False
    delivered_at: datetime | None = None

    @classmethod
    def from_entity(cls, item: UserNotification) -> "UserNotificationRead":
        notification, delivery = item.notification, item.delivery
        return cls(
            id=notification.id or 0,
            title=notification.title,
            body=notification.body,
            type=notification.type,
            priority=notification.priority,
            related_resource=_related_resource(notification),
            metadata=notification.metadata or {},
            scheduled_for=notification.scheduled_for,
            expires_at=notification.expires_at,
            created_at=notification.created_at,
            is_read=delivery.is_read,
            read_at=delivery.read_at,
            is_dismissed=delivery.is_dismissed,
            delivered_at=delivery.created_at,
        )


class NotificationPageRead(BaseModel):
    items: list[UserNotificationRead]
    total: int
    limit: int
    offset: int


class UnreadCountRead(BaseModel):
    unread_count: int


class NotificationMarkReadRequest(BaseModel):
    """Optional restriction of a mark-all-read request to specific notifications."""

    ids: list[int] | None = Field(default=None, description="Notification identifiers")

    def unique_ids(self) -> list[int] | None:
        """Return the identifiers without duplicates preserving order."""

        if self.ids is None:
            return None
        return list(dict.fromkeys(self.ids))


class MarkAllReadResult(BaseModel):
    updated: int


class ReadStateResult(BaseModel):
    success: bool


class NotificationStatsRead(BaseModel):
    total_notifications: int
    total_recipients: int
    read_deliveries: int
    unread_deliveries: int


def _related_resource(notification: Notification) -> RelatedResourcePayload | None:
    resource = notification.related_resource
    if resource is None:
        return None
    return RelatedResourcePayload(kind=resource.kind, id=resource.id)


__all__ = [
    "MarkAllReadResult",
    "NotificationCreate",
    "NotificationMarkReadRequest",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationStatsRead",
    "ReadStateResult",
    "RelatedResourcePayload",
    "TargetingPayload",
    "UnreadCountRead",
    "UserNotificationRead",
]
