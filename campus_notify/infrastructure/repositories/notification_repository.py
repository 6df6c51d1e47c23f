"""Persistence helpers for notification definitions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from campus_notify.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationStats,
    NotificationType,
    RelatedResource,
    targeting_from_payload,
    targeting_to_payload,
)
from campus_notify.infrastructure.models import DeliveryModel, NotificationModel
from campus_notify.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

_BULK = {"synchronize_session": False}


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def get_by_dedupe_key(self, dedupe_key: str) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.dedupe_key == dedupe_key)
            .first()
        )
        return self._to_entity(model) if model else None

    def list(self, *, skip: int = 0, limit: int = 50) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def refresh_recipient_count(self, notification_id: int) -> int:
        """Recompute ``recipient_count`` from the delivery rows and store it."""

        count = self.session.scalar(
            select(func.count())
            .select_from(DeliveryModel)
            .where(DeliveryModel.notification_id == notification_id)
        ) or 0
        self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(recipient_count=count),
            execution_options=_BULK,
        )
        self.session.expire_all()
        return count

    def delete(self, notification_id: int) -> bool:
        self.session.execute(
            delete(DeliveryModel).where(DeliveryModel.notification_id == notification_id),
            execution_options=_BULK,
        )
        result = self.session.execute(
            delete(NotificationModel).where(NotificationModel.id == notification_id),
            execution_options=_BULK,
        )
        self.session.expire_all()
        return bool(result.rowcount)

    def delete_expired_before(self, cutoff: datetime) -> int:
        """Delete notifications that expired before ``cutoff`` and their deliveries."""

        naive_cutoff = ensure_app_naive_datetime(cutoff)
        expired = select(NotificationModel.id).where(
            NotificationModel.expires_at.is_not(None),
            NotificationModel.expires_at < naive_cutoff,
        )
        self.session.execute(
            delete(DeliveryModel).where(DeliveryModel.notification_id.in_(expired)),
            execution_options=_BULK,
        )
        result = self.session.execute(
            delete(NotificationModel).where(
                NotificationModel.expires_at.is_not(None),
                NotificationModel.expires_at < naive_cutoff,
            ),
            execution_options=_BULK,
        )
        self.session.expire_all()
        return result.rowcount or 0

    def stats(self) -> NotificationStats:
        total_notifications, total_recipients = self.session.execute(
            select(
                func.count(NotificationModel.id),
                func.coalesce(func.sum(NotificationModel.recipient_count), 0),
            )
        ).one()
        read_deliveries = self.session.scalar(
            select(func.count())
            .select_from(DeliveryModel)
            .where(DeliveryModel.is_read.is_(True))
        ) or 0
        all_deliveries = self.session.scalar(
            select(func.count()).select_from(DeliveryModel)
        ) or 0
        return NotificationStats(
            total_notifications=total_notifications or 0,
            total_recipients=int(total_recipients or 0),
            read_deliveries=read_deliveries,
            unread_deliveries=all_deliveries - read_deliveries,
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        now = ensure_app_naive_datetime(now_in_app_timezone())
        model.title = notification.title
        model.body = notification.body
        model.type = notification.type
        model.priority = notification.priority
        model.targeting = targeting_to_payload(notification.targeting)
        model.scheduled_for = ensure_app_naive_datetime(notification.scheduled_for) or now
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)
        if notification.related_resource is not None:
            model.related_resource_kind = notification.related_resource.kind
            model.related_resource_id = str(notification.related_resource.id)
        model.extra_data = notification.metadata or {}
        model.dedupe_key = notification.dedupe_key
        model.created_by = notification.created_by
        model.recipient_count = notification.recipient_count
        model.created_at = ensure_app_naive_datetime(notification.created_at) or now

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        related = None
        if model.related_resource_kind:
            related = RelatedResource(
                kind=model.related_resource_kind, id=model.related_resource_id or ""
            )
        return Notification(
            id=model.id,
            title=model.title,
            body=model.body,
            type=NotificationType(model.type),
            priority=NotificationPriority(model.priority),
            targeting=targeting_from_payload(model.targeting),
            scheduled_for=ensure_app_timezone(model.scheduled_for),
            expires_at=ensure_app_timezone(model.expires_at),
            related_resource=related,
            metadata=model.extra_data or {},
            dedupe_key=model.dedupe_key,
            created_by=model.created_by,
            recipient_count=model.recipient_count or 0,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
