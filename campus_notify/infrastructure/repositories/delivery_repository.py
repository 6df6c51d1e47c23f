"""Persistence helpers for per-recipient delivery rows."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from campus_notify.domain.entities import Delivery, UserNotification
from campus_notify.infrastructure.models import DeliveryModel, NotificationModel
from campus_notify.utils import ensure_app_naive_datetime, ensure_app_timezone

from .notification_repository import NotificationRepository

_BULK = {"synchronize_session": False}
_INSERT_BATCH_SIZE = 500
_UPSERT_DIALECTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class DeliveryRepository:
    """Provide bulk fan-out and read-state mutations for :class:`Delivery` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int, user_id: int) -> Delivery | None:
        model = self._get_model(notification_id, user_id)
        return self._to_entity(model) if model else None

    def insert_many(
        self, notification_id: int, user_ids: Iterable[int], *, created_at: datetime
    ) -> int:
        """Insert one row per user, skipping pairs that already exist.

        Returns the number of rows actually inserted.
        """

        pending = sorted(set(user_ids))
        if not pending:
            return 0

        naive_created_at = ensure_app_naive_datetime(created_at)
        dialect = self.session.get_bind().dialect.name
        insert_factory = _UPSERT_DIALECTS.get(dialect)
        if insert_factory is None:
            existing = set(
                self.session.scalars(
                    select(DeliveryModel.user_id).where(
                        DeliveryModel.notification_id == notification_id
                    )
                ).all()
            )
            pending = [user_id for user_id in pending if user_id not in existing]

        inserted = 0
        for start in range(0, len(pending), _INSERT_BATCH_SIZE):
            rows = [
                {
                    "notification_id": notification_id,
                    "user_id": user_id,
                    "is_read": False,
                    "is_dismissed": False,
                    "created_at": naive_created_at,
                }
                for user_id in pending[start : start + _INSERT_BATCH_SIZE]
            ]
            if insert_factory is not None:
                statement = (
                    insert_factory(DeliveryModel)
                    .values(rows)
                    .on_conflict_do_nothing(index_elements=["notification_id", "user_id"])
                )
                result = self.session.execute(statement)
                inserted += max(result.rowcount or 0, 0)
            else:
                self.session.execute(DeliveryModel.__table__.insert(), rows)
                inserted += len(rows)
        return inserted

    def mark_read(self, notification_id: int, user_id: int, *, read_at: datetime) -> int:
        """Mark the delivery as read; rows that are already read stay untouched."""

        result = self.session.execute(
            update(DeliveryModel)
            .where(
                DeliveryModel.notification_id == notification_id,
                DeliveryModel.user_id == user_id,
                DeliveryModel.is_read.is_(False),
            )
            .values(is_read=True, read_at=ensure_app_naive_datetime(read_at)),
            execution_options=_BULK,
        )
        self.session.expire_all()
        return result.rowcount or 0

    def mark_all_read(
        self,
        user_id: int,
        *,
        read_at: datetime,
        notification_ids: Iterable[int] | None = None,
    ) -> int:
        statement = update(DeliveryModel).where(
            DeliveryModel.user_id == user_id,
            DeliveryModel.is_read.is_(False),
        )
        if notification_ids is not None:
            ids = [notification_id for notification_id in notification_ids if notification_id]
            if not ids:
                return 0
            statement = statement.where(DeliveryModel.notification_id.in_(ids))
        result = self.session.execute(
            statement.values(is_read=True, read_at=ensure_app_naive_datetime(read_at)),
            execution_options=_BULK,
        )
        self.session.expire_all()
        return result.rowcount or 0

    def dismiss(self, notification_id: int, user_id: int, *, dismissed_at: datetime) -> None:
        model = self._get_model(notification_id, user_id)
        if model is None:
            return
        naive = ensure_app_naive_datetime(dismissed_at)
        if not model.is_dismissed:
            model.is_dismissed = True
            model.dismissed_at = naive
        if not model.is_read:
            model.is_read = True
            model.read_at = naive
        self.session.add(model)
        self.session.flush()

    def count_unread_live(self, user_id: int, *, now: datetime) -> int:
        query = (
            select(func.count())
            .select_from(DeliveryModel)
            .join(NotificationModel, DeliveryModel.notification_id == NotificationModel.id)
            .where(
                DeliveryModel.user_id == user_id,
                DeliveryModel.is_read.is_(False),
                *self._live_criteria(now),
            )
        )
        return self.session.scalar(query) or 0

    def list_live_for_user(
        self,
        user_id: int,
        *,
        now: datetime,
        limit: int,
        offset: int,
        include_dismissed: bool = False,
    ) -> tuple[list[UserNotification], int]:
        """Return one page of live deliveries, newest notification first, and the total."""

        criteria = [DeliveryModel.user_id == user_id, *self._live_criteria(now)]
        if not include_dismissed:
            criteria.append(DeliveryModel.is_dismissed.is_(False))

        total = self.session.scalar(
            select(func.count())
            .select_from(DeliveryModel)
            .join(NotificationModel, DeliveryModel.notification_id == NotificationModel.id)
            .where(*criteria)
        ) or 0

        rows = self.session.execute(
            select(DeliveryModel, NotificationModel)
            .join(NotificationModel, DeliveryModel.notification_id == NotificationModel.id)
            .where(*criteria)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(offset)
            .limit(limit)
        ).all()
        items = [
            UserNotification(
                delivery=self._to_entity(delivery),
                notification=NotificationRepository._to_entity(notification),
            )
            for delivery, notification in rows
        ]
        return items, total

    @staticmethod
    def _live_criteria(now: datetime) -> list:
        naive_now = ensure_app_naive_datetime(now)
        return [
            NotificationModel.scheduled_for <= naive_now,
            or_(
                NotificationModel.expires_at.is_(None),
                NotificationModel.expires_at > naive_now,
            ),
        ]

    def _get_model(self, notification_id: int, user_id: int) -> DeliveryModel | None:
        return (
            self.session.query(DeliveryModel)
            .filter(
                and_(
                    DeliveryModel.notification_id == notification_id,
                    DeliveryModel.user_id == user_id,
                )
            )
            .first()
        )

    @staticmethod
    def _to_entity(model: DeliveryModel) -> Delivery:
        return Delivery(
            notification_id=model.notification_id,
            user_id=model.user_id,
            is_read=model.is_read,
            read_at=ensure_app_timezone(model.read_at),
            is_dismissed=model.is_dismissed,
            dismissed_at=ensure_app_timezone(model.dismissed_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["DeliveryRepository"]
