"""Persistence helpers for the domain-event outbox."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from campus_notify.domain.entities import (
    OUTBOX_STATUS_FAILED,
    OUTBOX_STATUS_PENDING,
    OUTBOX_STATUS_PROCESSED,
    DomainEventKind,
    OutboxEvent,
)
from campus_notify.infrastructure.models import OutboxEventModel
from campus_notify.utils import ensure_app_naive_datetime, ensure_app_timezone


class OutboxRepository:
    """Store domain events and track their processing state."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, event: OutboxEvent) -> OutboxEvent:
        model = OutboxEventModel(
            kind=event.kind.value,
            payload=event.payload or {},
            status=event.status,
            attempts=event.attempts,
        )
        if event.created_at is not None:
            model.created_at = ensure_app_naive_datetime(event.created_at)
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, event_id: int) -> OutboxEvent | None:
        model = self.session.get(OutboxEventModel, event_id)
        return self._to_entity(model) if model else None

    def list_pending(self, *, limit: int = 100) -> Sequence[OutboxEvent]:
        query = (
            self.session.query(OutboxEventModel)
            .filter(OutboxEventModel.status == OUTBOX_STATUS_PENDING)
            .order_by(OutboxEventModel.created_at.asc(), OutboxEventModel.id.asc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_processed(
        self, event_id: int, *, notification_id: int | None, processed_at: datetime
    ) -> None:
        model = self._require(event_id)
        model.status = OUTBOX_STATUS_PROCESSED
        model.attempts = (model.attempts or 0) + 1
        model.notification_id = notification_id
        model.processed_at = ensure_app_naive_datetime(processed_at)
        model.last_error = None
        self.session.add(model)
        self.session.flush()

    def record_failure(self, event_id: int, *, error: str, max_attempts: int) -> OutboxEvent:
        """Count a failed attempt, parking the event once ``max_attempts`` is reached."""

        model = self._require(event_id)
        model.attempts = (model.attempts or 0) + 1
        model.last_error = error
        if model.attempts >= max_attempts:
            model.status = OUTBOX_STATUS_FAILED
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def _require(self, event_id: int) -> OutboxEventModel:
        model = self.session.get(OutboxEventModel, event_id)
        if model is None:
            msg = f"Outbox event with id {event_id} not found"
            raise ValueError(msg)
        return model

    @staticmethod
    def _to_entity(model: OutboxEventModel) -> OutboxEvent:
        return OutboxEvent(
            id=model.id,
            kind=DomainEventKind(model.kind),
            payload=model.payload or {},
            status=model.status,
            attempts=model.attempts or 0,
            last_error=model.last_error,
            created_at=ensure_app_timezone(model.created_at),
            processed_at=ensure_app_timezone(model.processed_at),
            notification_id=model.notification_id,
        )


__all__ = ["OutboxRepository"]
