"""Schemas for recording domain events and triggering sweeps."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, Field

from campus_notify.domain.entities import DomainEventKind, OutboxEvent, ScheduledExam


class DomainEventCreate(BaseModel):
    kind: DomainEventKind
    payload: dict[str, Any]


class DomainEventRead(BaseModel):
    id: int
    kind: DomainEventKind
    status: str
    attempts: int
    last_error: str | None = None
    notification_id: int | None = None
    created_at: datetime | None = None
    processed_at: datetime | None = None

    @classmethod
    def from_entity(cls, event: OutboxEvent) -> "DomainEventRead":
        return cls(
            id=event.id or 0,
            kind=event.kind,
            status=event.status,
            attempts=event.attempts,
            last_error=event.last_error,
            notification_id=event.notification_id,
            created_at=event.created_at,
            processed_at=event.processed_at,
        )


class OutboxRunRead(BaseModel):
    processed: int
    failed: int
    skipped: int


class ScheduledExamPayload(BaseModel):
    id: str
    subject_code: str
    subject_name: str
    exam_type: str
    exam_date: date
    branch_id: str
    semester: int = Field(..., ge=1)
    start_time: time | None = None
    room_number: str | None = None

    def to_entity(self) -> ScheduledExam:
        return ScheduledExam(**self.model_dump())


class ExamSweepRequest(BaseModel):
    exams: list[ScheduledExamPayload]
    today: date | None = None


class ExamSweepResult(BaseModel):
    handled: int
