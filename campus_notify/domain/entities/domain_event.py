"""Payloads emitted by the content-management collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any


class DomainEventKind(str, Enum):
    EVENT_PUBLISHED = "event.published"
    OPPORTUNITY_POSTED = "opportunity.posted"
    TIMETABLE_UPDATED = "timetable.updated"
    USER_REGISTERED = "user.registered"


class ExamReminderWindow(str, Enum):
    WEEK = "week"
    DAY = "day"


@dataclass(frozen=True)
class PublishedEvent:
    id: str
    title: str
    event_date: datetime | None = None
    branches: tuple[str, ...] | None = None
    semesters: tuple[int, ...] | None = None
    is_published: bool = True


@dataclass(frozen=True)
class PostedOpportunity:
    id: str
    title: str
    opportunity_type: str
    company_name: str | None = None
    deadline: datetime | None = None
    branches: tuple[str, ...] | None = None
    years: tuple[int, ...] | None = None
    is_published: bool = True


@dataclass(frozen=True)
class TimetableChange:
    id: str
    branch_id: str
    semester: int


@dataclass(frozen=True)
class RegisteredUser:
    id: int
    name: str


@dataclass(frozen=True)
class ScheduledExam:
    id: str
    subject_code: str
    subject_name: str
    exam_type: str
    exam_date: date
    branch_id: str
    semester: int
    start_time: time | None = None
    room_number: str | None = None


OUTBOX_STATUS_PENDING = "pending"
OUTBOX_STATUS_PROCESSED = "processed"
OUTBOX_STATUS_FAILED = "failed"


@dataclass
class OutboxEvent:
    """Domain event recorded by a collaborator for asynchronous notification."""

    id: int | None
    kind: DomainEventKind
    payload: dict[str, Any] = field(default_factory=dict)
    status: str = OUTBOX_STATUS_PENDING
    attempts: int = 0
    last_error: str | None = None
    created_at: datetime | None = None
    processed_at: datetime | None = None
    notification_id: int | None = None


__all__ = [
    "DomainEventKind",
    "ExamReminderWindow",
    "OUTBOX_STATUS_FAILED",
    "OUTBOX_STATUS_PENDING",
    "OUTBOX_STATUS_PROCESSED",
    "OutboxEvent",
    "PostedOpportunity",
    "PublishedEvent",
    "RegisteredUser",
    "ScheduledExam",
    "TimetableChange",
]
