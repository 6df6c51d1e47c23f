"""Build notification drafts from domain events.

These functions are pure: they decide title, body, priority, targeting and
expiration for each kind of domain event without touching the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from campus_notify.config import get_settings
from campus_notify.domain.entities import (
    ExamReminderWindow,
    NotificationPriority,
    NotificationType,
    PostedOpportunity,
    PublishedEvent,
    RegisteredUser,
    RelatedResource,
    ScheduledExam,
    TargetingSpec,
    TimetableChange,
    explicit_users,
    filtered,
)
from campus_notify.utils import ensure_app_timezone, start_of_app_day

WEEK_WINDOW_DAYS = 7
DAY_WINDOW_DAYS = 1


@dataclass(frozen=True)
class NotificationDraft:
    title: str
    body: str
    notification_type: NotificationType
    targeting: TargetingSpec
    priority: NotificationPriority = NotificationPriority.NORMAL
    expires_at: datetime | None = None
    related_resource: RelatedResource | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    dedupe_key: str | None = None


def draft_for_published_event(event: PublishedEvent, *, now: datetime) -> NotificationDraft | None:
    if not event.is_published:
        return None

    event_date = ensure_app_timezone(event.event_date)
    expires_at = event_date + timedelta(days=1) if event_date else None
    if expires_at is not None and expires_at <= now:
        return None

    body = f"A new event has been added. Check it out: {event.title}"
    if event_date is not None:
        body += f" on {event_date.date().isoformat()}"
    return NotificationDraft(
        title=f"New Event: {event.title}",
        body=body,
        notification_type=NotificationType.EVENT,
        targeting=filtered(branches=event.branches, semesters=event.semesters),
        expires_at=expires_at,
        related_resource=RelatedResource(kind="event", id=str(event.id)),
        metadata={
            "event_id": str(event.id),
            "event_date": event_date.isoformat() if event_date else None,
        },
        dedupe_key=f"event:{event.id}:published",
    )


def draft_for_posted_opportunity(
    opportunity: PostedOpportunity, *, now: datetime
) -> NotificationDraft | None:
    if not opportunity.is_published:
        return None

    deadline = ensure_app_timezone(opportunity.deadline)
    if deadline is not None and deadline <= now:
        return None

    urgency_window = timedelta(days=get_settings().opportunity_urgency_window_days)
    priority = NotificationPriority.NORMAL
    if deadline is not None and deadline < now + urgency_window:
        priority = NotificationPriority.HIGH

    company = opportunity.company_name or "a company"
    body = (
        f"A new {opportunity.opportunity_type.lower()} opportunity has been posted at "
        f"{company}. "
    )
    body += (
        f"Deadline: {deadline.date().isoformat()}" if deadline else "Check it out now!"
    )
    return NotificationDraft(
        title=f"New {opportunity.opportunity_type}: {opportunity.title}",
        body=body,
        notification_type=NotificationType.OPPORTUNITY,
        targeting=filtered(branches=opportunity.branches, years=opportunity.years),
        priority=priority,
        expires_at=deadline,
        related_resource=RelatedResource(kind="opportunity", id=str(opportunity.id)),
        metadata={
            "opportunity_id": str(opportunity.id),
            "type": opportunity.opportunity_type,
            "company": opportunity.company_name,
        },
        dedupe_key=f"opportunity:{opportunity.id}:posted",
    )


def draft_for_timetable_change(change: TimetableChange, *, now: datetime) -> NotificationDraft:
    ttl = timedelta(days=get_settings().timetable_notification_ttl_days)
    return NotificationDraft(
        title="Timetable Updated",
        body="Your timetable has been updated. Please check for any changes in schedule.",
        notification_type=NotificationType.TIMETABLE_UPDATE,
        targeting=filtered(branches=[change.branch_id], semesters=[change.semester]),
        expires_at=now + ttl,
        related_resource=RelatedResource(kind="timetable", id=str(change.id)),
        metadata={"branch_id": change.branch_id, "semester": change.semester},
        dedupe_key=f"timetable:{change.id}",
    )


def draft_for_registered_user(user: RegisteredUser, *, now: datetime) -> NotificationDraft:
    ttl = timedelta(days=get_settings().welcome_notification_ttl_days)
    return NotificationDraft(
        title="Welcome to the Student Portal!",
        body=(
            f"Welcome {user.name}! You can now access notes, timetables, events, and "
            "opportunities. Update your profile to get personalized content for your "
            "branch and semester."
        ),
        notification_type=NotificationType.WELCOME,
        targeting=explicit_users([user.id]),
        expires_at=now + ttl,
        related_resource=RelatedResource(kind="user", id=str(user.id)),
        dedupe_key=f"welcome:{user.id}",
    )


def exam_reminder_window(exam_date: date, *, today: date) -> ExamReminderWindow | None:
    """Return the reminder window ``exam_date`` falls in, if any.

    Exams one day away (or today) get the ``day`` reminder; exams two to seven
    days away get the ``week`` reminder.
    """

    days_until = (exam_date - today).days
    if 0 <= days_until <= DAY_WINDOW_DAYS:
        return ExamReminderWindow.DAY
    if DAY_WINDOW_DAYS < days_until <= WEEK_WINDOW_DAYS:
        return ExamReminderWindow.WEEK
    return None


def draft_for_exam(exam: ScheduledExam, *, today: date) -> NotificationDraft | None:
    window = exam_reminder_window(exam.exam_date, today=today)
    if window is None:
        return None

    days_until = (exam.exam_date - today).days
    start = exam.start_time.strftime("%H:%M") if exam.start_time else "TBA"
    if window is ExamReminderWindow.DAY:
        when = "TOMORROW" if days_until == 1 else "TODAY"
        title = f"Exam {when.title()}: {exam.subject_code}"
        body = (
            f"REMINDER: Your {exam.exam_type} exam for {exam.subject_name} is {when} "
            f"({exam.exam_date.isoformat()}) at {start}. "
            f"Room: {exam.room_number or 'TBA'}. Good luck!"
        )
        priority = NotificationPriority.HIGH
    else:
        title = f"Exam in {days_until} Days: {exam.subject_code}"
        body = (
            f"Your {exam.exam_type} exam for {exam.subject_name} is scheduled for "
            f"{exam.exam_date.isoformat()} at {start}. Start preparing now!"
        )
        priority = NotificationPriority.NORMAL

    expires_at = start_of_app_day(exam.exam_date + timedelta(days=1))
    return NotificationDraft(
        title=title,
        body=body,
        notification_type=NotificationType.EXAM_REMINDER,
        targeting=filtered(branches=[exam.branch_id], semesters=[exam.semester]),
        priority=priority,
        expires_at=expires_at,
        related_resource=RelatedResource(kind="exam", id=str(exam.id)),
        metadata={
            "exam_id": str(exam.id),
            "days_until": days_until,
            "window": window.value,
        },
        dedupe_key=f"exam:{exam.id}:{window.value}",
    )


__all__ = [
    "NotificationDraft",
    "draft_for_exam",
    "draft_for_posted_opportunity",
    "draft_for_published_event",
    "draft_for_registered_user",
    "draft_for_timetable_change",
    "exam_reminder_window",
]
