"""Adapters turning domain events into notifications."""

from .adapters import (
    SYSTEM_ROLE,
    deliver_draft,
    notify_event_published,
    notify_opportunity_posted,
    notify_timetable_updated,
    notify_user_registered,
    send_exam_reminders,
)
from .drafts import NotificationDraft, exam_reminder_window
from .outbox import (
    OutboxRunSummary,
    enqueue_domain_event,
    process_domain_events,
    record_domain_event,
)

__all__ = [
    "NotificationDraft",
    "OutboxRunSummary",
    "SYSTEM_ROLE",
    "deliver_draft",
    "enqueue_domain_event",
    "exam_reminder_window",
    "notify_event_published",
    "notify_opportunity_posted",
    "notify_timetable_updated",
    "notify_user_registered",
    "process_domain_events",
    "record_domain_event",
    "send_exam_reminders",
]
