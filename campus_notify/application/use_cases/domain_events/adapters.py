"""Post-commit hooks that turn domain events into delivered notifications.

Every hook runs in its own session. Failures are logged and swallowed so that
the operation which emitted the domain event (publishing an event, posting an
opportunity, editing a timetable, registering a user) is never rolled back or
blocked by the notification layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime

from sqlalchemy.orm import Session

from campus_notify.application.use_cases.notifications.create_and_deliver import (
    create_and_deliver_notification,
)
from campus_notify.application.use_cases.roles.guard import Action, ensure_authorized
from campus_notify.domain.entities import (
    Notification,
    PostedOpportunity,
    PublishedEvent,
    RegisteredUser,
    Role,
    ScheduledExam,
    TimetableChange,
    User,
)
from campus_notify.domain.exceptions import AdapterFailure
from campus_notify.utils import now_in_app_timezone, today_in_app_timezone

from .drafts import (
    NotificationDraft,
    draft_for_exam,
    draft_for_posted_opportunity,
    draft_for_published_event,
    draft_for_registered_user,
    draft_for_timetable_change,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]

# Adapters are trusted system code and create notifications with admin authority.
SYSTEM_ROLE = Role.ADMIN


def default_session_factory() -> SessionFactory:
    from campus_notify.infrastructure.database import SessionLocal

    return SessionLocal


def deliver_draft(
    draft: NotificationDraft, *, session_factory: SessionFactory | None = None
) -> Notification:
    """Create and deliver ``draft`` in a fresh session.

    Raises :class:`AdapterFailure` wrapping whatever went wrong.
    """

    session = (session_factory or default_session_factory())()
    try:
        return create_and_deliver_notification(
            session,
            title=draft.title,
            body=draft.body,
            notification_type=draft.notification_type,
            priority=draft.priority,
            targeting=draft.targeting,
            expires_at=draft.expires_at,
            related_resource=draft.related_resource,
            metadata=draft.metadata,
            dedupe_key=draft.dedupe_key,
            created_by=None,
            creator_role=SYSTEM_ROLE,
        )
    except Exception as exc:
        session.rollback()
        raise AdapterFailure(
            f"Could not deliver '{draft.notification_type.value}' notification "
            f"for {draft.related_resource}"
        ) from exc
    finally:
        session.close()


def _run_hook(
    hook: str,
    build: Callable[[], NotificationDraft | None],
    session_factory: SessionFactory | None,
) -> int | None:
    try:
        draft = build()
        if draft is None:
            logger.debug("Hook %s produced no notification", hook)
            return None
        notification = deliver_draft(draft, session_factory=session_factory)
    except Exception:
        logger.exception("Notification hook %s failed; the domain operation is unaffected", hook)
        return None
    return notification.id


def notify_event_published(
    event: PublishedEvent,
    *,
    session_factory: SessionFactory | None = None,
    now: datetime | None = None,
) -> int | None:
    """Announce a published event to its branches and semesters."""

    return _run_hook(
        "event.published",
        lambda: draft_for_published_event(event, now=now or now_in_app_timezone()),
        session_factory,
    )


def notify_opportunity_posted(
    opportunity: PostedOpportunity,
    *,
    session_factory: SessionFactory | None = None,
    now: datetime | None = None,
) -> int | None:
    return _run_hook(
        "opportunity.posted",
        lambda: draft_for_posted_opportunity(opportunity, now=now or now_in_app_timezone()),
        session_factory,
    )


def notify_timetable_updated(
    change: TimetableChange,
    *,
    session_factory: SessionFactory | None = None,
    now: datetime | None = None,
) -> int | None:
    return _run_hook(
        "timetable.updated",
        lambda: draft_for_timetable_change(change, now=now or now_in_app_timezone()),
        session_factory,
    )


def notify_user_registered(
    user: RegisteredUser,
    *,
    session_factory: SessionFactory | None = None,
    now: datetime | None = None,
) -> int | None:
    return _run_hook(
        "user.registered",
        lambda: draft_for_registered_user(user, now=now or now_in_app_timezone()),
        session_factory,
    )


def send_exam_reminders(
    exams: Iterable[ScheduledExam],
    *,
    today: date | None = None,
    session_factory: SessionFactory | None = None,
    actor: User | None = None,
) -> int:
    """Sweep upcoming exams and deliver the reminders that are due.

    Each ``(exam, window)`` pair is keyed, so running the sweep repeatedly never
    sends the same reminder twice. Returns the number of reminders handled.
    A sweep requested by ``actor`` is checked against the role guard first;
    the scheduler runs it without one.
    """

    if actor is not None:
        ensure_authorized(actor.role, Action.PROCESS_DOMAIN_EVENTS)

    today = today or today_in_app_timezone()
    handled = 0
    for exam in exams:
        notification_id = _run_hook(
            f"exam.reminder:{exam.id}",
            lambda exam=exam: draft_for_exam(exam, today=today),
            session_factory,
        )
        if notification_id is not None:
            handled += 1
    logger.info("Exam reminder sweep for %s handled %s reminders", today.isoformat(), handled)
    return handled


__all__ = [
    "SYSTEM_ROLE",
    "SessionFactory",
    "deliver_draft",
    "notify_event_published",
    "notify_opportunity_posted",
    "notify_timetable_updated",
    "notify_user_registered",
    "send_exam_reminders",
]
