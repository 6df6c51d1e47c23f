"""Outbox for domain events emitted inside a collaborator's transaction.

A collaborator records the event with :func:`enqueue_domain_event` in the same
transaction as its own write; the row only becomes visible once that
transaction commits. :func:`process_domain_events` later drains pending rows
and runs the matching adapter in an isolated session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from campus_notify.application.use_cases.roles.guard import Action, ensure_authorized
from campus_notify.config import get_settings
from campus_notify.domain.entities import (
    DomainEventKind,
    OutboxEvent,
    PostedOpportunity,
    PublishedEvent,
    RegisteredUser,
    TimetableChange,
    User,
)
from campus_notify.domain.exceptions import InvalidTargeting
from campus_notify.infrastructure.repositories import OutboxRepository
from campus_notify.utils import now_in_app_timezone

from .adapters import SessionFactory, default_session_factory, deliver_draft
from .drafts import (
    draft_for_posted_opportunity,
    draft_for_published_event,
    draft_for_registered_user,
    draft_for_timetable_change,
)

logger = logging.getLogger(__name__)

_PAYLOAD_TYPES: dict[DomainEventKind, type] = {
    DomainEventKind.EVENT_PUBLISHED: PublishedEvent,
    DomainEventKind.OPPORTUNITY_POSTED: PostedOpportunity,
    DomainEventKind.TIMETABLE_UPDATED: TimetableChange,
    DomainEventKind.USER_REGISTERED: RegisteredUser,
}
_DRAFT_BUILDERS = {
    DomainEventKind.EVENT_PUBLISHED: draft_for_published_event,
    DomainEventKind.OPPORTUNITY_POSTED: draft_for_posted_opportunity,
    DomainEventKind.TIMETABLE_UPDATED: draft_for_timetable_change,
    DomainEventKind.USER_REGISTERED: draft_for_registered_user,
}


@dataclass(frozen=True)
class OutboxRunSummary:
    processed: int
    failed: int
    skipped: int


def encode_payload(kind: DomainEventKind, payload: Any) -> dict[str, Any]:
    """Validate ``payload`` for ``kind`` and return its JSON form.

    The draft is built once so that a payload whose targeting can never be
    delivered is rejected here instead of failing on every outbox run.
    """

    payload_type = _PAYLOAD_TYPES[kind]
    adapter = TypeAdapter(payload_type)
    try:
        value = payload if isinstance(payload, payload_type) else adapter.validate_python(payload)
        _DRAFT_BUILDERS[kind](value, now=now_in_app_timezone())
    except (ValidationError, InvalidTargeting) as exc:
        raise ValueError(f"Invalid payload for '{kind.value}': {exc}") from exc
    return adapter.dump_python(value, mode="json")


def decode_payload(kind: DomainEventKind, payload: dict[str, Any]):
    return TypeAdapter(_PAYLOAD_TYPES[kind]).validate_python(payload)


def enqueue_domain_event(
    session: Session, *, kind: DomainEventKind, payload: Any
) -> OutboxEvent:
    """Record a domain event in the caller's transaction. Does not commit."""

    return OutboxRepository(session).add(
        OutboxEvent(
            id=None,
            kind=kind,
            payload=encode_payload(kind, payload),
            created_at=now_in_app_timezone(),
        )
    )


def record_domain_event(
    session: Session, *, actor: User, kind: DomainEventKind, payload: Any
) -> OutboxEvent:
    """Queue an event reported by ``actor`` and commit it."""

    ensure_authorized(actor.role, Action.PROCESS_DOMAIN_EVENTS)
    try:
        event = enqueue_domain_event(session, kind=kind, payload=payload)
    except ValueError:
        session.rollback()
        raise
    session.commit()
    logger.info("User %s queued domain event %s (%s)", actor.id, event.id, event.kind.value)
    return event


def process_domain_events(
    *,
    session_factory: SessionFactory | None = None,
    limit: int = 100,
    max_attempts: int | None = None,
    actor: User | None = None,
) -> OutboxRunSummary:
    """Run the adapter for up to ``limit`` pending events.

    Each event is handled independently: a failing adapter or a failing status
    update only records the error on its own row (parking it after
    ``max_attempts``) and the loop moves on. A retried event converges on the
    notification already delivered for its dedupe key. ``actor`` is checked
    against the role guard when the run is requested by a user.
    """

    if actor is not None:
        ensure_authorized(actor.role, Action.PROCESS_DOMAIN_EVENTS)

    factory = session_factory or default_session_factory()
    max_attempts = max_attempts or get_settings().outbox_max_attempts
    processed = failed = skipped = 0

    session = factory()
    try:
        repository = OutboxRepository(session)
        for event in repository.list_pending(limit=limit):
            now = now_in_app_timezone()
            try:
                draft = _DRAFT_BUILDERS[event.kind](
                    decode_payload(event.kind, event.payload), now=now
                )
                notification_id = None
                if draft is not None:
                    notification_id = deliver_draft(draft, session_factory=factory).id
                repository.mark_processed(
                    event.id, notification_id=notification_id, processed_at=now
                )
                session.commit()
            except Exception as exc:
                session.rollback()
                logger.exception("Outbox event %s (%s) failed", event.id, event.kind.value)
                repository.record_failure(
                    event.id, error=_describe(exc), max_attempts=max_attempts
                )
                session.commit()
                failed += 1
                continue

            if draft is None:
                skipped += 1
            processed += 1
    finally:
        session.close()

    if processed or failed:
        logger.info("Outbox run: %s processed, %s failed, %s skipped", processed, failed, skipped)
    return OutboxRunSummary(processed=processed, failed=failed, skipped=skipped)


def _describe(exc: Exception) -> str:
    cause = exc.__cause__
    if cause is not None:
        return f"{exc} ({type(cause).__name__}: {cause})"
    return str(exc)


__all__ = [
    "OutboxRunSummary",
    "decode_payload",
    "encode_payload",
    "enqueue_domain_event",
    "process_domain_events",
    "record_domain_event",
]
