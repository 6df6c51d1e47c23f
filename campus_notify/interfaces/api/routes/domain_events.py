"""Routes used by content collaborators to report domain events."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from campus_notify.application.use_cases.domain_events import (
    process_domain_events,
    record_domain_event,
    send_exam_reminders,
)
from campus_notify.application.use_cases.domain_events.adapters import SessionFactory
from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotificationError
from campus_notify.infrastructure.database import get_db
from campus_notify.interfaces.api.dependencies import (
    get_current_active_user,
    get_session_factory,
)
from campus_notify.interfaces.api.routes_helpers import http_error_from
from campus_notify.interfaces.api.schemas import (
    DomainEventCreate,
    DomainEventRead,
    ExamSweepRequest,
    ExamSweepResult,
    OutboxRunRead,
)

router = APIRouter(prefix="/domain-events", tags=["domain-events"])


@router.post("/", response_model=DomainEventRead, status_code=status.HTTP_202_ACCEPTED)
def report_domain_event(
    event_in: DomainEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DomainEventRead:
    """Queue a domain event; its notification is produced by the next outbox run."""

    try:
        event = record_domain_event(
            db, actor=current_user, kind=event_in.kind, payload=event_in.payload
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return DomainEventRead.from_entity(event)


@router.post("/process", response_model=OutboxRunRead)
def process_pending_events(
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(get_current_active_user),
    session_factory: SessionFactory = Depends(get_session_factory),
) -> OutboxRunRead:
    try:
        summary = process_domain_events(
            session_factory=session_factory, limit=limit, actor=current_user
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return OutboxRunRead(
        processed=summary.processed, failed=summary.failed, skipped=summary.skipped
    )


@router.post("/exam-sweep", response_model=ExamSweepResult)
def run_exam_sweep(
    sweep_in: ExamSweepRequest,
    current_user: User = Depends(get_current_active_user),
    session_factory: SessionFactory = Depends(get_session_factory),
) -> ExamSweepResult:
    """Send the week and day reminders that are due for the posted exams."""

    try:
        handled = send_exam_reminders(
            [exam.to_entity() for exam in sweep_in.exams],
            today=sweep_in.today,
            session_factory=session_factory,
            actor=current_user,
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return ExamSweepResult(handled=handled)
