"""Endpoints for broadcasting notifications and reading the personal inbox."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from campus_notify.application.use_cases.notifications import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    create_and_deliver_notification,
    delete_notification as delete_notification_uc,
    dismiss_notification as dismiss_notification_uc,
    get_notification as get_notification_uc,
    get_notification_stats as get_notification_stats_uc,
    get_unread_notification_count,
    get_user_notifications,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
)
from campus_notify.domain.entities import User
from campus_notify.domain.exceptions import NotificationError
from campus_notify.infrastructure.database import get_db
from campus_notify.interfaces.api.dependencies import get_current_active_user
from campus_notify.interfaces.api.routes_helpers import http_error_from
from campus_notify.interfaces.api.schemas import (
    MarkAllReadResult,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationPageRead,
    NotificationRead,
    NotificationStatsRead,
    ReadStateResult,
    UnreadCountRead,
    UserNotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Create a notification and deliver it to the resolved audience."""

    try:
        notification = create_and_deliver_notification(
            db,
            title=notification_in.title,
            body=notification_in.body,
            notification_type=notification_in.type,
            priority=notification_in.priority,
            targeting=notification_in.targeting.to_spec(),
            scheduled_for=notification_in.scheduled_for,
            expires_at=notification_in.expires_at,
            related_resource=notification_in.related_resource_entity(),
            metadata=notification_in.metadata,
            created_by=current_user.id,
            creator_role=current_user.role,
        )
    except (NotificationError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return NotificationRead.from_entity(notification)


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return stored notifications, newest first, for the admin dashboard."""

    try:
        notifications = list_notifications_uc(
            db, actor_role=current_user.role, skip=skip, limit=limit
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.get("/stats", response_model=NotificationStatsRead)
def read_notification_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationStatsRead:
    try:
        stats = get_notification_stats_uc(db, actor_role=current_user.role)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return NotificationStatsRead(
        total_notifications=stats.total_notifications,
        total_recipients=stats.total_recipients,
        read_deliveries=stats.read_deliveries,
        unread_deliveries=stats.unread_deliveries,
    )


@router.get("/me", response_model=NotificationPageRead)
def read_my_notifications(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    include_dismissed: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPageRead:
    """Return a page of live notifications delivered to the authenticated user."""

    try:
        page = get_user_notifications(
            db,
            user_id=current_user.id,
            limit=limit,
            offset=offset,
            include_dismissed=include_dismissed,
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return NotificationPageRead(
        items=[UserNotificationRead.from_entity(item) for item in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )


@router.get("/me/unread-count", response_model=UnreadCountRead)
def read_my_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    try:
        count = get_unread_notification_count(db, user_id=current_user.id)
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return UnreadCountRead(unread_count=count)


@router.post("/read-all", response_model=MarkAllReadResult)
def mark_all_read(
    payload: NotificationMarkReadRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResult:
    """Mark every unread notification of the user, or the listed ones, as read."""

    notification_ids = payload.unique_ids() if payload is not None else None
    updated = mark_all_notifications_read(
        db, user_id=current_user.id, notification_ids=notification_ids
    )
    return MarkAllReadResult(updated=updated)


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    try:
        notification = get_notification_uc(
            db, notification_id=notification_id, actor_role=current_user.role
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return NotificationRead.from_entity(notification)


@router.post("/{notification_id}/read", response_model=ReadStateResult)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ReadStateResult:
    try:
        success = mark_notification_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return ReadStateResult(success=success)


@router.post("/{notification_id}/dismiss", response_model=ReadStateResult)
def dismiss(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ReadStateResult:
    try:
        success = dismiss_notification_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    return ReadStateResult(success=success)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Delete a notification together with all of its deliveries."""

    try:
        delete_notification_uc(
            db, notification_id=notification_id, actor_role=current_user.role
        )
    except NotificationError as exc:
        raise http_error_from(exc) from exc
    logger.info("User %s deleted notification %s", current_user.id, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
