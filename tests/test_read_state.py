"""Tests for per-recipient read and dismiss state."""

from datetime import timedelta

import pytest

from campus_notify.application.use_cases.notifications import (
    create_and_deliver_notification,
    dismiss_notification,
    get_unread_notification_count,
    get_user_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from campus_notify.domain.entities import AllUsers, NotificationType, Role, explicit_users
from campus_notify.domain.exceptions import NotFound
from campus_notify.infrastructure.repositories import DeliveryRepository
from campus_notify.utils import now_in_app_timezone


@pytest.fixture()
def admin(make_user):
    return make_user(role=Role.ADMIN)


@pytest.fixture()
def send(session, admin):
    def _send(title="Notice", targeting=None, **options):
        return create_and_deliver_notification(
            session,
            title=title,
            body=f"{title} body",
            notification_type=NotificationType.CUSTOM,
            targeting=targeting or AllUsers(),
            created_by=admin.id,
            creator_role=admin.role,
            **options,
        )

    return _send


def test_mark_read_is_idempotent(session, make_user, send):
    student = make_user()
    notification = send()

    assert mark_notification_read(session, notification_id=notification.id, user_id=student.id)
    first = DeliveryRepository(session).get(notification.id, student.id)
    assert mark_notification_read(session, notification_id=notification.id, user_id=student.id)
    second = DeliveryRepository(session).get(notification.id, student.id)

    assert first.is_read is True
    assert first.read_at is not None
    assert second.read_at == first.read_at


def test_mark_read_without_delivery_raises(session, make_user, send, admin):
    student = make_user()
    notification = send(targeting=explicit_users([admin.id]))

    with pytest.raises(NotFound):
        mark_notification_read(session, notification_id=notification.id, user_id=student.id)


def test_unread_count_tracks_reads(session, make_user, send):
    student = make_user()
    first = send("First")
    send("Second")

    assert get_unread_notification_count(session, user_id=student.id) == 2
    mark_notification_read(session, notification_id=first.id, user_id=student.id)
    assert get_unread_notification_count(session, user_id=student.id) == 1


def test_unread_count_ignores_expired_and_future_notifications(session, make_user, send):
    student = make_user()
    now = now_in_app_timezone()
    send("Live")
    send("Expired", scheduled_for=now - timedelta(hours=2), expires_at=now - timedelta(hours=1))
    send("Later", scheduled_for=now + timedelta(days=1))

    assert get_unread_notification_count(session, user_id=student.id) == 1


def test_unread_count_for_unknown_user(session):
    with pytest.raises(NotFound):
        get_unread_notification_count(session, user_id=999)


def test_mark_all_read(session, make_user, send):
    student = make_user()
    send("One")
    send("Two")

    assert mark_all_notifications_read(session, user_id=student.id) == 2
    assert mark_all_notifications_read(session, user_id=student.id) == 0
    assert get_unread_notification_count(session, user_id=student.id) == 0


def test_mark_all_read_restricted_to_ids(session, make_user, send):
    student = make_user()
    first = send("One")
    send("Two")

    updated = mark_all_notifications_read(
        session, user_id=student.id, notification_ids=[first.id]
    )

    assert updated == 1
    assert get_unread_notification_count(session, user_id=student.id) == 1


def test_dismiss_hides_and_marks_read(session, make_user, send):
    student = make_user()
    kept = send("Kept")
    hidden = send("Hidden")

    assert dismiss_notification(session, notification_id=hidden.id, user_id=student.id)

    page = get_user_notifications(session, user_id=student.id)
    assert [item.notification.id for item in page.items] == [kept.id]
    assert get_unread_notification_count(session, user_id=student.id) == 1

    with_dismissed = get_user_notifications(
        session, user_id=student.id, include_dismissed=True
    )
    dismissed = next(
        item for item in with_dismissed.items if item.notification.id == hidden.id
    )
    assert dismissed.delivery.is_dismissed is True
    assert dismissed.delivery.is_read is True


def test_dismiss_without_delivery_raises(session, make_user):
    student = make_user()

    with pytest.raises(NotFound):
        dismiss_notification(session, notification_id=1, user_id=student.id)
