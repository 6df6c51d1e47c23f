"""Tests for the inbox listing, admin queries and the cleanup sweep."""

from datetime import timedelta

import pytest

from campus_notify.application.use_cases.notifications import (
    MAX_PAGE_SIZE,
    create_and_deliver_notification,
    delete_notification,
    get_notification,
    get_notification_stats,
    get_user_notifications,
    list_notifications,
    mark_notification_read,
    purge_expired_notifications,
)
from campus_notify.domain.entities import AllUsers, NotificationType, Role
from campus_notify.domain.exceptions import NotFound, Unauthorized
from campus_notify.utils import now_in_app_timezone


@pytest.fixture()
def admin(make_user):
    return make_user(role=Role.ADMIN)


@pytest.fixture()
def send(session, admin):
    def _send(title="Notice", **options):
        return create_and_deliver_notification(
            session,
            title=title,
            body=f"{title} body",
            notification_type=NotificationType.ANNOUNCEMENT,
            targeting=AllUsers(),
            created_by=admin.id,
            creator_role=admin.role,
            **options,
        )

    return _send


def test_listing_is_newest_first_and_paginated(session, make_user, send):
    student = make_user()
    sent = [send(f"Notice {index}") for index in range(5)]

    page = get_user_notifications(session, user_id=student.id, limit=2, offset=1)

    assert page.total == 5
    assert page.limit == 2
    assert page.offset == 1
    assert [item.notification.id for item in page.items] == [sent[3].id, sent[2].id]
    assert all(item.delivery.is_read is False for item in page.items)


def test_listing_excludes_expired_and_unscheduled(session, make_user, send):
    student = make_user()
    now = now_in_app_timezone()
    live = send("Live", expires_at=now + timedelta(days=1))
    send("Expired", scheduled_for=now - timedelta(days=2), expires_at=now - timedelta(days=1))
    send("Future", scheduled_for=now + timedelta(hours=3))

    page = get_user_notifications(session, user_id=student.id)

    assert [item.notification.id for item in page.items] == [live.id]
    assert page.total == 1


def test_listing_reflects_read_state(session, make_user, send):
    student = make_user()
    notification = send()
    mark_notification_read(session, notification_id=notification.id, user_id=student.id)

    (item,) = get_user_notifications(session, user_id=student.id).items

    assert item.delivery.is_read is True
    assert item.delivery.read_at is not None


def test_page_size_is_clamped(session, make_user):
    student = make_user()

    page = get_user_notifications(session, user_id=student.id, limit=10_000, offset=-3)

    assert page.limit == MAX_PAGE_SIZE
    assert page.offset == 0
    assert page.items == []


def test_listing_for_unknown_user(session):
    with pytest.raises(NotFound):
        get_user_notifications(session, user_id=777)


def test_admin_queries(session, make_user, send, admin):
    student = make_user()
    first = send("First")
    second = send("Second")
    mark_notification_read(session, notification_id=first.id, user_id=student.id)

    listed = list_notifications(session, actor_role=admin.role)
    stats = get_notification_stats(session, actor_role=admin.role)

    assert [notification.id for notification in listed] == [second.id, first.id]
    assert listed[0].recipient_count == 2
    assert stats.total_notifications == 2
    assert stats.total_recipients == 4
    assert stats.read_deliveries == 1
    assert stats.unread_deliveries == 3
    assert get_notification(
        session, notification_id=first.id, actor_role=admin.role
    ).title == "First"


def test_students_can_not_use_admin_queries(session, make_user, send):
    student = make_user()
    notification = send()

    with pytest.raises(Unauthorized):
        list_notifications(session, actor_role=student.role)
    with pytest.raises(Unauthorized):
        get_notification_stats(session, actor_role=student.role)
    with pytest.raises(Unauthorized):
        delete_notification(session, notification_id=notification.id, actor_role=student.role)


def test_delete_notification_removes_deliveries(session, make_user, send, admin):
    student = make_user()
    notification = send()

    delete_notification(session, notification_id=notification.id, actor_role=admin.role)

    assert get_user_notifications(session, user_id=student.id).total == 0
    with pytest.raises(NotFound):
        delete_notification(session, notification_id=notification.id, actor_role=admin.role)


def test_purge_keeps_recently_expired_notifications(session, make_user, send, admin):
    make_user()
    now = now_in_app_timezone()
    old = send(
        "Old", scheduled_for=now - timedelta(days=60), expires_at=now - timedelta(days=45)
    )
    recent = send(
        "Recent", scheduled_for=now - timedelta(days=3), expires_at=now - timedelta(days=2)
    )
    live = send("Live")

    removed = purge_expired_notifications(session, retention=timedelta(days=30), now=now)

    remaining = {n.id for n in list_notifications(session, actor_role=admin.role)}
    assert removed == 1
    assert old.id not in remaining
    assert remaining == {recent.id, live.id}
