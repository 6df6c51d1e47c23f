"""Tests for the directory and preference use cases."""

import pytest

from campus_notify.application.use_cases.preferences import get_preferences, update_preferences
from campus_notify.application.use_cases.users import (
    create_user,
    ensure_initial_owner,
    get_user,
    list_users_for_management,
)
from campus_notify.domain.entities import NotificationType, Role
from campus_notify.domain.exceptions import NotFound, Unauthorized
from campus_notify.infrastructure.repositories import UserRepository


def test_duplicate_email_is_rejected(session):
    create_user(session, name="Dev", email="dev@campus.example")

    with pytest.raises(ValueError):
        create_user(session, name="Dev Again", email=" DEV@campus.example ")


def test_created_role_can_not_outrank_the_acting_admin(session, make_user):
    admin = make_user(role=Role.ADMIN)
    owner = make_user(role=Role.OWNER)

    with pytest.raises(Unauthorized):
        create_user(
            session, name="Ira", email="ira@campus.example", role=Role.OWNER, actor=admin
        )
    assert UserRepository(session).get_by_email("ira@campus.example") is None

    created = create_user(
        session, name="Ira", email="ira@campus.example", role=Role.OWNER, actor=owner
    )
    assert created.role is Role.OWNER


def test_students_can_not_create_users(session, make_user):
    student = make_user()

    with pytest.raises(Unauthorized):
        create_user(session, name="Ira", email="ira@campus.example", actor=student)


def test_management_listing_orders_by_role(session, make_user):
    student = make_user()
    owner = make_user(role=Role.OWNER)
    admin = make_user(role=Role.ADMIN)
    newer_student = make_user()

    users = list_users_for_management(session, actor=admin)

    assert [user.id for user in users] == [owner.id, admin.id, newer_student.id, student.id]


def test_students_can_not_list_the_directory(session, make_user):
    student = make_user()

    with pytest.raises(Unauthorized):
        list_users_for_management(session, actor=student)


def test_get_user(session, make_user):
    inactive = make_user(is_active=False)

    assert get_user(session, inactive.id, include_inactive=True).id == inactive.id
    with pytest.raises(NotFound):
        get_user(session, inactive.id)
    with pytest.raises(NotFound):
        get_user(session, 31337)


def test_bootstrap_creates_the_first_owner_once(session):
    owner, changed = ensure_initial_owner(session, name="Root", email="root@campus.example")
    again, changed_again = ensure_initial_owner(
        session, name="Root", email="root@campus.example"
    )

    assert owner.role is Role.OWNER
    assert changed is True
    assert again.id == owner.id
    assert changed_again is False


def test_bootstrap_elevates_an_existing_account(session, make_user):
    student = make_user()

    owner, changed = ensure_initial_owner(session, name="ignored", email=student.email)

    assert changed is True
    assert owner.id == student.id
    assert owner.role is Role.OWNER


def test_bootstrap_refuses_a_second_owner(session, make_user):
    make_user(role=Role.OWNER)

    with pytest.raises(ValueError):
        ensure_initial_owner(session, name="Other", email="other@campus.example")


def test_preferences_default_to_enabled(session, make_user):
    user = make_user()

    preference = get_preferences(session, user_id=user.id)

    assert preference.flags == {}
    assert all(preference.as_full_mapping().values())


def test_preference_updates_merge(session, make_user):
    user = make_user()

    update_preferences(session, user_id=user.id, flags={NotificationType.EVENT: False})
    preference = update_preferences(
        session, user_id=user.id, flags={NotificationType.OPPORTUNITY: False}
    )

    assert preference.is_enabled(NotificationType.EVENT) is False
    assert preference.is_enabled(NotificationType.OPPORTUNITY) is False
    assert preference.is_enabled(NotificationType.WELCOME) is True


def test_preferences_for_unknown_user(session):
    with pytest.raises(NotFound):
        get_preferences(session, user_id=5)
