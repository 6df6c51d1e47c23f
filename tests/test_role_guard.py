"""Tests for the pure role-hierarchy decisions."""

import pytest

from campus_notify.application.use_cases.roles import Action, authorize, ensure_authorized
from campus_notify.domain.entities import Role
from campus_notify.domain.exceptions import (
    InvalidTransition,
    ProtectedPrincipal,
    Unauthorized,
)

S, A, O = Role.STUDENT, Role.ADMIN, Role.OWNER


@pytest.mark.parametrize(
    ("principal", "action", "target", "expected"),
    [
        (S, Action.PROMOTE, S, Unauthorized),
        (A, Action.PROMOTE, S, None),
        (O, Action.PROMOTE, S, None),
        (A, Action.PROMOTE, A, InvalidTransition),
        (O, Action.PROMOTE, O, InvalidTransition),
        (S, Action.DEMOTE, A, Unauthorized),
        (A, Action.DEMOTE, A, Unauthorized),
        (O, Action.DEMOTE, A, None),
        (O, Action.DEMOTE, O, ProtectedPrincipal),
        (O, Action.DEMOTE, S, InvalidTransition),
        (A, Action.REMOVE, S, Unauthorized),
        (O, Action.REMOVE, S, None),
        (O, Action.REMOVE, A, None),
        (O, Action.REMOVE, O, ProtectedPrincipal),
        (S, Action.CREATE_USER, S, Unauthorized),
        (A, Action.CREATE_USER, S, None),
        (A, Action.CREATE_USER, A, None),
        (A, Action.CREATE_USER, O, Unauthorized),
        (O, Action.CREATE_USER, O, None),
    ],
)
def test_targeted_actions(principal, action, target, expected):
    decision = authorize(principal, action, target)

    if expected is None:
        assert decision.allowed is True
        decision.raise_if_denied()
    else:
        assert decision.allowed is False
        assert decision.error is expected
        with pytest.raises(expected):
            decision.raise_if_denied()


@pytest.mark.parametrize(
    "action",
    [
        Action.CREATE_BROADCAST,
        Action.MANAGE_NOTIFICATIONS,
        Action.VIEW_DIRECTORY,
        Action.PROCESS_DOMAIN_EVENTS,
    ],
)
@pytest.mark.parametrize(("principal", "allowed"), [(S, False), (A, True), (O, True)])
def test_admin_actions_require_admin_or_owner(action, principal, allowed):
    assert authorize(principal, action).allowed is allowed


def test_admin_denied_owner_only_action_regardless_of_target():
    decision = authorize(A, Action.REMOVE, O)

    assert decision.allowed is False
    assert decision.error is Unauthorized


def test_targeted_action_without_target_role_is_a_programming_error():
    with pytest.raises(ValueError):
        authorize(O, Action.DEMOTE)


def test_specific_denials_are_unauthorized_subclasses():
    with pytest.raises(Unauthorized):
        ensure_authorized(O, Action.REMOVE, O)


def test_role_ranks_are_ordered():
    assert S.rank < A.rank < O.rank
    assert O.at_least(A)
    assert not S.at_least(A)
