"""Tests for targeting specification parsing and validation."""

import pytest

from campus_notify.domain.entities import (
    AllUsers,
    ExplicitUsers,
    Filtered,
    explicit_users,
    filtered,
    targeting_from_payload,
    targeting_to_payload,
)
from campus_notify.domain.exceptions import InvalidTargeting


def test_missing_dimensions_are_unrestricted():
    spec = filtered(semesters=[3])

    assert spec.branches is None
    assert spec.years is None
    assert spec.semesters == frozenset({3})
    assert filtered().is_unrestricted()


@pytest.mark.parametrize("dimension", ["branches", "semesters", "years"])
def test_empty_dimension_is_rejected(dimension):
    with pytest.raises(InvalidTargeting):
        filtered(**{dimension: []})


def test_explicit_users_requires_ids():
    with pytest.raises(InvalidTargeting):
        explicit_users([])


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": "users", "user_ids": [1], "branches": ["CSE"]},
        {"kind": "filtered", "semesters": [3], "user_ids": [1, 2]},
        {"kind": "all", "years": [1]},
        {"kind": "broadcast"},
        None,
    ],
)
def test_invalid_payloads_are_rejected(payload):
    with pytest.raises(InvalidTargeting):
        targeting_from_payload(payload)


def test_payload_parsing_builds_each_variant():
    assert targeting_from_payload({"kind": "all"}) == AllUsers()
    assert targeting_from_payload({"kind": "users", "user_ids": [3, 3, 7]}) == ExplicitUsers(
        user_ids=frozenset({3, 7})
    )
    assert targeting_from_payload(
        {"kind": "filtered", "branches": ["CSE", "ECE"], "years": None}
    ) == Filtered(branches=frozenset({"CSE", "ECE"}))


def test_stored_payload_parses_back_to_the_same_spec():
    spec = filtered(branches=["ECE", "CSE"], semesters=[5])

    payload = targeting_to_payload(spec)

    assert payload == {
        "kind": "filtered",
        "branches": ["CSE", "ECE"],
        "semesters": [5],
        "years": None,
    }
    assert targeting_from_payload(payload) == spec


def test_non_numeric_semesters_are_rejected():
    with pytest.raises(InvalidTargeting):
        filtered(semesters=["third"])
