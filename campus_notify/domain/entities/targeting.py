"""Targeting specifications describing the audience of a notification.

A specification is one of three variants:

* :class:`AllUsers` - every active user.
* :class:`Filtered` - active users matching every supplied dimension. A
  dimension left as ``None`` does not restrict the audience.
* :class:`ExplicitUsers` - exactly the listed users (unknown ids are dropped
  at resolution time).

Variants never mix, so an explicit user list can not be combined with
directory filters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union

from campus_notify.domain.exceptions import InvalidTargeting

_FILTER_KEYS = ("branches", "semesters", "years")


@dataclass(frozen=True)
class AllUsers:
    kind = "all"


@dataclass(frozen=True)
class Filtered:
    branches: frozenset[str] | None = None
    semesters: frozenset[int] | None = None
    years: frozenset[int] | None = None

    kind = "filtered"

    def is_unrestricted(self) -> bool:
        return self.branches is None and self.semesters is None and self.years is None


@dataclass(frozen=True)
class ExplicitUsers:
    user_ids: frozenset[int]

    kind = "users"


TargetingSpec = Union[AllUsers, Filtered, ExplicitUsers]


def filtered(
    *,
    branches: Iterable[str] | None = None,
    semesters: Iterable[int] | None = None,
    years: Iterable[int] | None = None,
) -> Filtered:
    """Build a :class:`Filtered` spec, validating every supplied dimension."""

    return Filtered(
        branches=_as_filter(branches, "branches", str),
        semesters=_as_filter(semesters, "semesters", int),
        years=_as_filter(years, "years", int),
    )


def explicit_users(user_ids: Iterable[int]) -> ExplicitUsers:
    ids = _as_filter(user_ids, "user_ids", int)
    if ids is None:
        raise InvalidTargeting("An explicit audience requires at least one user id")
    return ExplicitUsers(user_ids=ids)


def targeting_from_payload(payload: dict[str, Any] | None) -> TargetingSpec:
    """Parse the JSON representation produced by :func:`targeting_to_payload`.

    A payload mixing ``user_ids`` with any filter dimension is rejected with
    :class:`InvalidTargeting`.
    """

    if not isinstance(payload, dict):
        raise InvalidTargeting("Targeting must be an object with a 'kind' field")

    kind = payload.get("kind")
    has_filters = any(payload.get(key) is not None for key in _FILTER_KEYS)
    has_users = payload.get("user_ids") is not None

    if kind == AllUsers.kind:
        if has_filters or has_users:
            raise InvalidTargeting("'all' targeting does not accept filters or user ids")
        return AllUsers()
    if kind == Filtered.kind:
        if has_users:
            raise InvalidTargeting("User ids can not be combined with directory filters")
        return filtered(
            branches=payload.get("branches"),
            semesters=payload.get("semesters"),
            years=payload.get("years"),
        )
    if kind == ExplicitUsers.kind:
        if has_filters:
            raise InvalidTargeting("User ids can not be combined with directory filters")
        return explicit_users(payload.get("user_ids") or [])
    raise InvalidTargeting(f"Unknown targeting kind: {kind!r}")


def targeting_to_payload(spec: TargetingSpec) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``spec``."""

    if isinstance(spec, AllUsers):
        return {"kind": AllUsers.kind}
    if isinstance(spec, Filtered):
        return {
            "kind": Filtered.kind,
            "branches": _sorted_or_none(spec.branches),
            "semesters": _sorted_or_none(spec.semesters),
            "years": _sorted_or_none(spec.years),
        }
    if isinstance(spec, ExplicitUsers):
        return {"kind": ExplicitUsers.kind, "user_ids": sorted(spec.user_ids)}
    raise InvalidTargeting(f"Unsupported targeting specification: {spec!r}")


def _as_filter(values, name: str, cast) -> frozenset | None:
    if values is None:
        return None
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise InvalidTargeting(f"'{name}' must be a list")
    try:
        normalized = frozenset(cast(value) for value in values)
    except (TypeError, ValueError) as exc:
        raise InvalidTargeting(f"'{name}' contains invalid values") from exc
    if not normalized:
        # An empty list would silently match nobody; ``None`` is the way to
        # leave a dimension unrestricted.
        raise InvalidTargeting(f"'{name}' must not be empty; omit it to match everyone")
    return normalized


def _sorted_or_none(values: frozenset | None) -> list | None:
    return sorted(values) if values is not None else None


__all__ = [
    "AllUsers",
    "ExplicitUsers",
    "Filtered",
    "TargetingSpec",
    "explicit_users",
    "filtered",
    "targeting_from_payload",
    "targeting_to_payload",
]
