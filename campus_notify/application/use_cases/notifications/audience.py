"""Audience resolution for targeting specifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from campus_notify.domain.entities import (
    AllUsers,
    ExplicitUsers,
    Filtered,
    NotificationType,
    TargetingSpec,
)
from campus_notify.domain.exceptions import InvalidTargeting
from campus_notify.infrastructure.repositories import UserRepository


def resolve_audience(
    session: Session,
    spec: TargetingSpec,
    *,
    notification_type: NotificationType | None = None,
) -> set[int]:
    """Return the ids of the users ``spec`` addresses right now.

    * :class:`AllUsers` - every active user.
    * :class:`Filtered` - active users matching every supplied dimension; a
      dimension set to ``None`` matches everyone.
    * :class:`ExplicitUsers` - the listed ids that exist; unknown ids are
      silently dropped.

    Users who disabled ``notification_type`` in their preferences are removed
    last. An empty result is valid.
    """

    repository = UserRepository(session)
    if isinstance(spec, AllUsers):
        return repository.list_audience_ids(exclude_opted_out_of=notification_type)
    if isinstance(spec, Filtered):
        return repository.list_audience_ids(
            branches=spec.branches,
            semesters=spec.semesters,
            years=spec.years,
            exclude_opted_out_of=notification_type,
        )
    if isinstance(spec, ExplicitUsers):
        return repository.list_audience_ids(
            user_ids=spec.user_ids,
            active_only=False,
            exclude_opted_out_of=notification_type,
        )
    raise InvalidTargeting(f"Unsupported targeting specification: {spec!r}")


__all__ = ["resolve_audience"]
