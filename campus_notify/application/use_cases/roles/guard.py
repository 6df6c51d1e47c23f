"""Pure authorization decisions for the three-tier role hierarchy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from campus_notify.domain.entities import Role
from campus_notify.domain.exceptions import (
    InvalidTransition,
    ProtectedPrincipal,
    Unauthorized,
)


class Action(str, Enum):
    CREATE_BROADCAST = "create_broadcast"
    MANAGE_NOTIFICATIONS = "manage_notifications"
    VIEW_DIRECTORY = "view_directory"
    PROCESS_DOMAIN_EVENTS = "process_domain_events"
    CREATE_USER = "create_user"
    PROMOTE = "promote"
    DEMOTE = "demote"
    REMOVE = "remove"


_ADMIN_ACTIONS = {
    Action.CREATE_BROADCAST,
    Action.MANAGE_NOTIFICATIONS,
    Action.VIEW_DIRECTORY,
    Action.PROCESS_DOMAIN_EVENTS,
}
_TARGETED_ACTIONS = {Action.CREATE_USER, Action.PROMOTE, Action.DEMOTE, Action.REMOVE}


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of :func:`authorize`; ``error`` is the exception to raise when denied."""

    allowed: bool
    reason: str | None = None
    error: type[Unauthorized] = Unauthorized

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise self.error(self.reason or "Not authorized")


_ALLOW = AuthorizationDecision(allowed=True)


def _deny(reason: str, error: type[Unauthorized] = Unauthorized) -> AuthorizationDecision:
    return AuthorizationDecision(allowed=False, reason=reason, error=error)


def authorize(
    principal_role: Role, action: Action, target_role: Role | None = None
) -> AuthorizationDecision:
    """Decide whether ``principal_role`` may perform ``action`` on a target.

    ``target_role`` is required for create user, promote, demote and remove;
    for create user it is the role the new account receives. The principal
    check runs first, so an admin attempting an owner-only action is denied
    with :class:`Unauthorized` whatever the target is.
    """

    if action in _ADMIN_ACTIONS:
        if principal_role.at_least(Role.ADMIN):
            return _ALLOW
        return _deny(f"Role '{principal_role.value}' can not perform '{action.value}'")

    if action not in _TARGETED_ACTIONS:
        raise ValueError(f"Unknown action: {action!r}")
    if target_role is None:
        raise ValueError(f"Action '{action.value}' requires a target role")

    if action is Action.CREATE_USER:
        if not principal_role.at_least(Role.ADMIN):
            return _deny("Only admins or owners can create users")
        if not principal_role.at_least(target_role):
            return _deny("Can not create a user with a higher role than your own")
        return _ALLOW

    if action is Action.PROMOTE:
        if not principal_role.at_least(Role.ADMIN):
            return _deny("Only admins or owners can promote users")
        if target_role is not Role.STUDENT:
            return _deny("Only students can be promoted to admin", InvalidTransition)
        return _ALLOW

    if principal_role is not Role.OWNER:
        return _deny(f"Only owners can {action.value} users")
    if target_role is Role.OWNER:
        return _deny(f"Owners can not be {action.value}d", ProtectedPrincipal)
    if action is Action.DEMOTE and target_role is Role.STUDENT:
        return _deny("User is already a student", InvalidTransition)
    return _ALLOW


def ensure_authorized(
    principal_role: Role, action: Action, target_role: Role | None = None
) -> None:
    """Raise the decision's error when :func:`authorize` denies the action."""

    authorize(principal_role, action, target_role).raise_if_denied()


__all__ = ["Action", "AuthorizationDecision", "authorize", "ensure_authorized"]
