"""Error taxonomy shared by the notification use cases."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for errors raised by the notification subsystem."""


class Unauthorized(NotificationError):
    """The acting principal's role does not allow the requested action."""


class InvalidTransition(Unauthorized):
    """A role change that the hierarchy does not permit (e.g. promoting an admin)."""


class ProtectedPrincipal(Unauthorized):
    """The target is an owner, who can not be demoted or removed."""


class InvalidTargeting(NotificationError):
    """The targeting specification is malformed or ambiguous."""


class NotFound(NotificationError):
    """A notification, delivery or user does not exist."""


class AdapterFailure(NotificationError):
    """A domain-event adapter could not synthesize or deliver its notification.

    Adapters log and swallow this error; it never reaches the transaction that
    emitted the domain event.
    """


__all__ = [
    "AdapterFailure",
    "InvalidTargeting",
    "InvalidTransition",
    "NotFound",
    "NotificationError",
    "ProtectedPrincipal",
    "Unauthorized",
]
