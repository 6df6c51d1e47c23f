"""Use cases for the role hierarchy."""

from .demote_to_student import demote_to_student
from .guard import Action, AuthorizationDecision, authorize, ensure_authorized
from .promote_to_admin import promote_to_admin
from .remove_user import remove_user

__all__ = [
    "Action",
    "AuthorizationDecision",
    "authorize",
    "demote_to_student",
    "ensure_authorized",
    "promote_to_admin",
    "remove_user",
]
