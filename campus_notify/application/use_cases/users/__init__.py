"""Use cases for the user directory."""

from .create_user import create_user
from .ensure_initial_owner import ensure_initial_owner
from .get_user import get_user
from .list_users import list_users_for_management

__all__ = ["create_user", "ensure_initial_owner", "get_user", "list_users_for_management"]
