"""Domain entity representing a user role."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Authority levels ordered ``student`` < ``admin`` < ``owner``."""

    STUDENT = "student"
    ADMIN = "admin"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def at_least(self, other: "Role") -> bool:
        """Return ``True`` when this role carries at least the authority of ``other``."""

        return self.rank >= other.rank


_RANKS = {Role.STUDENT: 0, Role.ADMIN: 1, Role.OWNER: 2}


__all__ = ["Role"]
