"""Domain entity representing a portal user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role


@dataclass
class User:
    """Directory attributes used for targeting and authorization."""

    id: int | None
    name: str
    email: str
    role: Role
    branch_id: str | None
    year: int | None
    semester: int | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_owner(self) -> bool:
        return self.role is Role.OWNER


__all__ = ["User"]
