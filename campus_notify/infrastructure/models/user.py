"""SQLAlchemy model for the user directory."""

from sqlalchemy import Boolean, Column, DateTime, Enum as SQLEnum, Integer, String

from campus_notify.domain.entities import Role
from campus_notify.infrastructure.database import Base
from campus_notify.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Directory row consumed for audience resolution and role checks."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(
        SQLEnum(
            Role,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=Role.STUDENT,
        index=True,
    )
    branch_id = Column(String(64), nullable=True, index=True)
    year = Column(Integer, nullable=True)
    semester = Column(Integer, nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["UserModel"]
