"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from campus_notify.domain.entities import Role


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: Role = Role.STUDENT
    branch_id: str | None = Field(default=None, max_length=50)
    year: int | None = Field(default=None, ge=1)
    semester: int | None = Field(default=None, ge=1)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    branch_id: str | None
    year: int | None
    semester: int | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
