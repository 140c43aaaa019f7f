"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RoleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    alias: str


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role_id: int = Field(..., ge=1)


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    is_active: bool | None = None
    role_id: int | None = Field(default=None, ge=1)


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    must_change_password: bool
    email_verified: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    is_active: bool
    role: RoleRead


__all__ = ["PasswordChangeRequest", "RoleRead", "UserCreate", "UserRead", "UserUpdate"]
