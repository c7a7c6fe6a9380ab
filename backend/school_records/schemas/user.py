"""
School Records - User Schemas
Pydantic schemas for teacher accounts and authentication
"""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from school_records.models.enums import ClassLevel, UserRole


# ============================================================================
# Base Schemas
# ============================================================================

class TeacherBase(BaseModel):
    """Base account schema with common fields."""
    name: Annotated[str, Field(min_length=1, max_length=200)]
    email: EmailStr
    assigned_classes: list[ClassLevel] = Field(default_factory=list)

    @field_validator("assigned_classes")
    @classmethod
    def dedupe_classes(cls, v: list[ClassLevel]) -> list[ClassLevel]:
        # Order of first appearance is kept
        return list(dict.fromkeys(v))


# ============================================================================
# Authentication
# ============================================================================

class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Schema for authentication token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""
    refresh_token: str


class PasswordReset(BaseModel):
    """Admin-issued password reset for a teacher account."""
    new_password: Annotated[str, Field(min_length=6, max_length=128)]


# ============================================================================
# Teacher management
# ============================================================================

class TeacherCreate(TeacherBase):
    """Schema for creating a teacher (or admin) account."""
    password: Annotated[str, Field(min_length=6, max_length=128)]
    role: UserRole = UserRole.TEACHER


class TeacherUpdate(BaseModel):
    """Schema for updating a teacher account. Passwords go through reset."""
    name: Annotated[str, Field(min_length=1, max_length=200)] | None = None
    email: EmailStr | None = None
    assigned_classes: list[ClassLevel] | None = None
    is_active: bool | None = None


class TeacherResponse(TeacherBase):
    """Public account data; never carries the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: UserRole
    is_active: bool
    created_at: datetime | None = None
    last_login: datetime | None = None
