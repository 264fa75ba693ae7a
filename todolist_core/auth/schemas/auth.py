"""Pydantic schemas for users and session tokens."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ...utils import isodatetime

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


# ============================================================================
# User Schemas
# ============================================================================


class UserBase(BaseModel):
    """Fields shared by all user schemas."""

    username: str = Field(..., min_length=1, max_length=50, description="Unique username")

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, v):
        """Trim and lowercase so usernames are unique case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class UserCreate(UserBase):
    """Registration request body."""

    password: str = Field(..., min_length=1, description="Plain text password")

    @field_validator("username")
    @classmethod
    def validate_username_chars(cls, v: str) -> str:
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username may only contain letters, numbers, underscores, and hyphens"
            )
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        # bcrypt only looks at the first 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return v


class UserLogin(UserBase):
    """Login request body."""

    password: str = Field(..., min_length=1, description="Plain text password")


class UserResponse(UserBase):
    """User as returned by the API. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, created_at: datetime) -> str:
        return isodatetime.to_timestamp(created_at)


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str = Field(..., description="User ID")
    username: str
    iat: int = Field(..., description="Issued at (Unix seconds)")
    exp: int = Field(..., description="Expires at (Unix seconds)")


class TokenResponse(BaseModel):
    """Returned by register and login."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
