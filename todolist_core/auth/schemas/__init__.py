"""Authentication Pydantic schemas for API validation."""

from .auth import (
    UserBase,
    UserCreate,
    UserLogin,
    UserResponse,
    TokenPayload,
    TokenResponse,
)

__all__ = [
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "TokenPayload",
    "TokenResponse",
]
