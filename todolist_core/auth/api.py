"""Authentication API endpoints for todolist-core.

These endpoints handle account creation and sessions:
- POST /auth/register - Create account, returns token and user
- POST /auth/login    - Verify credentials, returns token and user
- POST /auth/logout   - Stateless no-op
- GET  /auth/me       - Current user from bearer token

All endpoints return JSON responses and are mounted under settings.api_prefix.
"""

import logging
import sqlite3

from flask import Blueprint, g, jsonify

from ..api.validation import validate_request
from ..db import get_core
from ..exceptions import AuthenticationError, ConflictError, InvalidCredentials
from . import service, token
from .decorators import auth_required
from .schemas import TokenResponse, UserCreate, UserLogin

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


# ============================================================================
# Registration
# ============================================================================


@auth_bp.post("/register")
@validate_request
def register(data: UserCreate):
    """
    Create a user account and sign it in.

    Args:
        data: Username and password (both non-empty)

    Returns:
        201: Token response with JWT access token and the created user

    Raises:
        ConflictError: If the username is already taken
        ValidationError: If request data is invalid

    Example request:
    ```json
    {
        "username": "alice",
        "password": "correct horse"
    }
    ```

    Example response:
    ```json
    {
        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "token_type": "bearer",
        "user": {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "username": "alice",
            "created_at": "2026-10-19T10:30:00Z"
        }
    }
    ```
    """
    try:
        with get_core(atomic=True) as core:
            user = service.create_user(core._conn, data)
    except sqlite3.IntegrityError:
        logger.warning(f"Registration failed (username exists): {data.username}")
        raise ConflictError(
            "Username already exists",
            {"username": data.username}
        )

    access_token = token.generate_access_token(user)

    logger.info(f"User registered: {user.username}")

    return jsonify(
        TokenResponse(access_token=access_token, user=user).model_dump()
    ), 201


# ============================================================================
# Sessions
# ============================================================================


@auth_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Authenticate user and return JWT token.

    Accepts both JSON and form data.

    Returns:
        200: Token response with JWT access token and user info

    Raises:
        InvalidCredentials: If the username is unknown or the password is
            wrong. The message does not say which.
    """
    core = get_core()
    user = service.verify_credentials(core._conn, data.username, data.password)
    if user is None:
        logger.warning(f"Failed login attempt for username: {data.username}")
        raise InvalidCredentials("Invalid username or password")

    access_token = token.generate_access_token(user)

    logger.info(f"Successful login: {user.username}")

    return jsonify(
        TokenResponse(access_token=access_token, user=user).model_dump()
    ), 200


@auth_bp.post("/logout")
def logout():
    """
    Logout user (no-op).

    JWT tokens are self-validating and stateless, so the client simply
    discards its token. A discarded token remains valid until it expires.
    """
    return jsonify({"message": "Logged out successfully"}), 200


@auth_bp.get("/me")
@auth_required
def get_current_user():
    """
    Get current user info from JWT token.

    Returns:
        200: User info for authenticated user

    Raises:
        AuthenticationError: If token is missing or invalid, or the user
            it was issued for no longer exists
    """
    core = get_core()
    user = service.get_user_by_id(core._conn, g.user_id)
    if user is None:
        raise AuthenticationError(
            "User not found",
            {"code": "invalid_token"}
        )

    return jsonify(user.model_dump()), 200
