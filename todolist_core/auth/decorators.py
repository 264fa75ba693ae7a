"""Authentication decorators for protected endpoints.

This module provides:
- _authenticate_request() - shared bearer token check, used as the
  before_request hook of the API blueprint
- @auth_required - the same check as a per-endpoint decorator
"""

import logging
from functools import wraps

import jwt
from flask import g, request

from ..exceptions import AuthenticationError
from . import token

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


# ============================================================================
# Shared Authentication Logic
# ============================================================================


def _authenticate_request():
    """
    Shared authentication logic for requests.

    Expects a JWT token via Authorization: Bearer <token>.

    Stores authenticated user information in flask.g:
    - g.user_id: User ID (UUID)
    - g.username: Username

    Raises:
        AuthenticationError: If the token is missing, invalid or expired.
            details["code"] is one of missing_auth, invalid_token, token_expired.
    """
    # Scheme names are case-insensitive
    scheme, _, token_str = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        logger.warning("Unauthenticated request to protected endpoint")
        raise AuthenticationError(
            "Authentication required",
            {"code": "missing_auth"}
        )

    token_str = token_str.strip()
    try:
        payload = token.validate_access_token(token_str)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise AuthenticationError("Token has expired", {"code": "token_expired"})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise AuthenticationError("Invalid token", {"code": "invalid_token"})

    g.user_id = payload.sub
    g.username = payload.username

    logger.debug(f"JWT authentication successful for user {g.username}")


# ============================================================================
# Auth Required Decorator
# ============================================================================


def auth_required(f):
    """
    Decorator to require authentication for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
