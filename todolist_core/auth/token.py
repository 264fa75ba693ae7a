"""JWT token service.

Tokens are HS256-signed, self-contained and never stored server-side.
Claims: sub (user id), username, iat, exp. A token stays valid until its
exp passes; there is no revocation list.
"""

import logging
from datetime import timedelta

import jwt

from ..config import settings
from ..utils import isodatetime
from .schemas import TokenPayload, UserResponse

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


def generate_access_token(user: UserResponse) -> str:
    """Issue a signed access token for user, expiring after jwt_expiry_days."""
    issued_at = isodatetime.now_unix()
    expires_at = issued_at + int(timedelta(days=settings.jwt_expiry_days).total_seconds())

    payload = {
        "sub": user.id,
        "username": user.username,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)


def validate_access_token(token: str) -> TokenPayload:
    """
    Verify signature, expiry and claims of an access token.

    Raises:
        jwt.ExpiredSignatureError: If exp has passed
        jwt.InvalidTokenError: If the signature, format or claims are invalid
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[ALGORITHM],
        options={"require": REQUIRED_CLAIMS},
    )
    try:
        return TokenPayload(**payload)
    except ValueError as e:
        # Claims present but of the wrong type
        raise jwt.InvalidTokenError(f"Invalid token claims: {e}") from e


def verify_token(token: str) -> str:
    """Verify an access token and return the user id it was issued for."""
    return validate_access_token(token).sub


def decode_token_no_validation(token: str) -> dict:
    """Decode claims without checking signature or expiry. Never use for auth."""
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})


def get_token_expiry_remaining(token: str) -> timedelta | None:
    """Time left before the token expires, or None if it is expired or invalid."""
    try:
        payload = validate_access_token(token)
    except jwt.InvalidTokenError:
        return None
    return timedelta(seconds=payload.exp - isodatetime.now_unix())


def is_token_expired(token: str) -> bool:
    """True if the token is expired or cannot be validated."""
    return get_token_expiry_remaining(token) is None
