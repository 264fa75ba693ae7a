"""Credential store: password hashing and user persistence.

Functions take an explicit sqlite3 connection so they can run inside a
Core transaction (core._conn) or against a bare test connection.
"""

import logging
import sqlite3
from functools import lru_cache

import bcrypt

from ..config import settings
from ..utils import isodatetime, uid
from .schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured work factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash in constant time."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long password
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash compared against when the username does not exist.

    Uses the configured work factor so an unknown user costs the same
    bcrypt round as a wrong password.
    """
    return hash_password("todolist-dummy-password")


# ============================================================================
# User CRUD
# ============================================================================


def _row_to_user(row: sqlite3.Row) -> UserResponse:
    return UserResponse(
        id=row["id"],
        username=row["username"],
        created_at=isodatetime.to_datetime(row["created_at"]),
    )


def create_user(conn: sqlite3.Connection, data: UserCreate) -> UserResponse:
    """
    Register a new user.

    Args:
        conn: Database connection (caller commits)
        data: Validated registration data

    Returns:
        The created user, without password hash

    Raises:
        sqlite3.IntegrityError: If the username is already taken
    """
    user_id = uid.generate_uuid()
    created_at = isodatetime.now()

    conn.execute(
        """INSERT INTO users (id, username, password_hash, created_at)
           VALUES (?, ?, ?, ?)""",
        (user_id, data.username, hash_password(data.password), created_at)
    )

    logger.debug(f"User row inserted: {data.username}")

    return UserResponse(
        id=user_id,
        username=data.username,
        created_at=isodatetime.to_datetime(created_at),
    )


def get_user_by_username(conn: sqlite3.Connection, username: str) -> UserResponse | None:
    """Look up a user by username (case-insensitive)."""
    row = conn.execute(
        "SELECT id, username, created_at FROM users WHERE username = ?",
        (username.strip().lower(),)
    ).fetchone()
    return _row_to_user(row) if row else None


def get_user_by_id(conn: sqlite3.Connection, user_id: str) -> UserResponse | None:
    """Look up a user by ID."""
    row = conn.execute(
        "SELECT id, username, created_at FROM users WHERE id = ?",
        (user_id,)
    ).fetchone()
    return _row_to_user(row) if row else None


def get_user_with_password(
    conn: sqlite3.Connection,
    username: str
) -> tuple[UserResponse, str] | None:
    """Look up a user together with their password hash."""
    row = conn.execute(
        "SELECT id, username, created_at, password_hash FROM users WHERE username = ?",
        (username.strip().lower(),)
    ).fetchone()
    if row is None:
        return None
    return _row_to_user(row), row["password_hash"]


def verify_credentials(
    conn: sqlite3.Connection,
    username: str,
    password: str
) -> UserResponse | None:
    """
    Verify a username/password pair.

    Returns:
        The user on success, None if the user is unknown or the password
        is wrong. Both failures take one bcrypt comparison.
    """
    result = get_user_with_password(conn, username)
    if result is None:
        verify_password(password, _dummy_hash())
        return None

    user, password_hash = result
    if not verify_password(password, password_hash):
        return None

    return user
