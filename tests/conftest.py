"""Shared test fixtures for todolist-core."""

import os
import tempfile

# Fast bcrypt and a throwaway database for the app imported below
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault(
    "DATABASE_PATH", os.path.join(tempfile.gettempdir(), "todolist-core-test.db")
)

import sqlite3
from pathlib import Path

import pytest

from todolist_core.main import app
from todolist_core.config import settings
from todolist_core.auth import schemas, service, token as auth_token

SCHEMA_PATH = Path(__file__).parent.parent / "todolist_core" / "schema" / "schema.sql"


def _create_user(conn: sqlite3.Connection, username: str, password: str):
    """Insert a user and return (UserResponse, auth headers)."""
    user = service.create_user(conn, schemas.UserCreate(username=username, password=password))
    conn.commit()
    jwt_token = auth_token.generate_access_token(user)
    return user, {"Authorization": f"Bearer {jwt_token}"}


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row

    # Enable foreign key constraints (required for SQLite)
    db.execute("PRAGMA foreign_keys = ON")

    db.executescript(SCHEMA_PATH.read_text())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def temp_db_path():
    """Point settings.database_path at a fresh, initialized temp file."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.unlink(db_path)

    original_db_path = settings.database_path
    settings.database_path = db_path
    try:
        from todolist_core.db import init_db
        init_db()
        yield db_path
    finally:
        settings.database_path = original_db_path
        if os.path.exists(db_path):
            os.unlink(db_path)


@pytest.fixture
def client(temp_db_path):
    """Create test client backed by a fresh temp file database."""
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(test_db):
    """Create a test user in the in-memory database.

    Returns a tuple of (user, password).
    """
    password = "TestPass123"
    user = service.create_user(test_db, schemas.UserCreate(username="testuser", password=password))
    test_db.commit()
    return user, password


@pytest.fixture
def other_user(test_db):
    """A second user in the in-memory database, for ownership tests."""
    user = service.create_user(test_db, schemas.UserCreate(username="otheruser", password="OtherPass456"))
    test_db.commit()
    return user


@pytest.fixture
def jwt_token(test_user):
    """Generate a JWT token for the test user."""
    user, _password = test_user
    return auth_token.generate_access_token(user)


@pytest.fixture
def auth_headers(jwt_token):
    """Authorization header carrying the test user's token."""
    return {"Authorization": f"Bearer {jwt_token}"}


@pytest.fixture
def authenticated_client(client):
    """Test client plus a registered user.

    Returns a tuple of (client, user, auth_headers).
    """
    from todolist_core.db import get_core

    core = get_core()
    try:
        user, headers = _create_user(core._conn, "testuser", "TestPass123")
    finally:
        core._conn.close()

    yield client, user, headers


@pytest.fixture
def other_auth_headers(authenticated_client):
    """Auth headers for a second user in the same database as authenticated_client."""
    from todolist_core.db import get_core

    core = get_core()
    try:
        _user, headers = _create_user(core._conn, "otheruser", "OtherPass456")
    finally:
        core._conn.close()

    return headers
