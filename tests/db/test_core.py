"""Tests for Core API database interface.

Behavior-focused tests using real SQLite.
No mocks - testing observable behavior.
"""

import sqlite3

import pytest

from todolist_core.db import Core, _create_connection, get_core, get_schema_version, init_db
from todolist_core.db.todo import TodoOperations


# ============================================================================
# Connections
# ============================================================================


def test_create_connection_returns_row_connection(temp_db_path):
    """_create_connection() should return a connection with Row factory."""
    conn = _create_connection()
    assert isinstance(conn, sqlite3.Connection)
    assert conn.row_factory == sqlite3.Row
    conn.close()


def test_create_connection_enables_foreign_keys(temp_db_path):
    """_create_connection() should enable foreign key constraints."""
    conn = _create_connection()
    assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    conn.close()


def test_get_core_modes(temp_db_path):
    """get_core() should honor the atomic flag."""
    assert get_core()._atomic is False
    assert get_core(atomic=True)._atomic is True


# ============================================================================
# Initialization
# ============================================================================


def test_init_db_creates_tables(temp_db_path):
    """init_db() should create users and todos tables."""
    conn = sqlite3.connect(temp_db_path)
    tables = {
        row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    conn.close()

    assert {"users", "todos", "_schema_metadata"} <= tables


def test_init_db_is_idempotent(temp_db_path):
    """Running init_db() twice should keep existing data."""
    conn = sqlite3.connect(temp_db_path)
    conn.execute(
        "INSERT INTO users (id, username, password_hash, created_at) VALUES ('u1', 'a', 'h', 'now')"
    )
    conn.commit()
    conn.close()

    init_db()

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
    conn.close()
    assert count == 1


def test_schema_version_recorded(temp_db_path):
    """The schema version should be readable after init."""
    assert get_schema_version() != "unknown"


# ============================================================================
# Core properties and context manager
# ============================================================================


def test_core_todo_property_is_cached(test_db):
    """Core.todo should return one cached TodoOperations instance."""
    core = Core(test_db, atomic=False)
    assert isinstance(core.todo, TodoOperations)
    assert core.todo is core.todo


def test_core_non_atomic_context_manager_raises(test_db):
    """Using a non-atomic Core as context manager should raise RuntimeError."""
    core = Core(test_db, atomic=False)
    with pytest.raises(RuntimeError):
        with core:
            pass


def test_atomic_core_commits_on_success(temp_db_path, test_user_in_file_db):
    """Atomic Core should commit when the block exits normally."""
    with get_core(atomic=True) as core:
        core.todo.create(test_user_in_file_db, "Buy milk")

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0]
    conn.close()
    assert count == 1


def test_atomic_core_rolls_back_on_error(temp_db_path, test_user_in_file_db):
    """Atomic Core should roll back when the block raises."""
    with pytest.raises(ValueError):
        with get_core(atomic=True) as core:
            core.todo.create(test_user_in_file_db, "Buy milk")
            raise ValueError("boom")

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0]
    conn.close()
    assert count == 0


def test_autocommit_core_persists_writes(temp_db_path, test_user_in_file_db):
    """Non-atomic Core writes should be visible to other connections immediately."""
    core = get_core()
    core.todo.create(test_user_in_file_db, "Buy milk")

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0]
    conn.close()
    assert count == 1


@pytest.fixture
def test_user_in_file_db(temp_db_path):
    """Insert a bare user row into the temp file database, return its id."""
    conn = sqlite3.connect(temp_db_path)
    conn.execute(
        "INSERT INTO users (id, username, password_hash, created_at) VALUES ('u1', 'a', 'h', 'now')"
    )
    conn.commit()
    conn.close()
    return "u1"
