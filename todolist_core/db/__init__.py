"""Database module for todolist-core.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to todo operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or when Core is collected
- Each entity type gets an encapsulated class with related operations

USAGE:
    Reads (autocommit):
    >>> core = get_core()
    >>> rows = core.todo.list_by_owner(user_id)

    Writes (atomic, commits on exit, rolls back on error):
    >>> with get_core(atomic=True) as core:
    ...     todo_id = core.todo.create(user_id, "Buy milk")

OWNERSHIP POLICY:
Every todo lookup is scoped by owner. There is no way to reach a todo through
Core without supplying the owner id, so a todo that belongs to another user
is indistinguishable from one that does not exist.
"""

from pathlib import Path
from typing import TYPE_CHECKING
import sqlite3
from ..config import settings

if TYPE_CHECKING:
    from .todo import TodoOperations


class Core:
    """
    Database Core with todo operations.

    Maintains its own connection and transaction state.
    Provides access to todo operations through properties.

    Connection Lifecycle:
    - atomic=True: Connection closes on __exit__ from context manager
    - atomic=False: Connection closes when the Core is garbage collected
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._todo_ops = None

    @property
    def todo(self) -> "TodoOperations":
        """Todo operations.

        Lazy-loaded to avoid circular import issues.
        Operations are created on first access and cached.
        """
        if self._todo_ops is None:
            from .todo import TodoOperations
            self._todo_ops = TodoOperations(self._conn, autocommit=not self._atomic)
        return self._todo_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True

        Returns:
            self for use in with-statement
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            # Always close connection
            self._conn.close()

    def __del__(self):
        """Cleanup connection if not already closed.

        Called during garbage collection. Ignores errors since connection
        may already be closed or in an invalid state.
        """
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                # Connection may already be closed or invalid
                pass


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for writes that need to commit together.
                If False (default), returns a Core with autocommit semantics.

    Returns:
        Core instance with todo operations
    """
    conn = _create_connection()
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        # Fresh database - apply current schema
        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
    finally:
        conn.close()


def get_schema_version() -> str:
    """
    Get current schema version from _schema_metadata table.

    Returns:
        Schema version string (e.g., '20261019')
    """
    conn = _create_connection()
    try:
        row = conn.execute(
            "SELECT value FROM _schema_metadata WHERE key = 'version'"
        ).fetchone()
    finally:
        conn.close()
    return row[0] if row else "unknown"
