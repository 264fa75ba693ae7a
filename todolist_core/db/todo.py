"""Todo-specific operations.

IMPORT CONVENTION:
- Core accesses these through core.todo property
- NO direct import needed when using Core API

OWNERSHIP:
Every method takes owner_id and filters on it in the same statement as the
id. A todo owned by someone else therefore raises ResourceNotFound, exactly
as if it did not exist.
"""

import sqlite3
from typing import Any

from . import query
from ..utils import isodatetime, uid
from ..exceptions import ResourceNotFound, ValidationError

# Columns a caller may change through update()
UPDATABLE_COLUMNS = {"title", "completed"}


def _clean_title(title: str | None) -> str:
    """Strip surrounding whitespace and reject empty titles."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Title cannot be empty", {"field": "title"})
    return cleaned


class TodoOperations:
    """Owner-scoped todo operations."""

    def __init__(self, conn: sqlite3.Connection, autocommit: bool = False):
        """Initialize todo operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
            autocommit: Commit after each write. Set by Core when it is
                        not used as an atomic context manager.
        """
        self._conn = conn
        self._autocommit = autocommit

    def _commit(self) -> None:
        if self._autocommit:
            self._conn.commit()

    def create(self, owner_id: str, title: str) -> str:
        """Create a todo owned by owner_id.

        Args:
            owner_id: UUID of the owning user
            title: Todo title, stripped before storage

        Returns:
            The auto-generated todo ID (UUID v4 string)

        Raises:
            ValidationError: If title is empty after trimming
        """
        title = _clean_title(title)
        todo_id = uid.generate_uuid()

        self._conn.execute(
            """INSERT INTO todos (id, title, completed, created_at, owner_id)
               VALUES (?, ?, 0, ?, ?)""",
            (todo_id, title, isodatetime.now(), owner_id)
        )
        self._commit()

        return todo_id

    def list_by_owner(self, owner_id: str) -> list[sqlite3.Row]:
        """List every todo owned by owner_id, newest first."""
        return self._conn.execute(
            """SELECT * FROM todos
               WHERE owner_id = ?
               ORDER BY created_at DESC, rowid DESC""",
            (owner_id,)
        ).fetchall()

    def get_by_id_and_owner(self, todo_id: str, owner_id: str) -> sqlite3.Row:
        """Get a todo by ID, scoped to its owner.

        Args:
            todo_id: The UUID of the todo
            owner_id: The UUID of the requesting user

        Returns:
            sqlite3.Row with todo data

        Raises:
            ResourceNotFound: If the todo doesn't exist or belongs to another user
        """
        row = self._conn.execute(
            "SELECT * FROM todos WHERE id = ? AND owner_id = ?",
            (todo_id, owner_id)
        ).fetchone()

        if not row:
            raise ResourceNotFound(
                f"Todo '{todo_id}' not found",
                {"todo_id": todo_id}
            )

        return row

    def update(self, todo_id: str, owner_id: str, data: dict[str, Any]) -> sqlite3.Row:
        """Apply a partial update to a todo.

        Args:
            todo_id: The UUID of the todo to update
            owner_id: The UUID of the requesting user
            data: Any of "title" and "completed". Missing keys are left unchanged.

        Returns:
            sqlite3.Row with the updated todo

        Raises:
            ValidationError: If title is present but empty after trimming
            ResourceNotFound: If the todo doesn't exist or belongs to another user
        """
        changes = {k: v for k, v in data.items() if k in UPDATABLE_COLUMNS}
        if "title" in changes:
            changes["title"] = _clean_title(changes["title"])
        if changes.get("completed") is not None:
            changes["completed"] = int(bool(changes["completed"]))

        update_clause, params = query.build_update_clause(changes, exclude={"id", "owner_id"})

        if update_clause:
            params.extend([todo_id, owner_id])
            cursor = self._conn.execute(
                f"UPDATE todos SET {update_clause} WHERE id = ? AND owner_id = ?",
                params
            )
            if cursor.rowcount == 0:
                raise ResourceNotFound(
                    f"Todo '{todo_id}' not found",
                    {"todo_id": todo_id}
                )
            self._commit()

        return self.get_by_id_and_owner(todo_id, owner_id)

    def delete(self, todo_id: str, owner_id: str) -> None:
        """Delete a todo.

        Raises:
            ResourceNotFound: If the todo doesn't exist or belongs to another user
        """
        cursor = self._conn.execute(
            "DELETE FROM todos WHERE id = ? AND owner_id = ?",
            (todo_id, owner_id)
        )
        if cursor.rowcount == 0:
            raise ResourceNotFound(
                f"Todo '{todo_id}' not found",
                {"todo_id": todo_id}
            )
        self._commit()
