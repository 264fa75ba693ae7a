"""Todo CRUD endpoints.

This module implements RESTful endpoints for the caller's own todos:
- GET    /api/todos          - List todos, newest first
- POST   /api/todos          - Create todo
- GET    /api/todos/{id}     - Get single todo
- PATCH  /api/todos/{id}     - Partially update title and/or completed
- DELETE /api/todos/{id}     - Delete todo

Every handler passes g.user_id (set by the api blueprint's authenticate
hook) as the owner. A todo belonging to someone else answers 404, never 403.
"""

import logging
import sqlite3

from flask import Blueprint, g, jsonify

from ..db import get_core
from ..exceptions import AuthenticationError
from .schemas import TodoCreate, TodoResponse, TodoUpdate
from .validation import validate_request

logger = logging.getLogger(__name__)

todos_bp = Blueprint("todos", __name__, url_prefix="/todos")


def _row_to_todo_response(row) -> dict:
    """Convert a todos row to a TodoResponse dict."""
    return TodoResponse(
        id=row["id"],
        title=row["title"],
        completed=bool(row["completed"]),
        created_at=row["created_at"],
        owner_id=row["owner_id"],
    ).model_dump()


@todos_bp.get("")
def list_todos():
    """
    List the caller's todos.

    Returns:
        200: Array of TodoResponse objects, most recently created first
    """
    core = get_core()
    rows = core.todo.list_by_owner(g.user_id)

    return jsonify([_row_to_todo_response(row) for row in rows])


@todos_bp.post("")
@validate_request
def create_todo(data: TodoCreate):
    """
    Create a todo owned by the caller.

    Request Body (TodoCreate):
        - title: str (required, non-empty after trimming)

    Returns:
        201: TodoResponse with completed = false
        400: Validation error
        401: Token user no longer exists
    """
    try:
        with get_core(atomic=True) as core:
            todo_id = core.todo.create(g.user_id, data.title)
            row = core.todo.get_by_id_and_owner(todo_id, g.user_id)
    except sqlite3.IntegrityError:
        # Signed token for a user that no longer exists
        logger.warning(f"Todo create for unknown user {g.user_id}")
        raise AuthenticationError(
            "User not found",
            {"code": "invalid_token"}
        )

    logger.info(f"Todo created: {todo_id} by user {g.user_id}")

    return jsonify(_row_to_todo_response(row)), 201


@todos_bp.get("/<todo_id>")
def get_todo(todo_id: str):
    """
    Get one of the caller's todos.

    Returns:
        200: TodoResponse
        404: Todo not found (or owned by another user)
    """
    core = get_core()
    row = core.todo.get_by_id_and_owner(todo_id, g.user_id)

    return jsonify(_row_to_todo_response(row))


@todos_bp.patch("/<todo_id>")
@validate_request
def update_todo(todo_id: str, data: TodoUpdate):
    """
    Partially update one of the caller's todos.

    Request Body (TodoUpdate):
        All fields optional, omitted fields are unchanged:
        - title: str (non-empty after trimming)
        - completed: bool

    Returns:
        200: TodoResponse with updated todo
        400: Validation error
        404: Todo not found (or owned by another user)
    """
    with get_core(atomic=True) as core:
        row = core.todo.update(todo_id, g.user_id, data.model_dump(exclude_unset=True))

    logger.info(f"Todo updated: {todo_id} by user {g.user_id}")

    return jsonify(_row_to_todo_response(row))


@todos_bp.delete("/<todo_id>")
def delete_todo(todo_id: str):
    """
    Delete one of the caller's todos.

    Returns:
        200: {"message": "Todo deleted"}
        404: Todo not found (or owned by another user)
    """
    with get_core(atomic=True) as core:
        core.todo.delete(todo_id, g.user_id)

    logger.info(f"Todo deleted: {todo_id} by user {g.user_id}")

    return jsonify({"message": "Todo deleted"}), 200
