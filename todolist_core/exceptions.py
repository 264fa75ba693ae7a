"""Custom exceptions for todolist-core.

Every exception carries a human-readable message and an optional details
dict. main.py maps each class to an HTTP status and renders:

    {"error": {"type": "<ClassName>", "message": "...", "details": {...}}}
"""


class TodoListError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResourceNotFound(TodoListError):
    """Record does not exist or is not owned by the caller (404)."""


class ValidationError(TodoListError):
    """Malformed or missing input (400)."""


class ConflictError(TodoListError):
    """Unique constraint violated, e.g. duplicate username (409)."""


class AuthenticationError(TodoListError):
    """Missing, invalid or expired credentials (401)."""


class InvalidCredentials(AuthenticationError):
    """Username/password pair rejected at login (401)."""
