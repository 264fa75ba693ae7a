"""Pydantic schemas for the todo API."""

from .todo import TodoBase, TodoCreate, TodoResponse, TodoUpdate

__all__ = [
    "TodoBase",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
]
