"""Utility functions for todolist-core.

Import convention: use module-level imports for clarity.

    from ..utils import isodatetime, uid
    created_at = isodatetime.now()
    todo_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
