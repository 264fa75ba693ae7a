"""Identifier generation.

All user and todo ids are UUID v4 strings produced here.
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())
