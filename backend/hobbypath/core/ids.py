"""Identifier generation for plans, techniques, and resources."""
from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Return an opaque, collision-resistant identifier."""
    return uuid4().hex
