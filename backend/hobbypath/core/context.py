"""Per-request context utilities."""
from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the current request id if available."""
    return request_id_ctx_var.get()


def ensure_request_id() -> str:
    """Return the current request id, minting one for calls made outside HTTP requests."""
    current = request_id_ctx_var.get()
    if current:
        return current
    return f"local-{uuid4().hex[:12]}"
