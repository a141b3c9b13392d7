"""Lightweight metrics helpers."""
from __future__ import annotations

from time import perf_counter
from typing import Any, Dict, Optional

from hobbypath.observability.tracing import trace


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record a metric as a short-lived Opik trace when Opik is enabled."""
    payload: Dict[str, Any] = {"value": value}
    if metadata:
        payload.update(metadata)

    with trace(f"metric:{name}", metadata=payload):
        pass


def log_latency(name: str, started_at: float, metadata: Optional[Dict[str, Any]] = None) -> float:
    """Log milliseconds elapsed since a ``perf_counter()`` reading and return them."""
    latency_ms = (perf_counter() - started_at) * 1000
    log_metric(name, latency_ms, metadata)
    return latency_ms
