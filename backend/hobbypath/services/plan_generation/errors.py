"""Failures that make plan generation fall back to an authored curriculum."""
from __future__ import annotations


class PlanGenerationError(Exception):
    """Base class for every recoverable failure in the model-backed path."""

    stage = "unknown"


class TransportError(PlanGenerationError):
    """The model endpoint could not be reached or answered with a non-2xx status."""

    stage = "transport"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EnvelopeError(PlanGenerationError):
    """The endpoint answered 2xx but the payload lacked generated text."""

    stage = "envelope"


class ExtractionError(PlanGenerationError):
    """No bracketed array region was found in the generated text."""

    stage = "extraction"


class ParseError(PlanGenerationError):
    """The extracted region is not valid JSON or does not decode to a list."""

    stage = "parse"
