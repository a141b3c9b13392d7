"""Pull the JSON array out of free-form model output."""
from __future__ import annotations

import json
import re
from typing import Any, List

from hobbypath.services.plan_generation.errors import ExtractionError, ParseError

# Matches ```json (any case) and bare ``` fence markers, plus the line break after them.
FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)


def extract_json_array(raw_text: str) -> str:
    """
    Return the substring from the first ``[`` to the last ``]`` of ``raw_text``.

    Code-fence markers are removed first; the text between them is kept.
    Anything outside the bracket pair is discarded, whatever it contains.
    """
    cleaned = FENCE_PATTERN.sub("", (raw_text or "").strip())
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start == -1 or end == -1 or end < start:
        raise ExtractionError("No JSON array found in model response")
    return cleaned[start : end + 1]


def parse_json_array(candidate: str) -> List[Any]:
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Extracted text is not valid JSON: {exc.msg} at position {exc.pos}") from exc
    except ValueError as exc:
        # Integer literals past the interpreter's digit limit.
        raise ParseError(f"Extracted text could not be decoded: {exc}") from exc
    if not isinstance(parsed, list):
        raise ParseError(f"Expected a JSON array, got {type(parsed).__name__}")
    return parsed
