"""Turn untrusted model output into canonical Technique records."""
from __future__ import annotations

import re
from typing import Any, Callable, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from hobbypath.api.schemas.learning_plan import Technique
from hobbypath.core.ids import new_id

DEFAULT_DESCRIPTION = "No description provided"
DEFAULT_ESTIMATED_TIME = "30 mins"
DEFAULT_DIFFICULTY = "Medium"
DEFAULT_PREREQUISITES = "None"
DEFAULT_PRACTICE_HINTS = "Practice regularly and focus on proper form"
MAX_SEARCH_KEYWORDS = 3
MAX_MINUTE_DIGITS = 6

TIME_PATTERN = re.compile(r"^(\d+)\s*(min|mins|minutes?)$", re.IGNORECASE)
FIRST_INTEGER = re.compile(r"\d+")

DIFFICULTY_SYNONYMS = {
    "easy": "Easy",
    "simple": "Easy",
    "basic": "Easy",
    "medium": "Medium",
    "moderate": "Medium",
    "intermediate": "Medium",
    "hard": "Hard",
    "difficult": "Hard",
    "advanced": "Hard",
    "challenging": "Hard",
}


class RawTechniqueRecord(BaseModel):
    """Loosely typed view of one array element; every field may be missing or of any type."""

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: Any = None
    estimated_time: Any = Field(default=None, validation_alias=AliasChoices("estimatedTime", "estimated_time"))
    difficulty: Any = None
    prerequisites: Any = None
    practice_hints: Any = Field(default=None, validation_alias=AliasChoices("practiceHints", "practice_hints"))
    search_keywords: Any = Field(
        default=None,
        validation_alias=AliasChoices("searchKeywords", "videoSearchTerms", "search_keywords"),
    )


def parse_raw_record(item: Any) -> Optional[RawTechniqueRecord]:
    """Return the validated record, or ``None`` when the element is not an object."""
    if not isinstance(item, Mapping):
        return None
    return RawTechniqueRecord.model_validate(dict(item))


def normalize_technique(item: Any, index: int, id_factory: Callable[[], str] = new_id) -> Technique:
    """Build a Technique from one parsed array element; never raises on bad input."""
    record = parse_raw_record(item) or RawTechniqueRecord()
    return Technique(
        id=id_factory(),
        title=_clean_text(record.title) or f"Technique {index + 1}",
        description=_clean_text(record.description) or DEFAULT_DESCRIPTION,
        is_completed=False,
        is_striked_out=False,
        estimated_time=normalize_estimated_time(record.estimated_time),
        difficulty=normalize_difficulty(record.difficulty),
        prerequisites=_clean_text(record.prerequisites) or DEFAULT_PREREQUISITES,
        practice_hints=_clean_text(record.practice_hints) or DEFAULT_PRACTICE_HINTS,
        search_keywords=normalize_search_keywords(record.search_keywords),
    )


def normalize_estimated_time(value: Any) -> str:
    text = _clean_text(value)
    if not text:
        return DEFAULT_ESTIMATED_TIME
    match = TIME_PATTERN.match(text)
    digits = match.group(1) if match else None
    if digits is None:
        first_number = FIRST_INTEGER.search(text)
        digits = first_number.group(0) if first_number else None
    # Longer runs are not a real duration and may exceed int() conversion limits.
    if digits is None or len(digits) > MAX_MINUTE_DIGITS:
        return DEFAULT_ESTIMATED_TIME
    return f"{int(digits)} mins"


def normalize_difficulty(value: Any) -> str:
    text = _clean_text(value)
    if not text:
        return DEFAULT_DIFFICULTY
    return DIFFICULTY_SYNONYMS.get(text.lower(), DEFAULT_DIFFICULTY)


def normalize_search_keywords(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    keywords: List[str] = []
    for entry in value:
        cleaned = _clean_text(entry)
        if cleaned and cleaned not in keywords:
            keywords.append(cleaned)
        if len(keywords) == MAX_SEARCH_KEYWORDS:
            break
    return keywords


def _clean_text(value: Any) -> Optional[str]:
    # bool is an int subclass and never carries text.
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    return None
