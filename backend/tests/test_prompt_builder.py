"""Tests for the plan generation prompt."""
from __future__ import annotations

import pytest

from hobbypath.services.plan_generation.prompt_builder import build_prompt


@pytest.mark.parametrize(
    "level, time_range",
    [
        ("Beginner", "between 15 and 45 minutes"),
        ("Intermediate", "between 30 and 60 minutes"),
        ("Advanced", "between 45 and 90 minutes"),
    ],
)
def test_prompt_states_level_time_range(level: str, time_range: str) -> None:
    prompt = build_prompt("Chess", level)

    assert time_range in prompt
    assert f"{level} level student" in prompt


def test_prompt_names_hobby_count_and_format() -> None:
    prompt = build_prompt("Watercolor Painting", "Beginner")

    assert "world-class Watercolor Painting instructor" in prompt
    assert "EXACTLY 6-7" in prompt
    assert "ONLY a valid JSON array" in prompt
    for key in ("title", "description", "estimatedTime", "difficulty", "prerequisites", "practiceHints", "searchKeywords"):
        assert f'"{key}"' in prompt


def test_prompt_asks_for_forward_only_sequencing() -> None:
    prompt = build_prompt("Guitar", "Intermediate")

    assert "never on later ones" in prompt


def test_prompt_is_deterministic() -> None:
    assert build_prompt("Poker", "Advanced") == build_prompt("Poker", "Advanced")
