"""Tests for the authored fallback curricula."""
from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import pytest

from hobbypath.services.plan_generation.fallback_plans import (
    FALLBACK_LIBRARY,
    fallback_techniques,
    generate_fallback_plan,
)

FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _ids():
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.mark.parametrize("hobby", sorted(FALLBACK_LIBRARY))
@pytest.mark.parametrize("level", ["Beginner", "Intermediate", "Advanced"])
def test_every_authored_curriculum_builds(hobby: str, level: str) -> None:
    plan = generate_fallback_plan(hobby, level, id_factory=_ids(), now=FIXED_NOW)

    assert plan.hobby == hobby
    assert plan.level == level
    assert len(plan.techniques) == len(FALLBACK_LIBRARY[hobby][level])
    assert all(technique.is_active for technique in plan.techniques)


def test_fallback_is_deterministic_apart_from_ids() -> None:
    first = generate_fallback_plan("Chess", "Beginner", id_factory=_ids(), now=FIXED_NOW)
    second = generate_fallback_plan("Chess", "Beginner", id_factory=_ids(), now=FIXED_NOW)

    assert first == second
    assert first.techniques[0].title == "How Each Piece Moves"
    assert first.created_at == first.updated_at == FIXED_NOW


def test_unknown_hobby_gets_generic_three_technique_plan() -> None:
    plan = generate_fallback_plan("Pottery", "Intermediate", id_factory=_ids(), now=FIXED_NOW)

    assert [technique.title for technique in plan.techniques] == [
        "Pottery Fundamentals",
        "Essential Pottery Techniques",
        "Pottery Practice Methods",
    ]
    assert plan.techniques[1].description == "Master the core techniques every intermediate should know"
    assert [technique.estimated_time for technique in plan.techniques] == ["45 mins", "60 mins", "30 mins"]
    assert plan.techniques[0].search_keywords == ["Pottery basics", "Pottery for beginners"]


def test_hobby_with_braces_is_inserted_literally() -> None:
    techniques = fallback_techniques("{Juggling}", "Beginner", _ids())

    assert techniques[0].title == "{Juggling} Fundamentals"


def test_technique_ids_are_unique() -> None:
    plan = generate_fallback_plan("Guitar", "Advanced", id_factory=_ids(), now=FIXED_NOW)
    ids = [technique.id for technique in plan.techniques] + [plan.id]

    assert len(ids) == len(set(ids))


@pytest.mark.parametrize("hobby, expected", [("", "New Hobby"), ("   ", "New Hobby"), (" Chess ", "Chess")])
def test_blank_hobby_is_named(hobby: str, expected: str) -> None:
    assert generate_fallback_plan(hobby, "Beginner", now=FIXED_NOW).hobby == expected


def test_unknown_level_uses_beginner() -> None:
    plan = generate_fallback_plan("Chess", "Expert", now=FIXED_NOW)

    assert plan.level == "Beginner"
    assert plan.techniques[0].title == "How Each Piece Moves"


def test_placeholders_inside_hobby_name_are_not_expanded() -> None:
    techniques = fallback_techniques("Drums {level}", "Beginner", _ids())

    assert techniques[0].title == "Drums {level} Fundamentals"
    assert techniques[1].description == "Master the core techniques every beginner should know"
