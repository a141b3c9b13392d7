"""Tests for technique status changes and progress views."""
from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import pytest
from pydantic import ValidationError

from hobbypath.api.schemas.learning_plan import Technique
from hobbypath.services.plan_generation.fallback_plans import generate_fallback_plan
from hobbypath.services.technique_status import (
    TechniqueNotFoundError,
    filter_techniques,
    next_active_technique,
    progress_stats,
    set_completed,
    set_striked_out,
    toggle_completed,
    toggle_striked_out,
)

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)
LATER = datetime(2024, 1, 2, tzinfo=timezone.utc)


@pytest.fixture()
def plan():
    counter = count(1)
    return generate_fallback_plan("Chess", "Beginner", id_factory=lambda: f"t{next(counter)}", now=CREATED)


def test_completing_clears_skip(plan) -> None:
    target = plan.techniques[0].id
    skipped = set_striked_out(plan, target, True, now=LATER)

    completed = set_completed(skipped, target, True, now=LATER)

    technique = completed.find_technique(target)
    assert technique.is_completed is True
    assert technique.is_striked_out is False
    assert completed.updated_at == LATER
    assert completed.created_at == CREATED


def test_skipping_clears_completion(plan) -> None:
    target = plan.techniques[1].id
    completed = set_completed(plan, target, True)

    skipped = set_striked_out(completed, target, True)

    technique = skipped.find_technique(target)
    assert technique.is_striked_out is True
    assert technique.is_completed is False


def test_status_changes_do_not_mutate_input(plan) -> None:
    target = plan.techniques[0].id

    set_completed(plan, target, True)

    assert plan.techniques[0].is_completed is False


def test_toggles_flip_flags(plan) -> None:
    target = plan.techniques[2].id

    once = toggle_completed(plan, target)
    twice = toggle_completed(once, target)
    skipped = toggle_striked_out(once, target)

    assert once.find_technique(target).is_completed is True
    assert twice.find_technique(target).is_completed is False
    assert skipped.find_technique(target).is_striked_out is True
    assert skipped.find_technique(target).is_completed is False


def test_unknown_technique_raises(plan) -> None:
    with pytest.raises(TechniqueNotFoundError):
        set_completed(plan, "missing", True)


def test_technique_rejects_both_flags() -> None:
    with pytest.raises(ValidationError):
        Technique(id="x", title="T", description="D", is_completed=True, is_striked_out=True)


def test_filters_and_progress(plan) -> None:
    ids = [technique.id for technique in plan.techniques]
    updated = set_completed(plan, ids[0], True)
    updated = set_completed(updated, ids[1], True)
    updated = set_striked_out(updated, ids[2], True)

    assert [t.id for t in filter_techniques(updated, "completed")] == ids[:2]
    assert [t.id for t in filter_techniques(updated, "skipped")] == [ids[2]]
    assert [t.id for t in filter_techniques(updated, "active")] == ids[3:]
    assert len(filter_techniques(updated, "all")) == len(ids)

    stats = progress_stats(updated)
    assert (stats.completed, stats.skipped, stats.active, stats.total) == (2, 1, 2, 5)
    assert stats.percentage == 40


def test_unknown_filter_is_rejected(plan) -> None:
    with pytest.raises(ValueError):
        filter_techniques(plan, "archived")


def test_next_active_technique(plan) -> None:
    ids = [technique.id for technique in plan.techniques]
    updated = set_completed(plan, ids[0], True)
    updated = set_striked_out(updated, ids[1], True)

    assert next_active_technique(updated).id == ids[2]
    assert next_active_technique(updated, after_id=ids[2]).id == ids[3]
    assert next_active_technique(updated, after_id=ids[-1]) is None
