"""Tests for model-backed plan generation and its fallback."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from itertools import count

import pytest

from hobbypath.services.plan_generation.errors import EnvelopeError, TransportError
from hobbypath.services.plan_generation.generator import LearningPlanGenerator

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _ids():
    counter = count(1)
    return lambda: f"id-{next(counter)}"


class _StubModel:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


def _generator(model, **kwargs) -> LearningPlanGenerator:
    kwargs.setdefault("enrich_resources", False)
    return LearningPlanGenerator(model, id_factory=_ids(), clock=lambda: FIXED_NOW, **kwargs)


def _records(n: int):
    return [
        {
            "title": f"Step {i}",
            "description": f"Learn step {i}",
            "estimatedTime": f"{30 + i} minutes",
            "difficulty": "easy" if i < 3 else "hard",
            "searchKeywords": [f"kw {i}"],
        }
        for i in range(1, n + 1)
    ]


@pytest.mark.parametrize(
    "error",
    [
        TransportError("down", status_code=503),
        EnvelopeError("no text"),
        RuntimeError("unexpected"),
    ],
)
def test_model_failure_returns_fallback_plan(error) -> None:
    plan = _generator(_StubModel(error=error)).generate_learning_plan("Guitar", "Advanced")

    assert plan.hobby == "Guitar"
    assert plan.level == "Advanced"
    assert plan.techniques
    assert all(technique.is_active for technique in plan.techniques)
    assert plan.created_at == plan.updated_at == FIXED_NOW


@pytest.mark.parametrize(
    "text",
    ["Sorry, I cannot help with that.", "[not json]", '{"title": "A"}', "[]", ""],
)
def test_unusable_model_text_returns_fallback_plan(text: str) -> None:
    plan = _generator(_StubModel(text=text)).generate_learning_plan("Chess", "Beginner")

    assert plan.techniques[0].title == "How Each Piece Moves"


def test_model_plan_preserves_order_and_normalizes() -> None:
    model = _StubModel(text=json.dumps(_records(6)))

    plan = _generator(model).generate_learning_plan("Chess", "Intermediate")

    assert plan.hobby == "Chess"
    assert plan.level == "Intermediate"
    assert len(plan.techniques) == 6
    assert [technique.title for technique in plan.techniques] == [f"Step {i}" for i in range(1, 7)]
    assert plan.techniques[0].estimated_time == "31 mins"
    assert plan.techniques[0].difficulty == "Easy"
    assert plan.techniques[5].difficulty == "Hard"
    assert plan.created_at == plan.updated_at == FIXED_NOW
    assert "Chess" in model.prompts[0]
    assert len(model.prompts) == 1


def test_fenced_response_with_prose_is_accepted() -> None:
    text = "Here is the plan you asked for:\n```json\n" + json.dumps(_records(7)) + "\n```\nEnjoy!"

    plan = _generator(_StubModel(text=text)).generate_learning_plan("Poker", "Beginner")

    assert len(plan.techniques) == 7
    assert plan.techniques[6].title == "Step 7"


def test_out_of_range_count_is_kept() -> None:
    plan = _generator(_StubModel(text=json.dumps(_records(4)))).generate_learning_plan("Knitting", "Beginner")

    assert len(plan.techniques) == 4


def test_missing_client_skips_model_call() -> None:
    plan = _generator(None).generate_learning_plan("Pottery", "Beginner")

    assert [technique.title for technique in plan.techniques][0] == "Pottery Fundamentals"


def test_blank_hobby_skips_model_call() -> None:
    model = _StubModel(text=json.dumps(_records(6)))

    plan = _generator(model).generate_learning_plan("   ", "Beginner")

    assert model.prompts == []
    assert plan.hobby == "New Hobby"


def test_enrichment_attaches_videos_and_resources() -> None:
    generator = _generator(_StubModel(text=json.dumps(_records(6))), enrich_resources=True)

    plan = generator.generate_learning_plan("Guitar", "Beginner")

    first = plan.techniques[0]
    assert len(first.curated_videos) == 1
    assert first.curated_videos[0].is_recommended is True
    assert any(resource.source == "JustinGuitar" for resource in first.learning_resources)


def test_ids_are_unique_within_plan() -> None:
    plan = _generator(_StubModel(text=json.dumps(_records(6))), enrich_resources=True).generate_learning_plan(
        "Chess", "Advanced"
    )
    ids = [plan.id] + [technique.id for technique in plan.techniques]

    assert len(ids) == len(set(ids))


def test_oversized_time_field_keeps_model_plan() -> None:
    records = _records(6)
    records[2]["estimatedTime"] = "take " + "9" * 5000

    plan = _generator(_StubModel(text=json.dumps(records))).generate_learning_plan("Chess", "Beginner")

    assert plan.techniques[0].title == "Step 1"
    assert plan.techniques[2].estimated_time == "30 mins"
