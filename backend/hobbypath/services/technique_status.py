"""Status changes and progress views over a stored learning plan."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from hobbypath.api.schemas.learning_plan import LearningPlan, ProgressStats, Technique

STATUS_FILTERS = ("all", "active", "completed", "skipped")


class TechniqueNotFoundError(LookupError):
    def __init__(self, technique_id: str) -> None:
        super().__init__(f"Technique {technique_id} not found in plan")
        self.technique_id = technique_id


def set_completed(
    plan: LearningPlan,
    technique_id: str,
    completed: bool,
    now: Optional[datetime] = None,
) -> LearningPlan:
    """Mark a technique complete or not; completing it also clears the skipped flag."""
    changes: Dict[str, bool] = {"is_completed": completed}
    if completed:
        changes["is_striked_out"] = False
    return _apply(plan, technique_id, changes, now)


def set_striked_out(
    plan: LearningPlan,
    technique_id: str,
    striked_out: bool,
    now: Optional[datetime] = None,
) -> LearningPlan:
    """Skip or restore a technique; skipping it also clears the completed flag."""
    changes: Dict[str, bool] = {"is_striked_out": striked_out}
    if striked_out:
        changes["is_completed"] = False
    return _apply(plan, technique_id, changes, now)


def toggle_completed(plan: LearningPlan, technique_id: str, now: Optional[datetime] = None) -> LearningPlan:
    technique = _require(plan, technique_id)
    return set_completed(plan, technique_id, not technique.is_completed, now)


def toggle_striked_out(plan: LearningPlan, technique_id: str, now: Optional[datetime] = None) -> LearningPlan:
    technique = _require(plan, technique_id)
    return set_striked_out(plan, technique_id, not technique.is_striked_out, now)


def filter_techniques(plan: LearningPlan, status: str = "all") -> List[Technique]:
    if status == "active":
        return [technique for technique in plan.techniques if technique.is_active]
    if status == "completed":
        return [technique for technique in plan.techniques if technique.is_completed]
    if status == "skipped":
        return [technique for technique in plan.techniques if technique.is_striked_out]
    if status == "all":
        return list(plan.techniques)
    raise ValueError(f"Unknown status filter {status!r}; expected one of {', '.join(STATUS_FILTERS)}")


def progress_stats(plan: LearningPlan) -> ProgressStats:
    completed = sum(1 for technique in plan.techniques if technique.is_completed)
    skipped = sum(1 for technique in plan.techniques if technique.is_striked_out)
    total = len(plan.techniques)
    return ProgressStats(
        completed=completed,
        active=total - completed - skipped,
        skipped=skipped,
        total=total,
        percentage=round(completed / total * 100) if total else 0,
    )


def next_active_technique(plan: LearningPlan, after_id: Optional[str] = None) -> Optional[Technique]:
    """First still-active technique after ``after_id`` in curriculum order (from the start if omitted)."""
    techniques = plan.techniques
    if after_id is not None:
        position = next((index for index, technique in enumerate(techniques) if technique.id == after_id), None)
        if position is None:
            raise TechniqueNotFoundError(after_id)
        techniques = techniques[position + 1 :]
    return next((technique for technique in techniques if technique.is_active), None)


def _require(plan: LearningPlan, technique_id: str) -> Technique:
    technique = plan.find_technique(technique_id)
    if technique is None:
        raise TechniqueNotFoundError(technique_id)
    return technique


def _apply(
    plan: LearningPlan,
    technique_id: str,
    changes: Dict[str, bool],
    now: Optional[datetime],
) -> LearningPlan:
    _require(plan, technique_id)
    techniques = [
        Technique.model_validate({**technique.model_dump(), **changes}) if technique.id == technique_id else technique
        for technique in plan.techniques
    ]
    return plan.model_copy(update={"techniques": techniques, "updated_at": now or datetime.now(timezone.utc)})
