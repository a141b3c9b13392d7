"""Learning plan API routes."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from hobbypath.api.schemas.learning_plan import (
    LearningPlan,
    LearningPlanRequest,
    ProgressStats,
    Technique,
    TechniqueStatusUpdate,
)
from hobbypath.api.schemas.resources import TechniqueResources
from hobbypath.api.schemas.user import UserProfile
from hobbypath.db.deps import get_db
from hobbypath.observability.metrics import log_metric
from hobbypath.observability.tracing import trace
from hobbypath.services.plan_generation.generator import LearningPlanGenerator, get_learning_plan_generator
from hobbypath.services.resource_catalog import comprehensive_resources
from hobbypath.services.storage import StorageService
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

router = APIRouter()


@router.post("/learning-plan", response_model=LearningPlan, tags=["learning-plan"])
def create_learning_plan(
    payload: LearningPlanRequest,
    http_request: Request,
    db: Session = Depends(get_db),
    generator: LearningPlanGenerator = Depends(get_learning_plan_generator),
) -> LearningPlan:
    """Generate a plan for the chosen hobby and level and make it the current plan."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata: Dict[str, Any] = {
        "route": "/learning-plan",
        "hobby": payload.hobby,
        "level": payload.level,
        "request_id": request_id,
    }

    plan = generator.generate_learning_plan(payload.hobby, payload.level)
    storage = StorageService.for_session(db)
    try:
        with trace("learning_plan.save", metadata=metadata, request_id=request_id):
            storage.save_learning_plan(plan)
            storage.save_user(
                UserProfile(selected_hobby=plan.hobby, selected_level=plan.level, current_plan_id=plan.id)
            )
    except Exception:
        db.rollback()
        raise
    return plan


@router.get("/learning-plan", response_model=LearningPlan, tags=["learning-plan"])
def get_learning_plan(db: Session = Depends(get_db)) -> LearningPlan:
    return _current_plan(db)


@router.get("/learning-plan/techniques", response_model=List[Technique], tags=["learning-plan"])
def list_techniques(
    status_filter: str = Query("all", alias="status", pattern="^(all|active|completed|skipped)$"),
    db: Session = Depends(get_db),
) -> List[Technique]:
    """List techniques in curriculum order, optionally filtered by status."""
    return filter_techniques(_current_plan(db), status_filter)


@router.get("/learning-plan/progress", response_model=ProgressStats, tags=["learning-plan"])
def get_progress(db: Session = Depends(get_db)) -> ProgressStats:
    return progress_stats(_current_plan(db))


@router.get("/learning-plan/next", response_model=Optional[Technique], tags=["learning-plan"])
def get_next_technique(
    after: Optional[str] = Query(default=None, description="Technique ID to continue after"),
    db: Session = Depends(get_db),
) -> Optional[Technique]:
    """First technique still active in curriculum order, or null when none remain."""
    try:
        return next_active_technique(_current_plan(db), after_id=after)
    except TechniqueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Technique not found") from exc


@router.patch(
    "/learning-plan/techniques/{technique_id}",
    response_model=Technique,
    tags=["learning-plan"],
)
def update_technique_status(
    technique_id: str,
    payload: TechniqueStatusUpdate,
    http_request: Request,
    db: Session = Depends(get_db),
) -> Technique:
    """Complete, skip, or restore a technique; the other flag is cleared when one becomes true."""
    if payload.is_completed is not None:
        value = payload.is_completed
        return _change_status(
            db, http_request, technique_id, "is_completed", lambda plan: set_completed(plan, technique_id, value)
        )
    value = bool(payload.is_striked_out)
    return _change_status(
        db, http_request, technique_id, "is_striked_out", lambda plan: set_striked_out(plan, technique_id, value)
    )


@router.post(
    "/learning-plan/techniques/{technique_id}/toggle",
    response_model=Technique,
    tags=["learning-plan"],
)
def toggle_technique_status(
    technique_id: str,
    http_request: Request,
    flag: str = Query(..., pattern="^(completed|skipped)$"),
    db: Session = Depends(get_db),
) -> Technique:
    """Flip the completed or skipped flag of a technique."""
    if flag == "completed":
        return _change_status(
            db, http_request, technique_id, "is_completed", lambda plan: toggle_completed(plan, technique_id)
        )
    return _change_status(
        db, http_request, technique_id, "is_striked_out", lambda plan: toggle_striked_out(plan, technique_id)
    )


@router.get(
    "/learning-plan/techniques/{technique_id}/resources",
    response_model=TechniqueResources,
    tags=["learning-plan"],
)
def get_technique_resources(technique_id: str, db: Session = Depends(get_db)) -> TechniqueResources:
    """Articles, tools, courses, and tutorials for one technique of the current plan."""
    plan = _current_plan(db)
    technique = plan.find_technique(technique_id)
    if technique is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Technique not found")
    return comprehensive_resources(technique.title, plan.hobby, plan.level)


def _current_plan(db: Session) -> LearningPlan:
    plan = StorageService.for_session(db).get_learning_plan()
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No learning plan saved")
    return plan


def _change_status(
    db: Session,
    http_request: Request,
    technique_id: str,
    field: str,
    change: Callable[[LearningPlan], LearningPlan],
) -> Technique:
    plan = _current_plan(db)
    request_id = getattr(http_request.state, "request_id", None)
    metadata: Dict[str, Any] = {
        "route": f"/learning-plan/techniques/{technique_id}",
        "plan_id": plan.id,
        "technique_id": technique_id,
        "field": field,
        "request_id": request_id,
    }

    try:
        with trace("technique.status.update", metadata=metadata, request_id=request_id):
            updated_plan = change(plan)
            StorageService.for_session(db).save_learning_plan(updated_plan)
    except TechniqueNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Technique not found") from exc
    except Exception:
        db.rollback()
        raise

    technique = next(technique for technique in updated_plan.techniques if technique.id == technique_id)
    log_metric("technique.status.changed", 1, metadata={"field": field, "value": getattr(technique, field)})
    return technique
