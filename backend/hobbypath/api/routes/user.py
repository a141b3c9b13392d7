"""Onboarding selection API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from hobbypath.api.schemas.user import UserProfile
from hobbypath.db.deps import get_db
from hobbypath.observability.tracing import trace
from hobbypath.services.storage import StorageService

router = APIRouter()


@router.get("/user", response_model=UserProfile, tags=["user"])
def get_user(http_request: Request, db: Session = Depends(get_db)) -> UserProfile:
    request_id = getattr(http_request.state, "request_id", None)
    with trace("user.get", metadata={"route": "/user"}, request_id=request_id):
        user = StorageService.for_session(db).get_user()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No user selection saved")
    return user


@router.put("/user", response_model=UserProfile, tags=["user"])
def save_user(payload: UserProfile, http_request: Request, db: Session = Depends(get_db)) -> UserProfile:
    """Store the learner's hobby and level selection."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata = {
        "route": "/user",
        "hobby": payload.selected_hobby,
        "level": payload.selected_level,
    }
    try:
        with trace("user.save", metadata=metadata, request_id=request_id):
            StorageService.for_session(db).save_user(payload)
    except Exception:
        db.rollback()
        raise
    return payload
