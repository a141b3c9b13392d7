"""Local data reset route."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from hobbypath.db.deps import get_db
from hobbypath.observability.tracing import trace
from hobbypath.services.storage import StorageService

router = APIRouter()


@router.delete("/storage", status_code=status.HTTP_204_NO_CONTENT, tags=["storage"])
def clear_storage(http_request: Request, db: Session = Depends(get_db)) -> None:
    """Forget the saved user selection and learning plan."""
    request_id = getattr(http_request.state, "request_id", None)
    try:
        with trace("storage.clear", metadata={"route": "/storage"}, request_id=request_id):
            StorageService.for_session(db).clear_all()
    except Exception:
        db.rollback()
        raise
