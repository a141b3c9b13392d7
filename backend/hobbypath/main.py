"""Main FastAPI application for the HobbyPath backend."""
from fastapi import FastAPI, Request

from hobbypath.api.routes.learning_plan import router as learning_plan_router
from hobbypath.api.routes.storage import router as storage_router
from hobbypath.api.routes.user import router as user_router
from hobbypath.core.config import settings
from hobbypath.core.logging import configure_logging
from hobbypath.core.middleware import RequestIDMiddleware
from hobbypath.db.session import init_db
from hobbypath.observability.client import init_opik
from hobbypath.observability.tracing import trace

configure_logging(log_level=settings.log_level, debug=settings.debug)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.include_router(user_router)
app.include_router(learning_plan_router)
app.include_router(storage_router)


@app.on_event("startup")
async def startup() -> None:
    """Initialize observability and local storage after the event loop starts."""
    init_opik()
    init_db()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
