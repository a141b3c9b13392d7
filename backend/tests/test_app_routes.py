"""Regression tests for application route registration."""
import pytest
from fastapi.routing import APIRoute

from hobbypath.main import app


@pytest.mark.parametrize(
    "path, method",
    [
        ("/learning-plan", "POST"),
        ("/learning-plan", "GET"),
        ("/learning-plan/techniques/{technique_id}", "PATCH"),
        ("/user", "PUT"),
        ("/learning-plan/techniques/{technique_id}/toggle", "POST"),
        ("/learning-plan/next", "GET"),
        ("/storage", "DELETE"),
    ],
)
def test_route_registered_once(path: str, method: str) -> None:
    """Ensure each endpoint is mounted exactly once."""
    matches = [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path == path and method in route.methods
    ]
    assert len(matches) == 1
