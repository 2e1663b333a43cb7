"""
Pytest configuration and shared fixtures for compiler tests.

Provides:
- AnyIO backend configuration
- Route definition fixtures parsed from the external (camelCase) shape
- Helpers for building match trees of a given depth
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402 (import after path setup)

from routematch.schemas.service_profile import (  # noqa: E402 (import after path setup)
    RequestMatch,
    ResponseMatch,
    RouteSpec,
)


# =============================================================================
# AnyIO Backend Configuration
# =============================================================================
# Per AnyIO testing docs: https://anyio.readthedocs.io/en/stable/testing.html
@pytest.fixture
def anyio_backend():
    return "asyncio"


# =============================================================================
# Route Definition Fixtures
# =============================================================================


def route_document(
    name: str = "GET /books/{id}",
    condition: dict[str, Any] | None = None,
    response_classes: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a route definition in the shape a resource store would supply."""
    document: dict[str, Any] = {
        "name": name,
        "condition": condition
        if condition is not None
        else {"all": [{"method": "GET"}, {"path": "^/books/[^/]+$"}]},
    }
    document["responseClasses"] = (
        response_classes
        if response_classes is not None
        else [
            {"condition": {"status": {"min": 500, "max": 599}}, "isSuccess": False},
            {"condition": {"status": {"min": 200, "max": 299}}, "isSuccess": True},
        ]
    )
    return document


@pytest.fixture
def books_route() -> RouteSpec:
    """A valid route with a nested request condition and two response classes."""
    return RouteSpec.model_validate(route_document())


@pytest.fixture
def profile_routes() -> list[RouteSpec]:
    """Routes of a small service profile, in declaration order."""
    return [
        RouteSpec.model_validate(route_document()),
        RouteSpec.model_validate(
            route_document(
                name="POST /books",
                condition={"all": [{"method": "POST"}, {"path": "^/books$"}]},
                response_classes=[],
            )
        ),
        RouteSpec.model_validate(
            route_document(
                name="not HEAD",
                condition={"not": {"method": "HEAD"}},
                response_classes=[
                    {"condition": {"not": {"status": {"min": 200, "max": 399}}}},
                ],
            )
        ),
    ]


def nested_request_match(depth: int) -> RequestMatch:
    """A chain of `not` nodes `depth` nodes deep, ending in a path leaf."""
    match = RequestMatch(path="/deep")
    for _ in range(depth - 1):
        match = RequestMatch(not_=match)
    return match


def nested_response_match(depth: int) -> ResponseMatch:
    """A chain of single-child `all` nodes `depth` nodes deep, ending in a status leaf."""
    match = ResponseMatch(status={"min": 500})
    for _ in range(depth - 1):
        match = ResponseMatch(all=[match])
    return match
