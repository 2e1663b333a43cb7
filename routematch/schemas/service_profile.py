"""Pydantic schemas for user-authored service profile routes.

These mirror the declarative route definition shape: a match node is a
struct of optional selectors, and nothing here checks that exactly one of
them is set. That is the job of `routematch.compiler.validator`, which
reports malformed nodes with the compiler's own error taxonomy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

UINT32_MAX = 2**32 - 1

# =============================================================================
# Match Trees
# =============================================================================


class RequestMatch(BaseModel):
    """Boolean match over an HTTP request."""

    all: list[RequestMatch] | None = Field(None, description="Conjunction of request matches")
    any: list[RequestMatch] | None = Field(None, description="Disjunction of request matches")
    not_: RequestMatch | None = Field(None, alias="not", description="Negated request match")
    method: str | None = Field(None, description="HTTP method name")
    path: str | None = Field(None, description="Regular expression over the request path")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class Range(BaseModel):
    """Inclusive status code range; a zero bound is unbounded on that side."""

    min: int = Field(0, ge=0, le=UINT32_MAX)
    max: int = Field(0, ge=0, le=UINT32_MAX)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ResponseMatch(BaseModel):
    """Boolean match over an HTTP response."""

    all: list[ResponseMatch] | None = Field(None, description="Conjunction of response matches")
    any: list[ResponseMatch] | None = Field(None, description="Disjunction of response matches")
    not_: ResponseMatch | None = Field(None, alias="not", description="Negated response match")
    status: Range | None = Field(None, description="Response status code range")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


# =============================================================================
# Routes
# =============================================================================


class ResponseClassSpec(BaseModel):
    """Classifies responses matching `condition` as successes or failures."""

    condition: ResponseMatch | None = None
    is_success: bool = Field(False, alias="isSuccess")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class RouteSpec(BaseModel):
    """A named request condition plus the response classes used to label it."""

    name: str = ""
    condition: RequestMatch | None = None
    responses: list[ResponseClassSpec] = Field(default_factory=list, alias="responseClasses")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")
