"""Pydantic schemas for the compiled route tree handed to the data-plane proxy.

Each match node is a discriminated union on `kind`: a node is exactly one
variant by construction. All models are frozen, and repeated fields are
tuples so a compiled tree cannot be changed in place. The one exception is
`DestinationRoute.metrics_labels`, a plain dict: rebinding it is blocked,
mutating its entries is not.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from routematch.domain.enums import HttpMethod


class WireModel(BaseModel):
    """Base for every compiled node."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# =============================================================================
# Leaf Payloads
# =============================================================================


class HttpMethodValue(WireModel):
    """Either a registered method or the raw name of an extension method."""

    registered: HttpMethod | None = None
    unregistered: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> HttpMethodValue:
        if (self.registered is None) == (self.unregistered is None):
            raise ValueError("exactly one of registered or unregistered must be set")
        return self


class PathMatch(WireModel):
    regex: str


class HttpStatusRange(WireModel):
    """Raw status bounds; 0 means unbounded on that side."""

    min: int = 0
    max: int = 0


# =============================================================================
# Request Match Variants
# =============================================================================


class RequestAll(WireModel):
    kind: Literal["all"] = "all"
    matches: tuple[DestinationRequestMatch, ...]


class RequestAny(WireModel):
    kind: Literal["any"] = "any"
    matches: tuple[DestinationRequestMatch, ...]


class RequestNot(WireModel):
    kind: Literal["not"] = "not"
    match: DestinationRequestMatch


class RequestMethod(WireModel):
    kind: Literal["method"] = "method"
    method: HttpMethodValue


class RequestPath(WireModel):
    kind: Literal["path"] = "path"
    path: PathMatch


DestinationRequestMatch = Annotated[
    RequestAll | RequestAny | RequestNot | RequestMethod | RequestPath,
    Field(discriminator="kind"),
]


# =============================================================================
# Response Match Variants
# =============================================================================


class ResponseAll(WireModel):
    kind: Literal["all"] = "all"
    matches: tuple[DestinationResponseMatch, ...]


class ResponseAny(WireModel):
    kind: Literal["any"] = "any"
    matches: tuple[DestinationResponseMatch, ...]


class ResponseNot(WireModel):
    kind: Literal["not"] = "not"
    match: DestinationResponseMatch


class ResponseStatus(WireModel):
    kind: Literal["status"] = "status"
    status: HttpStatusRange


DestinationResponseMatch = Annotated[
    ResponseAll | ResponseAny | ResponseNot | ResponseStatus,
    Field(discriminator="kind"),
]


# =============================================================================
# Routes
# =============================================================================


class DestinationResponseClass(WireModel):
    condition: DestinationResponseMatch
    is_failure: bool = Field(alias="isFailure")


class DestinationRoute(WireModel):
    """Compiled route with its metrics labels and ordered response classes."""

    condition: DestinationRequestMatch
    response_classes: tuple[DestinationResponseClass, ...] = Field(alias="responseClasses")
    metrics_labels: dict[str, str] = Field(alias="metricsLabels")


for _model in (
    RequestAll,
    RequestAny,
    RequestNot,
    ResponseAll,
    ResponseAny,
    ResponseNot,
    DestinationResponseClass,
    DestinationRoute,
):
    _model.model_rebuild()
