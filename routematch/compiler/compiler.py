"""
Route Compiler for service profiles.

Converts user-authored route definitions into the tagged-union route tree
consumed by the data-plane proxy:
- Every match tree is validated before any of it is converted
- Output trees mirror input trees exactly (same branching, same order)
- The first error aborts the whole conversion and is raised unchanged

Conversion is a pure tree-to-tree transform; inputs are never mutated.
"""

import logging
import time
from collections.abc import Sequence

from routematch.compiler.methods import parse_method
from routematch.compiler.validator import (
    check_match_depth,
    validate_request_match,
    validate_response_match,
)
from routematch.core.config import settings
from routematch.core.errors import MissingMatchError, NoFieldSetError
from routematch.core.observability import record_compilation, reset_route_name, set_route_name
from routematch.schemas.destination import (
    DestinationRequestMatch,
    DestinationResponseClass,
    DestinationResponseMatch,
    DestinationRoute,
    HttpStatusRange,
    PathMatch,
    RequestAll,
    RequestAny,
    RequestMethod,
    RequestNot,
    RequestPath,
    ResponseAll,
    ResponseAny,
    ResponseNot,
    ResponseStatus,
)
from routematch.schemas.service_profile import (
    RequestMatch,
    ResponseClassSpec,
    ResponseMatch,
    RouteSpec,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Routes
# =============================================================================


def to_route(route: RouteSpec, max_depth: int | None = None) -> DestinationRoute:
    """
    Compile a single route.

    The route name becomes the `route` metrics label as-is; an empty name
    yields an empty label value.

    Args:
        route: Route definition
        max_depth: Optional maximum match tree depth for every condition

    Returns:
        Compiled route

    Raises:
        MatchTooDeepError: If a condition nests deeper than `max_depth`
        InvalidMatchError: If the condition or any response class is invalid
        InvalidMethodError: If a method selector is not a valid HTTP token
    """
    token = set_route_name(route.name)
    try:
        condition = to_request_match(route.condition, max_depth)
        response_classes = [to_response_class(rc, max_depth) for rc in route.responses]
        logger.debug("Compiled route with %d response classes", len(response_classes))
    finally:
        reset_route_name(token)

    return DestinationRoute(
        condition=condition,
        response_classes=response_classes,
        metrics_labels={"route": route.name},
    )


def to_response_class(
    response_class: ResponseClassSpec, max_depth: int | None = None
) -> DestinationResponseClass:
    """
    Compile a response class; `is_failure` is the negation of `is_success`.

    Raises:
        InvalidMatchError: If the condition is missing or invalid
    """
    condition = to_response_match(response_class.condition, max_depth)
    return DestinationResponseClass(
        condition=condition,
        is_failure=not response_class.is_success,
    )


def compile_routes(
    routes: Sequence[RouteSpec], max_depth: int | None = None
) -> list[DestinationRoute]:
    """
    Compile an ordered list of routes, such as all routes of one service profile.

    When a maximum nesting depth is given (or configured through
    COMPILER_MAX_MATCH_DEPTH), each condition is checked against it just
    before that condition is converted, so the first error in route order wins.

    Args:
        routes: Route definitions, in order
        max_depth: Optional maximum match tree depth, overrides settings

    Returns:
        Compiled routes in input order

    Raises:
        MatchTooDeepError: If a condition nests deeper than the limit
        InvalidMatchError: If any route is invalid
        InvalidMethodError: If a method selector is not a valid HTTP token
    """
    start_time = time.time()
    limit = max_depth if max_depth is not None else settings.compiler_max_match_depth
    logger.info("Starting compilation of %d routes", len(routes))

    try:
        compiled = [to_route(route, limit) for route in routes]
    except Exception:
        record_compilation("error", time.time() - start_time, 0)
        raise

    duration = time.time() - start_time
    logger.info("Successfully compiled %d routes, duration=%.6fs", len(compiled), duration)
    record_compilation("success", duration, len(compiled))

    return compiled


# =============================================================================
# Request Matches
# =============================================================================


def to_request_match(
    match: RequestMatch | None, max_depth: int | None = None
) -> DestinationRequestMatch:
    """
    Validate and compile a request match tree.

    Args:
        match: Root of the request match tree, None if the route has none
        max_depth: Optional maximum tree depth, checked before validation

    Returns:
        Compiled request match

    Raises:
        MissingMatchError: If `match` is None
        MatchTooDeepError: If the tree nests deeper than `max_depth`
        NoFieldSetError: If a node has no selector set
        MultipleFieldsSetError: If a node has more than one selector set
        InvalidMethodError: If a method selector is not a valid HTTP token
    """
    if match is None:
        raise MissingMatchError("missing request match")

    if max_depth is not None:
        check_match_depth(match, max_depth)
    validate_request_match(match)
    return _convert_request_node(match)


def _convert_request_node(match: RequestMatch) -> DestinationRequestMatch:
    # Same precedence as validation: all, any, method, not, path
    if match.all is not None:
        return RequestAll(matches=[_convert_request_node(m) for m in match.all])

    if match.any is not None:
        return RequestAny(matches=[_convert_request_node(m) for m in match.any])

    if match.method:
        return RequestMethod(method=parse_method(match.method))

    if match.not_ is not None:
        return RequestNot(match=_convert_request_node(match.not_))

    if match.path:
        return RequestPath(path=PathMatch(regex=match.path))

    raise NoFieldSetError("A request match must have a field set")


# =============================================================================
# Response Matches
# =============================================================================


def to_response_match(
    match: ResponseMatch | None, max_depth: int | None = None
) -> DestinationResponseMatch:
    """
    Validate and compile a response match tree.

    Status bounds are copied unchanged; an unset bound stays 0.

    Args:
        match: Root of the response match tree, None if the class has none
        max_depth: Optional maximum tree depth, checked before validation

    Returns:
        Compiled response match

    Raises:
        MissingMatchError: If `match` is None
        MatchTooDeepError: If the tree nests deeper than `max_depth`
        NoFieldSetError: If a node has no selector set
        MultipleFieldsSetError: If a node has more than one selector set
        InvalidRangeError: If a status range has both bounds set and max < min
    """
    if match is None:
        raise MissingMatchError("missing response match")

    if max_depth is not None:
        check_match_depth(match, max_depth)
    validate_response_match(match)
    return _convert_response_node(match)


def _convert_response_node(match: ResponseMatch) -> DestinationResponseMatch:
    # Same precedence as validation: all, any, status, not
    if match.all is not None:
        return ResponseAll(matches=[_convert_response_node(m) for m in match.all])

    if match.any is not None:
        return ResponseAny(matches=[_convert_response_node(m) for m in match.any])

    if match.status is not None:
        return ResponseStatus(status=HttpStatusRange(min=match.status.min, max=match.status.max))

    if match.not_ is not None:
        return ResponseNot(match=_convert_response_node(match.not_))

    raise NoFieldSetError("A response match must have a field set")
