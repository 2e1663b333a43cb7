"""
Match Tree Validation for service profile routes.

Validates that request and response match trees are unambiguous:
- Every node has exactly one selector populated
- Children of all/any/not are themselves valid
- Status ranges are ordered when both bounds are given

Validation is fail-fast: the first defect found during a depth-first,
left-to-right walk is raised and nothing else is checked.
"""

import logging

from routematch.core.errors import (
    InvalidRangeError,
    MatchTooDeepError,
    MultipleFieldsSetError,
    NoFieldSetError,
)
from routematch.domain.enums import RequestMatchKind, ResponseMatchKind
from routematch.schemas.service_profile import Range, RequestMatch, ResponseMatch

logger = logging.getLogger(__name__)


def validate_request_match(match: RequestMatch) -> None:
    """
    Validate a request match tree.

    Selectors are inspected in the order all, any, method, not, path. A
    list selector counts as set when it is not None (an empty list is set),
    a string selector when it is non-empty.

    Args:
        match: Root of the request match tree

    Raises:
        NoFieldSetError: If a node has no selector set
        MultipleFieldsSetError: If a node has more than one selector set

    Example:
        >>> validate_request_match(RequestMatch(path="/foo"))  # Passes
        >>> validate_request_match(RequestMatch(method="GET", path="/foo"))  # Raises
    """
    _validate_request_node(match, path="$")


def validate_response_match(match: ResponseMatch) -> None:
    """
    Validate a response match tree.

    Selectors are inspected in the order all, any, status, not.

    Args:
        match: Root of the response match tree

    Raises:
        NoFieldSetError: If a node has no selector set
        MultipleFieldsSetError: If a node has more than one selector set
        InvalidRangeError: If a status range has both bounds set and max < min
    """
    _validate_response_node(match, path="$")


def _claim_kind(current, kind, grammar: str, path: str):
    """
    Record that `kind` is set on the node at `path`.

    Returns the kind so the caller can carry it forward. Raises if another
    kind was already recognized on the same node.
    """
    if current is not None:
        raise MultipleFieldsSetError(
            f"A {grammar} match may not have more than one field set at {path}",
            details={"path": path, "fields": [current.value, kind.value]},
        )
    return kind


def _validate_request_node(match: RequestMatch, path: str) -> None:
    kind = None

    if match.all is not None:
        kind = _claim_kind(kind, RequestMatchKind.ALL, "request", path)
        for i, child in enumerate(match.all):
            _validate_request_node(child, f"{path}.all[{i}]")

    if match.any is not None:
        kind = _claim_kind(kind, RequestMatchKind.ANY, "request", path)
        for i, child in enumerate(match.any):
            _validate_request_node(child, f"{path}.any[{i}]")

    if match.method:
        kind = _claim_kind(kind, RequestMatchKind.METHOD, "request", path)

    if match.not_ is not None:
        kind = _claim_kind(kind, RequestMatchKind.NOT, "request", path)
        _validate_request_node(match.not_, f"{path}.not")

    if match.path:
        kind = _claim_kind(kind, RequestMatchKind.PATH, "request", path)

    if kind is None:
        raise NoFieldSetError(
            f"A request match must have a field set at {path}", details={"path": path}
        )


def _validate_response_node(match: ResponseMatch, path: str) -> None:
    kind = None

    if match.all is not None:
        kind = _claim_kind(kind, ResponseMatchKind.ALL, "response", path)
        for i, child in enumerate(match.all):
            _validate_response_node(child, f"{path}.all[{i}]")

    if match.any is not None:
        kind = _claim_kind(kind, ResponseMatchKind.ANY, "response", path)
        for i, child in enumerate(match.any):
            _validate_response_node(child, f"{path}.any[{i}]")

    if match.status is not None:
        kind = _claim_kind(kind, ResponseMatchKind.STATUS, "response", path)
        _validate_status_range(match.status, f"{path}.status")

    if match.not_ is not None:
        kind = _claim_kind(kind, ResponseMatchKind.NOT, "response", path)
        _validate_response_node(match.not_, f"{path}.not")

    if kind is None:
        raise NoFieldSetError(
            f"A response match must have a field set at {path}", details={"path": path}
        )


def _validate_status_range(status: Range, path: str) -> None:
    # A zero bound leaves that side open and is never compared
    if status.min != 0 and status.max != 0 and status.max < status.min:
        raise InvalidRangeError(
            f"Range maximum cannot be smaller than minimum at {path}",
            details={"path": path, "min": status.min, "max": status.max},
        )


def check_match_depth(
    match: RequestMatch | ResponseMatch, max_depth: int, current_depth: int = 1
) -> None:
    """
    Validate that a match tree doesn't nest deeper than `max_depth` nodes.

    The root counts as depth 1. Works for both grammars since they share the
    all/any/not selectors. This is a guard for untrusted input; the
    validators above do not apply it.

    Args:
        match: Root of a request or response match tree
        max_depth: Maximum allowed depth
        current_depth: Depth of `match` in the recursion

    Raises:
        MatchTooDeepError: If the tree exceeds `max_depth`
    """
    if current_depth > max_depth:
        logger.warning("Match tree exceeds maximum depth of %d", max_depth)
        raise MatchTooDeepError(
            f"Match tree exceeds maximum depth of {max_depth}",
            details={"max_depth": max_depth},
        )

    children = [*(match.all or []), *(match.any or [])]
    if match.not_ is not None:
        children.append(match.not_)

    for child in children:
        check_match_depth(child, max_depth, current_depth + 1)
