"""
Domain-specific exceptions for the route match compiler.

Every error is terminal: validation and conversion stop at the first
problem found during a depth-first, left-to-right walk and the exception is
handed back to the caller unchanged.
"""

from typing import Any


class RouteMatchError(Exception):
    """Base exception for all route match compiler errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidMatchError(RouteMatchError):
    """
    Raised when a request or response match tree is malformed.

    Subclasses name the specific defect so callers can tell them apart
    without parsing messages.
    """

    pass


class MissingMatchError(InvalidMatchError):
    """
    Raised when a match required by the schema is absent.

    Examples:
    - Route without a condition
    - Response class without a condition
    """

    pass


class NoFieldSetError(InvalidMatchError):
    """Raised when a match node has none of its selectors populated."""

    pass


class MultipleFieldsSetError(InvalidMatchError):
    """
    Raised when a match node has more than one selector populated.

    Examples:
    - {"method": "GET", "path": "/foo"}
    - {"all": [...], "not": {...}}
    """

    pass


class InvalidRangeError(InvalidMatchError):
    """Raised when a status range has both bounds set and max < min."""

    pass


class MatchTooDeepError(InvalidMatchError):
    """Raised when a match tree nests deeper than the configured limit."""

    pass


class InvalidMethodError(RouteMatchError):
    """Raised by the method resolver for names that are not HTTP tokens."""

    pass


# Stable error codes for callers that surface errors outside Python
ERROR_CODE_MAP = {
    MissingMatchError: "MISSING_MATCH",
    NoFieldSetError: "NO_FIELD_SET",
    MultipleFieldsSetError: "MULTIPLE_FIELDS_SET",
    InvalidRangeError: "INVALID_RANGE",
    MatchTooDeepError: "MATCH_TOO_DEEP",
    InvalidMethodError: "INVALID_METHOD",
}


def get_error_code(error: Exception) -> str:
    """
    Get the error code for a given exception.

    Args:
        error: The exception instance

    Returns:
        Error code (defaults to INTERNAL for unknown errors)
    """
    return ERROR_CODE_MAP.get(type(error), "INTERNAL")
