"""HTTP method name resolution for request match leaves."""

import re

from routematch.core.errors import InvalidMethodError
from routematch.domain.enums import HttpMethod
from routematch.schemas.destination import HttpMethodValue

# RFC 7230 section 3.2.6 token characters
METHOD_TOKEN_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def parse_method(name: str) -> HttpMethodValue:
    """
    Resolve a method name to the proxy's method representation.

    Registered methods are matched case-insensitively. Any other valid HTTP
    token is passed through verbatim as an extension method.

    Args:
        name: Method name as written in the route definition

    Returns:
        HttpMethodValue with either `registered` or `unregistered` set

    Raises:
        InvalidMethodError: If `name` is not a valid HTTP token

    Example:
        >>> parse_method("get")
        HttpMethodValue(registered=<HttpMethod.GET: 'GET'>, unregistered=None)
        >>> parse_method("PROPFIND")
        HttpMethodValue(registered=None, unregistered='PROPFIND')
    """
    if not isinstance(name, str) or not METHOD_TOKEN_PATTERN.match(name):
        raise InvalidMethodError(
            f"Invalid HTTP method name '{name}'", details={"method": name}
        )

    try:
        return HttpMethodValue(registered=HttpMethod(name.upper()))
    except ValueError:
        return HttpMethodValue(unregistered=name)
