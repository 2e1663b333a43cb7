"""
Domain enums for route match trees.

These enums name the selector kinds of the two match grammars and the
HTTP methods the data-plane proxy knows by number.
"""

from enum import Enum


class HttpMethod(str, Enum):
    """Registered HTTP methods - matches the proxy's HttpMethod.Registered enum."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    HEAD = "HEAD"
    TRACE = "TRACE"


class RequestMatchKind(str, Enum):
    """
    Selectors of a request match node.
    Declaration order is the precedence order used by validation and conversion.
    """

    ALL = "all"
    ANY = "any"
    METHOD = "method"
    NOT = "not"
    PATH = "path"


class ResponseMatchKind(str, Enum):
    """
    Selectors of a response match node.
    Declaration order is the precedence order used by validation and conversion.
    """

    ALL = "all"
    ANY = "any"
    STATUS = "status"
    NOT = "not"
