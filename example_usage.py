"""
Example usage of the route compiler.

Parses the routes of a service profile from their declarative (camelCase)
form, compiles them and prints the canonical JSON handed to the proxy.
"""

import logging

from routematch.compiler import compile_routes, to_canonical_json_string
from routematch.core.errors import InvalidMatchError, get_error_code
from routematch.core.observability import configure_logging
from routematch.schemas.service_profile import RouteSpec

logger = logging.getLogger(__name__)

BOOKS_ROUTES = [
    {
        "name": "GET /books/{id}",
        "condition": {"all": [{"method": "GET"}, {"path": "^/books/[^/]+$"}]},
        "responseClasses": [
            {"condition": {"status": {"min": 500, "max": 599}}, "isSuccess": False},
        ],
    },
    {
        "name": "POST /books",
        "condition": {"all": [{"method": "POST"}, {"path": "^/books$"}]},
    },
]

# Two selectors on one node: rejected
AMBIGUOUS_ROUTE = {"name": "ambiguous", "condition": {"method": "GET", "path": "/"}}


def main() -> None:
    configure_logging()

    routes = [RouteSpec.model_validate(doc) for doc in BOOKS_ROUTES]
    print(to_canonical_json_string(compile_routes(routes)))

    try:
        compile_routes([RouteSpec.model_validate(AMBIGUOUS_ROUTE)])
    except InvalidMatchError as e:
        logger.warning("Rejected route: %s", e.message, extra={"code": get_error_code(e)})


if __name__ == "__main__":
    main()
