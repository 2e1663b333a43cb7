"""
Route match compiler for service profiles.

This package validates user-authored request/response match trees and
compiles them into the tagged-union route tree of the data-plane proxy.

Key Components:
- validator: Checks every match node has exactly one selector set
- compiler: Converts validated routes, response classes and match trees
- methods: Resolves HTTP method names
- canonicalizer: Deterministic JSON output for compiled routes

Design Principles:
- Fail-fast: the first error aborts the conversion, unchanged
- Structure-preserving: output trees mirror input trees node for node
- Purity: inputs are never mutated, outputs are frozen
"""

from routematch.compiler.canonicalizer import canonicalize_json, to_canonical_json_string, to_wire
from routematch.compiler.compiler import (
    compile_routes,
    to_request_match,
    to_response_class,
    to_response_match,
    to_route,
)
from routematch.compiler.methods import parse_method
from routematch.compiler.validator import (
    check_match_depth,
    validate_request_match,
    validate_response_match,
)

__all__ = [
    "canonicalize_json",
    "check_match_depth",
    "compile_routes",
    "parse_method",
    "to_canonical_json_string",
    "to_request_match",
    "to_response_class",
    "to_response_match",
    "to_route",
    "to_wire",
    "validate_request_match",
    "validate_response_match",
]
