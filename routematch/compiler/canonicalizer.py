"""
JSON canonicalization for compiled routes.

Ensures that compiled output is byte-for-byte identical for the same inputs
by enforcing consistent key ordering. Lists keep their order: the order of
all/any children and of response classes is significant.
"""

import json
from typing import Any

from pydantic import BaseModel


def to_wire(obj: Any) -> Any:
    """
    Convert compiled models into plain JSON-ready values.

    Models are dumped by alias (camelCase keys such as `metricsLabels`) with
    unset optional fields dropped. Lists and dicts are converted element-wise.

    Example:
        >>> to_wire(RequestPath(path=PathMatch(regex="/foo")))
        {'kind': 'path', 'path': {'regex': '/foo'}}
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)

    elif isinstance(obj, list | tuple):
        return [to_wire(item) for item in obj]

    elif isinstance(obj, dict):
        return {k: to_wire(v) for k, v in obj.items()}

    return obj


def canonicalize_json(obj: Any) -> dict | list | Any:
    """
    Produce a deterministic, canonical representation of a JSON object.

    Args:
        obj: Python object (dict, list, or primitive) to canonicalize

    Returns:
        Canonicalized version with sorted keys at all levels

    Example:
        >>> canonicalize_json({"z": 1, "a": {"c": 2, "b": 3}})
        {'a': {'b': 3, 'c': 2}, 'z': 1}
    """
    if isinstance(obj, dict):
        return {k: canonicalize_json(v) for k, v in sorted(obj.items())}

    elif isinstance(obj, list):
        # Preserve list order but canonicalize each element
        return [canonicalize_json(item) for item in obj]

    else:
        # Primitives (str, int, float, bool, None) pass through unchanged
        return obj


def to_canonical_json_string(obj: Any) -> str:
    """
    Convert compiled output to a canonical JSON string.

    Useful for hashing a compiled profile or diffing two compilations.

    Example:
        >>> to_canonical_json_string({"metricsLabels": {"route": "r1"}, "isFailure": False})
        '{"isFailure":false,"metricsLabels":{"route":"r1"}}'
    """
    canonical = canonicalize_json(to_wire(obj))

    # separators=(',', ':') removes spaces after commas and colons
    return json.dumps(canonical, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def to_canonical_json_pretty(obj: Any) -> str:
    """Convert compiled output to a pretty-printed canonical JSON string."""
    canonical = canonicalize_json(to_wire(obj))
    return json.dumps(canonical, sort_keys=True, indent=2, ensure_ascii=False)
