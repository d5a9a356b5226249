"""
Query-string expansion for flight search.

Frontends serialize nested filters into the query string with bracket
notation (``priceRange[]=1000&stops[direct]=true``). This module turns
such pairs back into the nested payload the filter normalizer reads.
A bare value that looks like a JSON object or array is decoded as JSON.
A bracketed value of exactly "true" or "false" becomes a bool
(``airlines[indigo]=true``).
"""

import json
import re
from typing import Any, Dict, Iterable, List, Tuple

_KEY_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")
_BOOL_LITERALS = {"true": True, "false": False}


def _split_key(key: str) -> List[str]:
    """'stops[direct]' -> ['stops', 'direct']; 'priceRange[]' -> ['priceRange', '']."""
    match = _KEY_PATTERN.match(key)
    if not match:
        return [key]
    return [match.group(1)] + _SEGMENT_PATTERN.findall(match.group(2))


def _decode_value(value: str) -> Any:
    stripped = value.strip()
    if stripped[:1] in ("{", "["):
        try:
            return json.loads(stripped)
        except ValueError:
            return value
    return value


def _decode_nested_value(value: str) -> Any:
    return _BOOL_LITERALS.get(value, value)


def _assign(container: Dict[str, Any], path: List[str], value: Any) -> None:
    head, rest = path[0], path[1:]

    if not rest:
        if head in container:
            existing = container[head]
            if isinstance(existing, list):
                existing.append(value)
            else:
                container[head] = [existing, value]
        else:
            container[head] = value
        return

    if rest == [""]:
        existing = container.get(head)
        if isinstance(existing, list):
            existing.append(value)
        elif existing is None:
            container[head] = [value]
        else:
            container[head] = [existing, value]
        return

    child = container.get(head)
    if not isinstance(child, dict):
        child = {}
        container[head] = child
    _assign(child, rest, value)


def _listify_indexed(value: Any) -> Any:
    """Turn {'0': a, '1': b} (from key[0]=a&key[1]=b) into [a, b]."""
    if isinstance(value, dict):
        value = {k: _listify_indexed(v) for k, v in value.items()}
        if value and all(k.isdigit() for k in value):
            return [value[k] for k in sorted(value, key=int)]
    return value


def expand_query_params(items: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Rebuild a nested filter payload from query-string pairs.

    Args:
        items: (key, value) pairs in request order, repeats allowed.

    Returns:
        Nested payload. Bracketed "true"/"false" values become bools; other
        values stay strings and the normalizer coerces them.

    Example:
        >>> expand_query_params([("priceRange[]", "1"), ("priceRange[]", "9"),
        ...                      ("stops[direct]", "true")])
        {'priceRange': ['1', '9'], 'stops': {'direct': True}}
    """
    payload: Dict[str, Any] = {}
    for key, value in items:
        path = _split_key(key)
        decoded = _decode_value(value) if len(path) == 1 else _decode_nested_value(value)
        _assign(payload, path, decoded)
    return {key: _listify_indexed(value) for key, value in payload.items()}
