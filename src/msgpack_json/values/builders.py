"""Conversions between plain Python objects, JSON text and value trees."""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional

from .base import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    FALSE,
    NULL,
    TRUE,
    JsonArray,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)


def from_python(obj: Any) -> JsonValue:
    """Build a value tree from plain Python objects.

    Values that are already ``JsonValue`` instances are returned unchanged, so
    partially built trees can be mixed with plain objects.

    Args:
        obj: None, bool, int, float, Decimal, str, list/tuple or str-keyed mapping

    Returns:
        The equivalent JSON value

    Raises:
        TypeError: If obj (or anything nested in it) has no JSON equivalent

    Example:
        >>> from_python({"ok": True, "ids": [1, 2]})["ids"][1]
        JsonNumber(value=2)
    """
    if isinstance(obj, JsonValue):
        return obj
    if obj is None:
        return NULL
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return TRUE if obj else FALSE
    if isinstance(obj, (int, float, Decimal)):
        return JsonNumber(obj)
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, (list, tuple)):
        if not obj:
            return EMPTY_ARRAY
        return JsonArray(from_python(item) for item in obj)
    if isinstance(obj, Mapping):
        if not obj:
            return EMPTY_OBJECT
        members = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, got {type(key).__name__}: {key!r}")
            members.append((key, from_python(value)))
        return JsonObject(members)
    raise TypeError(f"Object of type {type(obj).__name__} has no JSON equivalent")


def loads(text: str | bytes) -> JsonValue:
    """Parse JSON text into a value tree.

    Integers keep full precision; numbers with a fraction or exponent become
    floating values.

    Raises:
        ValueError: If the text is not valid JSON
    """
    return from_python(json.loads(text))


def _default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(value: JsonValue, indent: Optional[int] = None) -> str:
    """Serialize a value tree to JSON text.

    Args:
        value: Value tree to serialize
        indent: Pretty-print indentation, or None for compact output

    Returns:
        JSON text (non-ASCII characters are kept as-is)
    """
    separators = (",", ":") if indent is None else None
    return json.dumps(
        value.to_python(),
        indent=indent,
        separators=separators,
        ensure_ascii=False,
        default=_default,
    )
