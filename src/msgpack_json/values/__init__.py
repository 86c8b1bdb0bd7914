"""Immutable JSON value model for msgpack_json.

This module provides the value tree that the codec encodes and decodes, plus
helpers to build trees from plain Python objects and JSON text.
"""

from __future__ import annotations

from .base import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    FALSE,
    NULL,
    TRUE,
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    ValueType,
)
from .builders import dumps, from_python, loads

__all__ = [
    "JsonValue",
    "JsonNull",
    "JsonBool",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    "ValueType",
    # Singletons
    "NULL",
    "TRUE",
    "FALSE",
    "EMPTY_ARRAY",
    "EMPTY_OBJECT",
    # Builders
    "from_python",
    "loads",
    "dumps",
]
