"""msgpack_json: MessagePack codec for JSON value trees

A Python library that translates an immutable JSON value tree to and from the
MessagePack binary format, structurally and without loss.

Key Features:
- Immutable JSON value model (objects keep their key order)
- Compact integer widths, with the unsigned 64-bit form for large integers
- Shared instances for small integers and configured strings on decode
- Single values or bare concatenations of values, no envelope
- Pydantic model support

Quick Start:
    >>> from msgpack_json import MsgpackJson, loads
    >>>
    >>> codec = MsgpackJson.builder().cached_strings({"OPEN", "CLOSED"}).build()
    >>> value = loads('{"id": 42, "state": "OPEN", "tags": [1, 2.5, null]}')
    >>> data = codec.packb(value)
    >>> codec.unpackb(data) == value
    True
"""

from __future__ import annotations

from .codec import (
    DEFAULT_INT_CACHE,
    CodecConfig,
    MessagePacker,
    MessageUnpacker,
    MsgpackJson,
    SmallIntCache,
    StringCache,
    packb,
    unpackb,
)
from .exceptions import (
    DecodeError,
    EncodeError,
    MsgpackJsonError,
    NestingDepthError,
    UnsupportedFormatError,
)
from .models import decode_model, encode_model
from .utils import SizeReport, encoded_size, json_size, size_report
from .values import (
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
    dumps,
    from_python,
    loads,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "MsgpackJson",
    "CodecConfig",
    "MessagePacker",
    "MessageUnpacker",
    "packb",
    "unpackb",
    # Caches
    "SmallIntCache",
    "StringCache",
    "DEFAULT_INT_CACHE",
    # Value model
    "JsonValue",
    "JsonNull",
    "JsonBool",
    "JsonNumber",
    "JsonString",
    "JsonArray",
    "JsonObject",
    "ValueType",
    "NULL",
    "TRUE",
    "FALSE",
    "EMPTY_ARRAY",
    "EMPTY_OBJECT",
    "from_python",
    "loads",
    "dumps",
    # Exceptions
    "MsgpackJsonError",
    "EncodeError",
    "DecodeError",
    "UnsupportedFormatError",
    "NestingDepthError",
    # Pydantic
    "encode_model",
    "decode_model",
    # Sizing
    "SizeReport",
    "encoded_size",
    "json_size",
    "size_report",
    # Version
    "__version__",
]
