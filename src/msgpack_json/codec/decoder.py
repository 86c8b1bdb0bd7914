"""MessagePack decoder producing JSON value trees.

This module provides the Decoder class that reads one format tag at a time
from a MessageUnpacker and rebuilds the value tree depth-first.
"""

from __future__ import annotations

import base64
from typing import Optional

from ..exceptions import DecodeError, NestingDepthError, UnsupportedFormatError
from ..values import (
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
from .cache import SmallIntCache, StringCache
from .format import MessageFormat, WireType
from .stream import MessageUnpacker


class Decoder:
    """Decodes MessagePack values into JSON value trees.

    Decoded integers in [-128, 127] come from the small-integer cache, and
    strings listed in the string cache come back as the cached instance.
    Binary payloads have no JSON equivalent and decode to a ``JsonString``
    holding their base64 text.

    Example:
        >>> decoder = Decoder(SmallIntCache())
        >>> decoder.decode(MessageUnpacker(b"\\x92\\x05\\xa2hi"))
        JsonArray([JsonNumber(value=5), JsonString(value='hi')])
    """

    def __init__(
        self,
        int_cache: SmallIntCache,
        string_cache: Optional[StringCache] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """Initialize a decoder.

        Args:
            int_cache: Cache for integers in [-128, 127]
            string_cache: Cache of configured string literals, or None to disable
            max_depth: Maximum container nesting depth, or None for no limit
        """
        self._int_cache = int_cache
        self._string_cache = string_cache
        self._max_depth = max_depth

    def decode(self, unpacker: MessageUnpacker) -> JsonValue:
        """Decode the next complete value.

        Raises:
            DecodeError: If the data is truncated or malformed
            UnsupportedFormatError: If the next value is an extension type
            NestingDepthError: If the value is nested deeper than max_depth, or
                deeper than the interpreter recursion limit allows
            OSError: If reading from the underlying stream fails
        """
        try:
            return self._decode(unpacker, 0)
        except RecursionError as e:
            raise NestingDepthError("Value nesting exceeds the interpreter recursion limit") from e

    def decode_list(self, unpacker: MessageUnpacker) -> list[JsonValue]:
        """Decode values until the data is exhausted."""
        values: list[JsonValue] = []
        while unpacker.has_next():
            values.append(self.decode(unpacker))
        return values

    def _decode(self, unpacker: MessageUnpacker, depth: int) -> JsonValue:
        fmt = unpacker.next_format()
        wire_type = fmt.wire_type

        if wire_type is WireType.MAP:
            self._check_depth(depth)
            size = unpacker.unpack_map_header()
            if size == 0:
                return EMPTY_OBJECT
            members = []
            for _ in range(size):
                key = unpacker.unpack_string()
                members.append((key, self._decode(unpacker, depth + 1)))
            return JsonObject(members)

        if wire_type is WireType.ARRAY:
            self._check_depth(depth)
            size = unpacker.unpack_array_header()
            if size == 0:
                return EMPTY_ARRAY
            return JsonArray([self._decode(unpacker, depth + 1) for _ in range(size)])

        if wire_type is WireType.STRING:
            text = unpacker.unpack_string()
            if self._string_cache is not None:
                cached = self._string_cache.get(text)
                if cached is not None:
                    return cached
            return JsonString(text)

        if wire_type is WireType.INTEGER:
            # uint64 may exceed the signed range, so it skips the cache
            if fmt is MessageFormat.UINT64:
                return JsonNumber(unpacker.unpack_big_int())
            return self._int_cache.number(unpacker.unpack_int64())

        if wire_type is WireType.FLOAT:
            return JsonNumber(unpacker.unpack_double())

        if wire_type is WireType.BOOLEAN:
            return TRUE if unpacker.unpack_boolean() else FALSE

        if wire_type is WireType.NIL:
            unpacker.unpack_nil()
            return NULL

        if wire_type is WireType.BINARY:
            length = unpacker.unpack_binary_header()
            data = unpacker.read_payload(length) if length > 0 else b""
            return JsonString(base64.b64encode(data).decode("ascii"))

        if wire_type is WireType.EXTENSION:
            raise UnsupportedFormatError(
                f"Extension types are not supported ({fmt.label} at offset {unpacker.bytes_read()})"
            )

        raise DecodeError(f"Unknown MessagePack format: {fmt.label}")

    def _check_depth(self, depth: int) -> None:
        if self._max_depth is not None and depth >= self._max_depth:
            raise NestingDepthError(f"Value nesting exceeds max_depth={self._max_depth}")
