"""MessagePack encoder for JSON value trees.

This module provides encode_value(), which walks a value tree depth-first and
writes each node through a MessagePacker: scalars directly, containers as a
length header followed by their encoded children.
"""

from __future__ import annotations

from typing import Iterable, Optional, cast

from ..exceptions import EncodeError, NestingDepthError
from ..values import JsonArray, JsonBool, JsonNumber, JsonObject, JsonString, JsonValue
from ..values.base import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from .format import Kind, classify
from .stream import MessagePacker

_RECURSION_MESSAGE = "Value nesting exceeds the interpreter recursion limit"


def encode_value(packer: MessagePacker, value: JsonValue, max_depth: Optional[int] = None) -> None:
    """Encode a single value tree.

    No envelope is written around the value: container headers make every
    encoded tree self-delimiting.

    Integral numbers use the narrowest of three paths: signed 32-bit, signed
    64-bit, then the unsigned 64-bit form for larger values. Non-integral
    numbers are always written as 64-bit floats.

    Args:
        packer: MessagePacker to write to
        value: Value tree to encode
        max_depth: Maximum container nesting depth, or None for no limit

    Raises:
        EncodeError: If the tree holds a non-JSON object or an integer outside
            the MessagePack range
        NestingDepthError: If the tree is nested deeper than max_depth, or deeper
            than the interpreter recursion limit allows
        OSError: If the packer's sink fails
    """
    try:
        _encode(packer, value, 0, max_depth)
    except RecursionError as e:
        raise NestingDepthError(_RECURSION_MESSAGE) from e


def encode_values(
    packer: MessagePacker, values: Iterable[JsonValue], max_depth: Optional[int] = None
) -> None:
    """Encode values back-to-back, with no count prefix.

    The reading side has to rely on the end of the data to know when to stop
    (see ``Decoder.decode_list``).
    """
    for value in values:
        encode_value(packer, value, max_depth)


def _encode(packer: MessagePacker, value: JsonValue, depth: int, max_depth: Optional[int]) -> None:
    kind = classify(value)

    if kind is Kind.NULL:
        packer.pack_nil()
    elif kind is Kind.BOOLEAN:
        packer.pack_boolean(cast(JsonBool, value).value)
    elif kind is Kind.INTEGER:
        _encode_integer(packer, cast(JsonNumber, value).big_int_value())
    elif kind is Kind.FLOAT:
        packer.pack_double(cast(JsonNumber, value).float_value())
    elif kind is Kind.STRING:
        packer.pack_string(cast(JsonString, value).value)
    elif kind is Kind.ARRAY:
        array = cast(JsonArray, value)
        _check_depth(depth, max_depth)
        packer.pack_array_header(len(array))
        for item in array:
            _encode(packer, item, depth + 1, max_depth)
    elif kind is Kind.OBJECT:
        obj = cast(JsonObject, value)
        _check_depth(depth, max_depth)
        packer.pack_map_header(len(obj))
        # Key order on the wire is the object's iteration order
        for key, member in obj.items():
            packer.pack_string(key)
            _encode(packer, member, depth + 1, max_depth)
    else:
        raise EncodeError(f"Unhandled value kind {kind}")


def _encode_integer(packer: MessagePacker, number: int) -> None:
    if INT32_MIN <= number <= INT32_MAX:
        packer.pack_int32(number)
    elif INT64_MIN <= number <= INT64_MAX:
        packer.pack_int64(number)
    else:
        packer.pack_big_int(number)


def _check_depth(depth: int, max_depth: Optional[int]) -> None:
    if max_depth is not None and depth >= max_depth:
        raise NestingDepthError(f"Value nesting exceeds max_depth={max_depth}")
