"""Encoded size calculation utilities.

This module provides functions to compare the MessagePack size of a value tree
with the size of its compact JSON text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..codec.msgpack_json import MsgpackJson
from ..values import dumps, from_python


@dataclass(frozen=True)
class SizeReport:
    """Size comparison of one value tree.

    Attributes:
        msgpack_bytes: Length of the MessagePack encoding
        json_bytes: Length of the compact JSON text in UTF-8
    """

    msgpack_bytes: int
    json_bytes: int

    @property
    def ratio(self) -> float:
        """How many times smaller the MessagePack encoding is (JSON / MessagePack)."""
        return self.json_bytes / self.msgpack_bytes if self.msgpack_bytes > 0 else 1.0

    @property
    def saved_bytes(self) -> int:
        return self.json_bytes - self.msgpack_bytes


def encoded_size(value: Any, codec: Optional[MsgpackJson] = None) -> int:
    """Calculate the MessagePack size of a value tree in bytes.

    Args:
        value: JsonValue or plain Python objects
        codec: Codec to use (default: a codec with default configuration)

    Raises:
        EncodeError: If the value cannot be encoded

    Example:
        >>> encoded_size({"id": 1})
        5  # fixmap + fixstr "id" (3) + fixint
    """
    codec = codec if codec is not None else MsgpackJson()
    return len(codec.packb(value))


def json_size(value: Any) -> int:
    """Calculate the size of a value tree's compact JSON text in UTF-8 bytes.

    Example:
        >>> json_size({"id": 1})
        8  # {"id":1}
    """
    return len(dumps(from_python(value)).encode("utf-8"))


def size_report(value: Any, codec: Optional[MsgpackJson] = None) -> SizeReport:
    """Compare the MessagePack and JSON sizes of a value tree."""
    return SizeReport(msgpack_bytes=encoded_size(value, codec), json_bytes=json_size(value))
