"""Value classification for both sides of the codec.

On the encode side, ``classify()`` tells which of the seven structural kinds a
JSON value belongs to. On the decode side, ``MessageFormat.from_byte()`` maps a
MessagePack lead byte to its format family, and ``MessageFormat.wire_type``
groups those families into the tags the decoder dispatches on.
"""

from __future__ import annotations

import enum

from ..exceptions import DecodeError, EncodeError
from ..values import JsonArray, JsonBool, JsonNull, JsonNumber, JsonObject, JsonString, JsonValue


class Kind(enum.Enum):
    """Structural kind of a JSON value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class WireType(enum.Enum):
    """Category of the next value in a MessagePack stream."""

    NIL = "nil"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BINARY = "binary"
    ARRAY = "array"
    MAP = "map"
    EXTENSION = "extension"


class MessageFormat(enum.Enum):
    """MessagePack format families, keyed by their lead byte ranges."""

    POSFIXINT = ("positive fixint", WireType.INTEGER)
    FIXMAP = ("fixmap", WireType.MAP)
    FIXARRAY = ("fixarray", WireType.ARRAY)
    FIXSTR = ("fixstr", WireType.STRING)
    NIL = ("nil", WireType.NIL)
    NEVER_USED = ("never used", None)
    BOOLEAN = ("bool", WireType.BOOLEAN)
    BIN8 = ("bin 8", WireType.BINARY)
    BIN16 = ("bin 16", WireType.BINARY)
    BIN32 = ("bin 32", WireType.BINARY)
    EXT8 = ("ext 8", WireType.EXTENSION)
    EXT16 = ("ext 16", WireType.EXTENSION)
    EXT32 = ("ext 32", WireType.EXTENSION)
    FLOAT32 = ("float 32", WireType.FLOAT)
    FLOAT64 = ("float 64", WireType.FLOAT)
    UINT8 = ("uint 8", WireType.INTEGER)
    UINT16 = ("uint 16", WireType.INTEGER)
    UINT32 = ("uint 32", WireType.INTEGER)
    UINT64 = ("uint 64", WireType.INTEGER)
    INT8 = ("int 8", WireType.INTEGER)
    INT16 = ("int 16", WireType.INTEGER)
    INT32 = ("int 32", WireType.INTEGER)
    INT64 = ("int 64", WireType.INTEGER)
    FIXEXT1 = ("fixext 1", WireType.EXTENSION)
    FIXEXT2 = ("fixext 2", WireType.EXTENSION)
    FIXEXT4 = ("fixext 4", WireType.EXTENSION)
    FIXEXT8 = ("fixext 8", WireType.EXTENSION)
    FIXEXT16 = ("fixext 16", WireType.EXTENSION)
    STR8 = ("str 8", WireType.STRING)
    STR16 = ("str 16", WireType.STRING)
    STR32 = ("str 32", WireType.STRING)
    ARRAY16 = ("array 16", WireType.ARRAY)
    ARRAY32 = ("array 32", WireType.ARRAY)
    MAP16 = ("map 16", WireType.MAP)
    MAP32 = ("map 32", WireType.MAP)
    NEGFIXINT = ("negative fixint", WireType.INTEGER)

    def __init__(self, label: str, wire_type: WireType | None) -> None:
        self.label = label
        self._wire_type = wire_type

    @property
    def wire_type(self) -> WireType:
        """The tag the decoder dispatches on.

        Raises:
            DecodeError: For the reserved 0xc1 byte, which has no meaning
        """
        if self._wire_type is None:
            raise DecodeError("Invalid MessagePack format byte 0xc1")
        return self._wire_type

    @classmethod
    def from_byte(cls, lead: int) -> MessageFormat:
        """Classify a lead byte.

        Args:
            lead: First byte of an encoded value (0-255)

        Returns:
            The format family of the byte
        """
        return _FORMAT_TABLE[lead]


def _build_format_table() -> tuple[MessageFormat, ...]:
    table: list[MessageFormat] = []
    single = {
        0xC0: MessageFormat.NIL,
        0xC1: MessageFormat.NEVER_USED,
        0xC2: MessageFormat.BOOLEAN,
        0xC3: MessageFormat.BOOLEAN,
        0xC4: MessageFormat.BIN8,
        0xC5: MessageFormat.BIN16,
        0xC6: MessageFormat.BIN32,
        0xC7: MessageFormat.EXT8,
        0xC8: MessageFormat.EXT16,
        0xC9: MessageFormat.EXT32,
        0xCA: MessageFormat.FLOAT32,
        0xCB: MessageFormat.FLOAT64,
        0xCC: MessageFormat.UINT8,
        0xCD: MessageFormat.UINT16,
        0xCE: MessageFormat.UINT32,
        0xCF: MessageFormat.UINT64,
        0xD0: MessageFormat.INT8,
        0xD1: MessageFormat.INT16,
        0xD2: MessageFormat.INT32,
        0xD3: MessageFormat.INT64,
        0xD4: MessageFormat.FIXEXT1,
        0xD5: MessageFormat.FIXEXT2,
        0xD6: MessageFormat.FIXEXT4,
        0xD7: MessageFormat.FIXEXT8,
        0xD8: MessageFormat.FIXEXT16,
        0xD9: MessageFormat.STR8,
        0xDA: MessageFormat.STR16,
        0xDB: MessageFormat.STR32,
        0xDC: MessageFormat.ARRAY16,
        0xDD: MessageFormat.ARRAY32,
        0xDE: MessageFormat.MAP16,
        0xDF: MessageFormat.MAP32,
    }
    for byte in range(256):
        if byte <= 0x7F:
            table.append(MessageFormat.POSFIXINT)
        elif byte <= 0x8F:
            table.append(MessageFormat.FIXMAP)
        elif byte <= 0x9F:
            table.append(MessageFormat.FIXARRAY)
        elif byte <= 0xBF:
            table.append(MessageFormat.FIXSTR)
        elif byte >= 0xE0:
            table.append(MessageFormat.NEGFIXINT)
        else:
            table.append(single[byte])
    return tuple(table)


_FORMAT_TABLE = _build_format_table()


def classify(value: JsonValue) -> Kind:
    """Return the structural kind of a JSON value.

    Raises:
        EncodeError: If value is not one of the JSON value types
    """
    if isinstance(value, JsonNull):
        return Kind.NULL
    if isinstance(value, JsonBool):
        return Kind.BOOLEAN
    if isinstance(value, JsonNumber):
        return Kind.INTEGER if value.is_integral else Kind.FLOAT
    if isinstance(value, JsonString):
        return Kind.STRING
    if isinstance(value, JsonArray):
        return Kind.ARRAY
    if isinstance(value, JsonObject):
        return Kind.OBJECT
    raise EncodeError(f"Cannot encode object of type {type(value).__name__}: not a JSON value")
