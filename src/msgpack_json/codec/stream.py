"""MessagePack primitive reader and writer.

This module provides the low-level operations the codec is built on: writing
and reading nil, booleans, integers of a given width, doubles, strings, binary
payloads and container headers. Writing delegates the wire encoding to the
``msgpack`` library; reading is done here so the next format can be peeked
before a value is consumed.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Optional, Union

import msgpack

from ..exceptions import DecodeError, EncodeError
from ..values.base import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from .format import MessageFormat

UINT64_MAX = (1 << 64) - 1
CONTAINER_MAX = (1 << 32) - 1

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_I8 = struct.Struct(">b")
_I16 = struct.Struct(">h")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")
_F32 = struct.Struct(">f")
_F64 = struct.Struct(">d")

_INT_LAYOUTS = {
    0xCC: _U8,
    0xCD: _U16,
    0xCE: _U32,
    0xCF: _U64,
    0xD0: _I8,
    0xD1: _I16,
    0xD2: _I32,
    0xD3: _I64,
}

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class MessagePacker:
    """Writes MessagePack primitives to a binary sink.

    Without a sink the packer writes to an in-memory buffer whose content is
    available through ``to_bytes()``.

    Example:
        >>> packer = MessagePacker()
        >>> packer.pack_array_header(2)
        >>> packer.pack_int32(1)
        >>> packer.pack_string("two")
        >>> packer.to_bytes()
        b'\\x92\\x01\\xa3two'
    """

    def __init__(self, sink: Optional[BinaryIO] = None) -> None:
        """Initialize a packer.

        Args:
            sink: Binary file-like object to write to (None for an in-memory buffer)
        """
        self._buffer: Optional[io.BytesIO] = io.BytesIO() if sink is None else None
        self._sink: BinaryIO = sink if sink is not None else self._buffer  # type: ignore[assignment]
        self._packer = msgpack.Packer(use_bin_type=True, autoreset=True)

    def pack_nil(self) -> None:
        self._sink.write(self._packer.pack(None))

    def pack_boolean(self, value: bool) -> None:
        self._sink.write(self._packer.pack(bool(value)))

    def pack_int32(self, value: int) -> None:
        """Write a signed 32-bit integer in its most compact wire form.

        Raises:
            EncodeError: If value does not fit in 32 bits
        """
        if value < INT32_MIN or value > INT32_MAX:
            raise EncodeError(f"Value {value} does not fit in a signed 32-bit integer")
        self._sink.write(self._packer.pack(int(value)))

    def pack_int64(self, value: int) -> None:
        """Write a signed 64-bit integer in its most compact wire form.

        Raises:
            EncodeError: If value does not fit in 64 bits
        """
        if value < INT64_MIN or value > INT64_MAX:
            raise EncodeError(f"Value {value} does not fit in a signed 64-bit integer")
        self._sink.write(self._packer.pack(int(value)))

    def pack_big_int(self, value: int) -> None:
        """Write an integer of any width MessagePack can carry.

        Values above the signed 64-bit range use the unsigned 64-bit form.

        Raises:
            EncodeError: If value is outside [-2**63, 2**64 - 1]
        """
        if value < INT64_MIN or value > UINT64_MAX:
            raise EncodeError(
                f"Value {value} is outside the MessagePack integer range [{INT64_MIN}, {UINT64_MAX}]"
            )
        self._sink.write(self._packer.pack(int(value)))

    def pack_double(self, value: float) -> None:
        self._sink.write(self._packer.pack(float(value)))

    def pack_string(self, value: str) -> None:
        """Write a UTF-8 string.

        Raises:
            EncodeError: If the string cannot be encoded as UTF-8 or is too long
        """
        try:
            self._sink.write(self._packer.pack(value))
        except UnicodeEncodeError as e:
            raise EncodeError(f"String is not encodable as UTF-8: {e}") from e
        except ValueError as e:
            raise EncodeError(f"String too large: {e}") from e

    def pack_binary(self, data: bytes) -> None:
        try:
            self._sink.write(self._packer.pack(bytes(data)))
        except ValueError as e:
            raise EncodeError(f"Binary payload too large: {e}") from e

    def pack_array_header(self, size: int) -> None:
        if size < 0 or size > CONTAINER_MAX:
            raise EncodeError(f"Array size {size} out of range [0, {CONTAINER_MAX}]")
        self._sink.write(self._packer.pack_array_header(size))

    def pack_map_header(self, size: int) -> None:
        if size < 0 or size > CONTAINER_MAX:
            raise EncodeError(f"Map size {size} out of range [0, {CONTAINER_MAX}]")
        self._sink.write(self._packer.pack_map_header(size))

    def flush(self) -> None:
        """Flush the sink if it supports flushing."""
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()

    def to_bytes(self) -> bytes:
        """Return everything written so far.

        Raises:
            ValueError: If the packer writes to an external sink
        """
        if self._buffer is None:
            raise ValueError("to_bytes() is only available for in-memory packers")
        return self._buffer.getvalue()


class MessageUnpacker:
    """Reads MessagePack primitives from bytes or a binary stream.

    Data is buffered internally so the format of the next value can be
    inspected with ``next_format()`` before it is consumed. Every read past the
    end of the data raises ``DecodeError``.

    Example:
        >>> unpacker = MessageUnpacker(b"\\x92\\x01\\xa3two")
        >>> unpacker.next_format()
        <MessageFormat.FIXARRAY: ('fixarray', <WireType.ARRAY: 'array'>)>
        >>> unpacker.unpack_array_header()
        2
    """

    def __init__(self, source: Source, read_size: int = 64 * 1024) -> None:
        """Initialize an unpacker.

        Args:
            source: Encoded bytes, or a binary file-like object with read()
            read_size: Number of bytes requested from a stream per read
        """
        if read_size <= 0:
            raise ValueError(f"read_size must be > 0, got {read_size}")
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._buffer = bytearray(source)
            self._stream: Optional[BinaryIO] = None
        else:
            self._buffer = bytearray()
            self._stream = source
        self._read_size = read_size
        self._position = 0
        self._discarded = 0

    def bytes_read(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._discarded + self._position

    def _available(self) -> int:
        return len(self._buffer) - self._position

    def _fill(self, count: int) -> bool:
        """Make at least ``count`` unread bytes available.

        The stream is read in chunks of at most ``read_size`` bytes until enough
        data arrives or the stream is exhausted.
        """
        while self._available() < count and self._stream is not None:
            chunk = self._stream.read(self._read_size)
            if not chunk:
                break
            if self._position:
                del self._buffer[: self._position]
                self._discarded += self._position
                self._position = 0
            self._buffer += chunk
        return self._available() >= count

    def _read(self, count: int) -> bytes:
        if not self._fill(count):
            raise DecodeError(
                f"Truncated data at offset {self.bytes_read()}: "
                f"need {count} bytes, have {self._available()}"
            )
        start = self._position
        self._position += count
        return bytes(self._buffer[start : self._position])

    def _read_struct(self, layout: struct.Struct) -> int | float:
        (value,) = layout.unpack(self._read(layout.size))
        return value

    def _lead(self, expected: str, *formats: MessageFormat) -> int:
        """Consume the lead byte if it belongs to one of ``formats``."""
        fmt = self.next_format()
        if fmt not in formats:
            raise DecodeError(
                f"Expected {expected} at offset {self.bytes_read()}, got {fmt.label} "
                f"(0x{self._buffer[self._position]:02x})"
            )
        lead = self._buffer[self._position]
        self._position += 1
        return lead

    def has_next(self) -> bool:
        """Return True if at least one more byte is available."""
        return self._fill(1)

    def next_format(self) -> MessageFormat:
        """Peek the format of the next value without consuming it.

        Raises:
            DecodeError: If no more data is available
        """
        if not self._fill(1):
            raise DecodeError(f"Truncated data at offset {self.bytes_read()}: expected another value")
        return MessageFormat.from_byte(self._buffer[self._position])

    def unpack_nil(self) -> None:
        self._lead("nil", MessageFormat.NIL)

    def unpack_boolean(self) -> bool:
        return self._lead("boolean", MessageFormat.BOOLEAN) == 0xC3

    def _unpack_integer(self) -> int:
        lead = self._lead(
            "integer",
            MessageFormat.POSFIXINT,
            MessageFormat.NEGFIXINT,
            MessageFormat.UINT8,
            MessageFormat.UINT16,
            MessageFormat.UINT32,
            MessageFormat.UINT64,
            MessageFormat.INT8,
            MessageFormat.INT16,
            MessageFormat.INT32,
            MessageFormat.INT64,
        )
        if lead <= 0x7F:
            return lead
        if lead >= 0xE0:
            return lead - 0x100
        return int(self._read_struct(_INT_LAYOUTS[lead]))

    def unpack_int64(self) -> int:
        """Read an integer that must fit in a signed 64-bit integer.

        Raises:
            DecodeError: If the value is an unsigned 64-bit integer above the signed range
        """
        value = self._unpack_integer()
        if value > INT64_MAX:
            raise DecodeError(f"Integer {value} overflows a signed 64-bit integer")
        return value

    def unpack_big_int(self) -> int:
        """Read an integer of any MessagePack width."""
        return self._unpack_integer()

    def unpack_double(self) -> float:
        """Read a float; 32-bit floats are widened to 64 bits."""
        lead = self._lead("float", MessageFormat.FLOAT32, MessageFormat.FLOAT64)
        return float(self._read_struct(_F32 if lead == 0xCA else _F64))

    def _string_length(self) -> int:
        lead = self._lead(
            "string",
            MessageFormat.FIXSTR,
            MessageFormat.STR8,
            MessageFormat.STR16,
            MessageFormat.STR32,
            MessageFormat.BIN8,
            MessageFormat.BIN16,
            MessageFormat.BIN32,
        )
        if lead <= 0xBF:
            return lead & 0x1F
        if lead in (0xD9, 0xC4):
            return int(self._read_struct(_U8))
        if lead in (0xDA, 0xC5):
            return int(self._read_struct(_U16))
        return int(self._read_struct(_U32))

    def unpack_string(self) -> str:
        """Read a UTF-8 string (raw binary payloads are accepted as well).

        Raises:
            DecodeError: If the payload is not valid UTF-8
        """
        length = self._string_length()
        raw = self._read(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in string at offset {self.bytes_read() - length}: {e}") from e

    def unpack_binary_header(self) -> int:
        lead = self._lead("binary", MessageFormat.BIN8, MessageFormat.BIN16, MessageFormat.BIN32)
        if lead == 0xC4:
            return int(self._read_struct(_U8))
        if lead == 0xC5:
            return int(self._read_struct(_U16))
        return int(self._read_struct(_U32))

    def read_payload(self, length: int) -> bytes:
        return self._read(length)

    def unpack_array_header(self) -> int:
        lead = self._lead("array", MessageFormat.FIXARRAY, MessageFormat.ARRAY16, MessageFormat.ARRAY32)
        if lead <= 0x9F:
            return lead & 0x0F
        if lead == 0xDC:
            return int(self._read_struct(_U16))
        return int(self._read_struct(_U32))

    def unpack_map_header(self) -> int:
        lead = self._lead("map", MessageFormat.FIXMAP, MessageFormat.MAP16, MessageFormat.MAP32)
        if lead <= 0x8F:
            return lead & 0x0F
        if lead == 0xDE:
            return int(self._read_struct(_U16))
        return int(self._read_struct(_U32))
