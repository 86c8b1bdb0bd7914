"""MsgpackJson: the configured codec instance.

This module ties the encoder, decoder and caches together behind one object
built from a CodecConfig, and adds byte-level conveniences on top of the
packer/unpacker API.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..exceptions import DecodeError, EncodeError
from ..values import JsonValue, from_python
from .cache import SmallIntCache, StringCache
from .config import CodecConfig
from .decoder import Decoder
from .encoder import encode_value, encode_values
from .stream import MessagePacker, MessageUnpacker, Source


class MsgpackJson:
    """Encodes JSON value trees to MessagePack and decodes them back.

    Instances are independent of each other except for the small-integer
    cache, which is process-wide unless the configuration supplies its own.
    The string cache is built once here and never changes afterwards.

    Examples:
        ```python
        from msgpack_json import MessagePacker, MessageUnpacker, MsgpackJson, loads

        codec = MsgpackJson.builder().cached_strings({"hello", "world"}).build()

        packer = MessagePacker()
        codec.encode(packer, loads('{"greeting": "hello", "n": [1, 2, 3]}'))
        data = packer.to_bytes()

        value = codec.decode(MessageUnpacker(data))

        # Or with bytes directly
        value = codec.unpackb(codec.packb({"greeting": "hello"}))
        ```
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        """Initialize a codec.

        Args:
            config: Codec configuration (default: no string cache, shared
                integer cache, unbounded nesting)
        """
        self.config = config if config is not None else CodecConfig()
        string_cache = StringCache(self.config.cached_strings) if self.config.cached_strings else None
        self._decoder = Decoder(
            self.config.resolved_int_cache,
            string_cache=string_cache,
            max_depth=self.config.max_depth,
        )

    @staticmethod
    def builder() -> MsgpackJsonBuilder:
        return MsgpackJsonBuilder()

    def encode(self, packer: MessagePacker, value: Any) -> None:
        """Encode one value tree.

        Args:
            packer: MessagePacker to write to
            value: JsonValue, or plain Python objects convertible with from_python()

        Raises:
            EncodeError: If the value cannot be represented in MessagePack
            OSError: If the packer's sink fails
        """
        encode_value(packer, _as_value(value), self.config.max_depth)

    def encode_list(self, packer: MessagePacker, values: Iterable[Any]) -> None:
        """Encode a sequence of value trees back-to-back with no envelope."""
        encode_values(packer, (_as_value(value) for value in values), self.config.max_depth)

    def decode(self, unpacker: MessageUnpacker) -> JsonValue:
        """Decode the next value tree.

        Raises:
            DecodeError: If the data is truncated or malformed
            UnsupportedFormatError: If an extension type is encountered
            OSError: If the unpacker's stream fails
        """
        return self._decoder.decode(unpacker)

    def decode_list(self, unpacker: MessageUnpacker) -> list[JsonValue]:
        """Decode value trees until the data is exhausted."""
        return self._decoder.decode_list(unpacker)

    def packb(self, value: Any) -> bytes:
        """Encode one value tree to bytes."""
        packer = MessagePacker()
        self.encode(packer, value)
        return packer.to_bytes()

    def packb_list(self, values: Iterable[Any]) -> bytes:
        packer = MessagePacker()
        self.encode_list(packer, values)
        return packer.to_bytes()

    def unpackb(self, data: Source) -> JsonValue:
        """Decode exactly one value tree.

        Raises:
            DecodeError: If data is malformed or holds bytes after the value
        """
        unpacker = MessageUnpacker(data)
        value = self._decoder.decode(unpacker)
        if unpacker.has_next():
            raise DecodeError(f"Trailing data after value at offset {unpacker.bytes_read()}")
        return value

    def unpackb_list(self, data: Source) -> list[JsonValue]:
        return self._decoder.decode_list(MessageUnpacker(data))


class MsgpackJsonBuilder:
    """One-shot builder for MsgpackJson instances.

    Example:
        >>> codec = MsgpackJson.builder().cached_strings({"OPEN", "CLOSED"}).max_depth(32).build()
    """

    def __init__(self) -> None:
        self._cached_strings: frozenset[str] = frozenset()
        self._int_cache: Optional[SmallIntCache] = None
        self._max_depth: Optional[int] = None

    def cached_strings(self, strings: Iterable[str]) -> MsgpackJsonBuilder:
        """Set the string literals decoded as shared instances."""
        if isinstance(strings, str):
            raise ValueError("cached_strings expects a collection of strings, not a single str")
        self._cached_strings = frozenset(strings)
        return self

    def int_cache(self, cache: SmallIntCache) -> MsgpackJsonBuilder:
        self._int_cache = cache
        return self

    def max_depth(self, depth: Optional[int]) -> MsgpackJsonBuilder:
        self._max_depth = depth
        return self

    def build(self) -> MsgpackJson:
        return MsgpackJson(
            CodecConfig(
                cached_strings=self._cached_strings,
                int_cache=self._int_cache,
                max_depth=self._max_depth,
            )
        )


def _as_value(value: Any) -> JsonValue:
    if isinstance(value, JsonValue):
        return value
    try:
        return from_python(value)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Cannot encode value: {e}") from e


_default_codec = MsgpackJson()


def packb(value: Any) -> bytes:
    """Encode one value tree to bytes with the default codec."""
    return _default_codec.packb(value)


def unpackb(data: Source) -> JsonValue:
    """Decode exactly one value tree with the default codec."""
    return _default_codec.unpackb(data)
