"""MessagePack codec for JSON value trees.

This module provides the recursive encoder/decoder, the MessagePack primitive
reader and writer they use, and the decode-side caches.
"""

from __future__ import annotations

from .cache import DEFAULT_INT_CACHE, SmallIntCache, StringCache
from .config import CodecConfig
from .decoder import Decoder
from .encoder import encode_value, encode_values
from .format import Kind, MessageFormat, WireType, classify
from .msgpack_json import MsgpackJson, MsgpackJsonBuilder, packb, unpackb
from .stream import MessagePacker, MessageUnpacker

__all__ = [
    "MsgpackJson",
    "MsgpackJsonBuilder",
    "CodecConfig",
    "packb",
    "unpackb",
    # Recursive codec
    "encode_value",
    "encode_values",
    "Decoder",
    # Primitives
    "MessagePacker",
    "MessageUnpacker",
    # Classification
    "Kind",
    "MessageFormat",
    "WireType",
    "classify",
    # Caches
    "SmallIntCache",
    "StringCache",
    "DEFAULT_INT_CACHE",
]
