"""Exception hierarchy for msgpack_json.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from MsgpackJsonError for easy catching of any
msgpack_json-specific error.
"""

from __future__ import annotations


class MsgpackJsonError(Exception):
    """Base exception for all msgpack_json errors."""

    pass


class EncodeError(MsgpackJsonError):
    """Raised when encoding a value tree fails.

    Examples:
        - Object that is not a JSON value
        - Integer outside the MessagePack integer range
        - String that cannot be encoded as UTF-8 (lone surrogates)
        - Container with more than 2**32 - 1 entries
    """

    pass


class DecodeError(MsgpackJsonError):
    """Raised when decoding MessagePack data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Invalid format byte (0xc1)
        - Map key that is not a string
        - Invalid UTF-8 in a string payload
        - Trailing bytes after a single value
    """

    pass


class UnsupportedFormatError(DecodeError):
    """Raised when the stream holds a MessagePack extension type."""

    pass


class NestingDepthError(DecodeError, EncodeError):
    """Raised when a value tree is nested deeper than the configured max_depth."""

    pass
