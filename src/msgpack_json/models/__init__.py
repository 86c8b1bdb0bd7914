"""Pydantic integration for msgpack_json.

This module provides helpers to carry Pydantic models as MessagePack through
their JSON representation.
"""

from __future__ import annotations

from .convert import decode_model, encode_model

__all__ = [
    "encode_model",
    "decode_model",
]
