"""Utility functions for msgpack_json.

This module provides size calculation for encoded value trees.
"""

from __future__ import annotations

from .sizing import SizeReport, encoded_size, json_size, size_report

__all__ = [
    "SizeReport",
    "encoded_size",
    "json_size",
    "size_report",
]
