"""Decode-side caches for shared immutable values.

Two scalar kinds can be returned as shared instances instead of fresh
allocations:

- ``SmallIntCache``: integers in [-128, 127], populated lazily on first use
- ``StringCache``: a fixed set of string literals chosen by the caller

Both only ever hand out immutable values, so sharing them is safe.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Optional

from ..values import JsonNumber, JsonString

SMALL_INT_MIN = -128
SMALL_INT_MAX = 127
SMALL_INT_SLOTS = SMALL_INT_MAX - SMALL_INT_MIN + 1


class SmallIntCache:
    """Lazily filled table of shared ``JsonNumber`` instances for [-128, 127].

    The slot for value ``n`` is ``n + 128``. Slots are filled on the first
    lookup of their value and never evicted.

    The table is not locked. Two threads missing the same slot at once both
    build an equal ``JsonNumber`` and the last write wins; callers only rely on
    equality across calls, so the race is harmless.

    Example:
        >>> cache = SmallIntCache()
        >>> cache.number(5) is cache.number(5)
        True
        >>> cache.number(5000) is cache.number(5000)
        False
    """

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: list[Optional[JsonNumber]] = [None] * SMALL_INT_SLOTS

    def number(self, value: int) -> JsonNumber:
        """Return a ``JsonNumber`` for value, shared when value is in [-128, 127]."""
        if SMALL_INT_MIN <= value <= SMALL_INT_MAX:
            index = value + 128
            cached = self._slots[index]
            if cached is None:
                cached = JsonNumber(value)
                self._slots[index] = cached
            return cached
        return JsonNumber(value)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        if not SMALL_INT_MIN <= value <= SMALL_INT_MAX:
            return False
        return self._slots[value + 128] is not None

    def __len__(self) -> int:
        """Number of populated slots."""
        return sum(1 for slot in self._slots if slot is not None)

    def clear(self) -> None:
        self._slots = [None] * SMALL_INT_SLOTS


DEFAULT_INT_CACHE = SmallIntCache()


class StringCache:
    """Read-only mapping from configured literals to shared ``JsonString`` instances.

    Example:
        >>> cache = StringCache({"hello", "world"})
        >>> cache.get("hello") is cache.get("hello")
        True
        >>> cache.get("other") is None
        True
    """

    __slots__ = ("_entries",)

    def __init__(self, strings: Iterable[str]) -> None:
        entries: dict[str, JsonString] = {}
        for text in strings:
            if not isinstance(text, str):
                raise ValueError(f"Cached strings must be str, got {type(text).__name__}: {text!r}")
            entries[text] = JsonString(text)
        self._entries = MappingProxyType(entries)

    def get(self, text: str) -> Optional[JsonString]:
        return self._entries.get(text)

    def __contains__(self, text: object) -> bool:
        return text in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
