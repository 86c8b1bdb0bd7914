"""Construction-time configuration for the MessagePack JSON codec."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .cache import DEFAULT_INT_CACHE, SmallIntCache


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for a ``MsgpackJson`` codec instance.

    The configuration is fixed once the codec is built; nothing here changes
    while values are being encoded or decoded.

    Attributes:
        cached_strings: String literals decoded as shared instances (default:
            none, every decoded string is a fresh value). Useful when a
            document repeats a small set of tags, such as enum names.

        int_cache: Small-integer cache used while decoding. None (the default)
            shares the process-wide ``DEFAULT_INT_CACHE`` with every other
            codec; pass ``SmallIntCache()`` to give a codec its own table.

        max_depth: Maximum number of nested container levels accepted by
            encode and decode (default None, only bounded by the interpreter's
            recursion limit). ``[1, 2]`` needs 1 level, ``[[1], 2]`` needs 2;
            scalars need none.

    Examples:
        ```python
        from msgpack_json import CodecConfig, MsgpackJson, SmallIntCache

        # Shared literal instances for enum-like strings
        config = CodecConfig(cached_strings=frozenset({"OPEN", "CLOSED"}))

        # Isolated integer cache and a bound on untrusted input nesting
        config = CodecConfig(int_cache=SmallIntCache(), max_depth=64)

        codec = MsgpackJson(config)
        ```
    """

    cached_strings: frozenset[str] = field(default_factory=frozenset)
    int_cache: Optional[SmallIntCache] = None
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.cached_strings, frozenset):
            object.__setattr__(self, "cached_strings", frozenset(_check_strings(self.cached_strings)))
        else:
            _check_strings(self.cached_strings)

        if self.int_cache is not None and not isinstance(self.int_cache, SmallIntCache):
            raise ValueError(f"int_cache must be a SmallIntCache, got {type(self.int_cache).__name__}")

        if self.max_depth is not None and self.max_depth <= 0:
            raise ValueError(f"max_depth must be > 0, got {self.max_depth}")

    @property
    def resolved_int_cache(self) -> SmallIntCache:
        return self.int_cache if self.int_cache is not None else DEFAULT_INT_CACHE


def _check_strings(strings: Iterable[object]) -> Iterable[str]:
    if isinstance(strings, str):
        raise ValueError("cached_strings must be a collection of strings, not a single str")
    checked = list(strings)
    for text in checked:
        if not isinstance(text, str):
            raise ValueError(f"cached_strings entries must be str, got {type(text).__name__}: {text!r}")
    return checked  # type: ignore[return-value]
