"""Immutable JSON value tree.

This module provides the JSON value model exchanged with callers of the codec.
Every value is immutable once built: scalars are frozen dataclasses and the
containers wrap a tuple (arrays) or a private dict (objects) behind read-only
collection interfaces.

Example:
    >>> obj = JsonObject({"id": JsonNumber(7), "tags": JsonArray([JsonString("a")])})
    >>> obj["id"].int64_value_exact()
    7
    >>> obj.value_type is ValueType.OBJECT
    True
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union, overload

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class ValueType(enum.Enum):
    """Structural type tag of a JSON value."""

    NULL = "null"
    TRUE = "true"
    FALSE = "false"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class JsonValue:
    """Base class for all JSON values."""

    __slots__ = ()

    @property
    def value_type(self) -> ValueType:
        raise NotImplementedError

    def to_python(self) -> Any:
        """Convert this value to plain Python objects (None, bool, numbers, str, list, dict)."""
        raise NotImplementedError


@dataclass(frozen=True, repr=False)
class JsonNull(JsonValue):
    """The JSON ``null`` value. Use the ``NULL`` singleton."""

    @property
    def value_type(self) -> ValueType:
        return ValueType.NULL

    def to_python(self) -> None:
        return None

    def __repr__(self) -> str:
        return "NULL"


@dataclass(frozen=True, repr=False)
class JsonBool(JsonValue):
    """A JSON boolean. Use the ``TRUE`` and ``FALSE`` singletons."""

    value: bool

    @staticmethod
    def of(flag: bool) -> JsonBool:
        return TRUE if flag else FALSE

    @property
    def value_type(self) -> ValueType:
        return ValueType.TRUE if self.value else ValueType.FALSE

    def to_python(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return "TRUE" if self.value else "FALSE"


@dataclass(frozen=True)
class JsonNumber(JsonValue):
    """A JSON number of arbitrary precision.

    Integral numbers are held as ``int`` (or as a ``Decimal`` with a
    non-negative exponent), floating numbers as ``float`` or ``Decimal``.

    Attributes:
        value: The numeric value
    """

    value: Union[int, float, Decimal]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float, Decimal)):
            raise TypeError(f"JsonNumber requires int, float or Decimal, got {type(self.value).__name__}")
        if isinstance(self.value, Decimal) and self.value.is_snan():
            raise ValueError("JsonNumber cannot hold a signaling NaN")

    @property
    def value_type(self) -> ValueType:
        return ValueType.NUMBER

    @property
    def is_integral(self) -> bool:
        """Whether the number has no fractional part by construction.

        A ``float`` is never integral, even when it holds a whole value such as
        ``1.0``; it was written as a floating-point number and stays one.
        """
        if isinstance(self.value, int):
            return True
        if isinstance(self.value, Decimal):
            return self.value.is_finite() and self.value.as_tuple().exponent >= 0
        return False

    def int_value(self) -> int:
        """Return the value truncated to an integer."""
        return int(self.value)

    def int32_value_exact(self) -> int:
        """Return the value as a signed 32-bit integer.

        Raises:
            ArithmeticError: If the number is not integral
            OverflowError: If the value does not fit in 32 bits
        """
        return self._exact(INT32_MIN, INT32_MAX, 32)

    def int64_value_exact(self) -> int:
        """Return the value as a signed 64-bit integer.

        Raises:
            ArithmeticError: If the number is not integral
            OverflowError: If the value does not fit in 64 bits
        """
        return self._exact(INT64_MIN, INT64_MAX, 64)

    def big_int_value(self) -> int:
        """Return the value as an arbitrary-precision integer (truncating)."""
        return int(self.value)

    def float_value(self) -> float:
        return float(self.value)

    def _exact(self, lower: int, upper: int, bits: int) -> int:
        if not self.is_integral:
            raise ArithmeticError(f"{self.value!r} is not an integral value")
        result = int(self.value)
        if result < lower or result > upper:
            raise OverflowError(f"{result} does not fit in a signed {bits}-bit integer")
        return result

    def to_python(self) -> Union[int, float, Decimal]:
        return self.value


@dataclass(frozen=True)
class JsonString(JsonValue):
    """A JSON string.

    Attributes:
        value: The string content
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"JsonString requires str, got {type(self.value).__name__}")

    @property
    def value_type(self) -> ValueType:
        return ValueType.STRING

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class JsonArray(JsonValue, Sequence[JsonValue]):
    """An immutable, ordered sequence of JSON values."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[JsonValue] = ()) -> None:
        values = tuple(items)
        for item in values:
            if not isinstance(item, JsonValue):
                raise TypeError(f"JsonArray items must be JsonValue, got {type(item).__name__}")
        object.__setattr__(self, "_items", values)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value_type(self) -> ValueType:
        return ValueType.ARRAY

    @overload
    def __getitem__(self, index: int) -> JsonValue: ...

    @overload
    def __getitem__(self, index: slice) -> JsonArray: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[JsonValue, JsonArray]:
        if isinstance(index, slice):
            return JsonArray(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonArray):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"JsonArray({list(self._items)!r})"

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self._items]


class JsonObject(JsonValue, Mapping[str, JsonValue]):
    """An immutable mapping from string keys to JSON values.

    Keys keep their insertion order, which is also the order in which the
    encoder writes them.
    """

    __slots__ = ("_members",)

    def __init__(self, members: Union[Mapping[str, JsonValue], Iterable[tuple[str, JsonValue]]] = ()) -> None:
        pairs = members.items() if isinstance(members, Mapping) else members
        built: dict[str, JsonValue] = {}
        for key, value in pairs:
            if not isinstance(key, str):
                raise TypeError(f"JsonObject keys must be str, got {type(key).__name__}")
            if not isinstance(value, JsonValue):
                raise TypeError(f"JsonObject values must be JsonValue, got {type(value).__name__}")
            built[key] = value
        object.__setattr__(self, "_members", built)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value_type(self) -> ValueType:
        return ValueType.OBJECT

    def __getitem__(self, key: str) -> JsonValue:
        return self._members[key]

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(frozenset(self._members.items()))

    def __repr__(self) -> str:
        return f"JsonObject({self._members!r})"

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self._members.items()}


NULL = JsonNull()
TRUE = JsonBool(True)
FALSE = JsonBool(False)
EMPTY_ARRAY = JsonArray()
EMPTY_OBJECT = JsonObject()
