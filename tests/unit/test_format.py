"""Unit tests for value and format classification."""

from __future__ import annotations

from decimal import Decimal

import pytest

from msgpack_json import FALSE, NULL, TRUE, DecodeError, EncodeError, JsonNumber, JsonString, from_python
from msgpack_json.codec.format import Kind, MessageFormat, WireType, classify


class TestClassify:
    """Test classification of JSON values."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (NULL, Kind.NULL),
            (TRUE, Kind.BOOLEAN),
            (FALSE, Kind.BOOLEAN),
            (JsonNumber(1), Kind.INTEGER),
            (JsonNumber(2**70), Kind.INTEGER),
            (JsonNumber(Decimal("5")), Kind.INTEGER),
            (JsonNumber(1.0), Kind.FLOAT),
            (JsonNumber(Decimal("0.5")), Kind.FLOAT),
            (JsonString("s"), Kind.STRING),
            (from_python([1]), Kind.ARRAY),
            (from_python({"a": 1}), Kind.OBJECT),
        ],
    )
    def test_kinds(self, value: object, kind: Kind) -> None:
        """Test each value kind."""
        assert classify(value) is kind  # type: ignore[arg-type]

    def test_not_a_value(self) -> None:
        """Test plain objects are rejected."""
        with pytest.raises(EncodeError, match="not a JSON value"):
            classify("plain str")  # type: ignore[arg-type]


class TestMessageFormat:
    """Test lead byte classification."""

    @pytest.mark.parametrize(
        ("lead", "fmt", "wire_type"),
        [
            (0x00, MessageFormat.POSFIXINT, WireType.INTEGER),
            (0x7F, MessageFormat.POSFIXINT, WireType.INTEGER),
            (0x80, MessageFormat.FIXMAP, WireType.MAP),
            (0x90, MessageFormat.FIXARRAY, WireType.ARRAY),
            (0xA0, MessageFormat.FIXSTR, WireType.STRING),
            (0xC0, MessageFormat.NIL, WireType.NIL),
            (0xC3, MessageFormat.BOOLEAN, WireType.BOOLEAN),
            (0xC4, MessageFormat.BIN8, WireType.BINARY),
            (0xC7, MessageFormat.EXT8, WireType.EXTENSION),
            (0xCB, MessageFormat.FLOAT64, WireType.FLOAT),
            (0xCF, MessageFormat.UINT64, WireType.INTEGER),
            (0xD3, MessageFormat.INT64, WireType.INTEGER),
            (0xD4, MessageFormat.FIXEXT1, WireType.EXTENSION),
            (0xDB, MessageFormat.STR32, WireType.STRING),
            (0xDF, MessageFormat.MAP32, WireType.MAP),
            (0xE0, MessageFormat.NEGFIXINT, WireType.INTEGER),
            (0xFF, MessageFormat.NEGFIXINT, WireType.INTEGER),
        ],
    )
    def test_from_byte(self, lead: int, fmt: MessageFormat, wire_type: WireType) -> None:
        """Test format families and their wire types."""
        assert MessageFormat.from_byte(lead) is fmt
        assert fmt.wire_type is wire_type

    def test_never_used_byte(self) -> None:
        """Test the reserved 0xc1 byte."""
        fmt = MessageFormat.from_byte(0xC1)

        assert fmt is MessageFormat.NEVER_USED
        with pytest.raises(DecodeError, match="0xc1"):
            fmt.wire_type

    def test_every_byte_classified(self) -> None:
        """Test all 256 lead bytes map to a format."""
        assert all(isinstance(MessageFormat.from_byte(b), MessageFormat) for b in range(256))
