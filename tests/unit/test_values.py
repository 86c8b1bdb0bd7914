"""Unit tests for the JSON value model."""

from __future__ import annotations

from decimal import Decimal

import pytest

from msgpack_json import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    FALSE,
    NULL,
    TRUE,
    JsonArray,
    JsonBool,
    JsonNumber,
    JsonObject,
    JsonString,
    ValueType,
    dumps,
    from_python,
    loads,
)


class TestScalars:
    """Test scalar values."""

    def test_singletons(self) -> None:
        """Test null and boolean singletons."""
        assert NULL.value_type is ValueType.NULL
        assert TRUE.value_type is ValueType.TRUE
        assert FALSE.value_type is ValueType.FALSE
        assert JsonBool.of(True) is TRUE
        assert JsonBool.of(False) is FALSE

    def test_number_integral(self) -> None:
        """Test integral detection."""
        assert JsonNumber(1).is_integral
        assert JsonNumber(Decimal("10")).is_integral
        assert JsonNumber(Decimal("1E+3")).is_integral
        assert not JsonNumber(1.0).is_integral
        assert not JsonNumber(Decimal("1.0")).is_integral
        assert not JsonNumber(Decimal("NaN")).is_integral

    def test_number_exact_accessors(self) -> None:
        """Test exact narrowing accessors."""
        assert JsonNumber(2**31 - 1).int32_value_exact() == 2**31 - 1
        assert JsonNumber(2**63 - 1).int64_value_exact() == 2**63 - 1

        with pytest.raises(OverflowError):
            JsonNumber(2**31).int32_value_exact()

        with pytest.raises(OverflowError):
            JsonNumber(2**63).int64_value_exact()

        with pytest.raises(ArithmeticError, match="not an integral"):
            JsonNumber(1.5).int64_value_exact()

    def test_number_conversions(self) -> None:
        """Test truncating and widening accessors."""
        assert JsonNumber(2**64).big_int_value() == 2**64
        assert JsonNumber(3.9).int_value() == 3
        assert JsonNumber(7).float_value() == 7.0

    def test_number_rejects_bool(self) -> None:
        """Test that booleans are not numbers."""
        with pytest.raises(TypeError):
            JsonNumber(True)  # type: ignore[arg-type]

    def test_number_rejects_signaling_nan(self) -> None:
        """Test signaling NaN has no numeric value to hold."""
        with pytest.raises(ValueError, match="signaling NaN"):
            JsonNumber(Decimal("sNaN"))

    def test_number_equality(self) -> None:
        """Test numeric equality and hashing."""
        assert JsonNumber(5) == JsonNumber(5)
        assert JsonNumber(5) != JsonNumber(6)
        assert hash(JsonNumber(5)) == hash(JsonNumber(5))

    def test_string(self) -> None:
        """Test string values."""
        value = JsonString("hello")
        assert value.value == "hello"
        assert str(value) == "hello"
        assert value == JsonString("hello")
        assert value != JsonString("other")

        with pytest.raises(TypeError):
            JsonString(b"bytes")  # type: ignore[arg-type]


class TestContainers:
    """Test array and object values."""

    def test_array_sequence(self) -> None:
        """Test array sequence behavior."""
        array = JsonArray([JsonNumber(1), JsonString("a"), NULL])
        assert len(array) == 3
        assert array[1] == JsonString("a")
        assert list(array) == [JsonNumber(1), JsonString("a"), NULL]
        assert array[:2] == JsonArray([JsonNumber(1), JsonString("a")])
        assert array.value_type is ValueType.ARRAY

    def test_array_rejects_plain_objects(self) -> None:
        """Test that array items must be values."""
        with pytest.raises(TypeError):
            JsonArray([1, 2])  # type: ignore[list-item]

    def test_object_preserves_order(self) -> None:
        """Test object key order."""
        obj = JsonObject([("b", JsonNumber(1)), ("a", JsonNumber(2)), ("c", NULL)])
        assert list(obj) == ["b", "a", "c"]
        assert obj["a"] == JsonNumber(2)
        assert obj.value_type is ValueType.OBJECT

    def test_object_rejects_non_string_keys(self) -> None:
        """Test that object keys must be strings."""
        with pytest.raises(TypeError, match="keys must be str"):
            JsonObject([(1, NULL)])  # type: ignore[list-item]

    def test_immutable(self) -> None:
        """Test that containers reject attribute assignment."""
        array = JsonArray([NULL])
        obj = JsonObject({"a": NULL})

        with pytest.raises(AttributeError):
            array._items = ()  # type: ignore[misc]

        with pytest.raises(AttributeError):
            obj._members = {}  # type: ignore[misc]

        with pytest.raises(TypeError):
            obj["b"] = NULL  # type: ignore[index]

    def test_container_equality(self) -> None:
        """Test structural equality."""
        assert JsonObject({"a": TRUE, "b": FALSE}) == JsonObject({"b": FALSE, "a": TRUE})
        assert JsonArray([TRUE, FALSE]) != JsonArray([FALSE, TRUE])
        assert EMPTY_ARRAY == JsonArray()
        assert EMPTY_OBJECT == JsonObject()


class TestBuilders:
    """Test conversions from Python objects and JSON text."""

    def test_from_python(self) -> None:
        """Test building a tree from plain objects."""
        value = from_python({"a": [1, 2.5, None, True], "b": "x"})

        assert isinstance(value, JsonObject)
        assert value["a"] == JsonArray([JsonNumber(1), JsonNumber(2.5), NULL, TRUE])
        assert value["b"] == JsonString("x")
        assert value["a"][3] is TRUE

    def test_from_python_empty_containers(self) -> None:
        """Test that empty containers map to the shared empties."""
        assert from_python([]) is EMPTY_ARRAY
        assert from_python({}) is EMPTY_OBJECT

    def test_from_python_passthrough(self) -> None:
        """Test that values are passed through unchanged."""
        value = JsonString("kept")
        assert from_python(value) is value
        assert from_python([value])[0] is value

    def test_from_python_errors(self) -> None:
        """Test unsupported objects."""
        with pytest.raises(TypeError, match="no JSON equivalent"):
            from_python({"a": object()})

        with pytest.raises(TypeError, match="keys must be str"):
            from_python({1: "a"})

    def test_loads_and_dumps(self) -> None:
        """Test JSON text round-trip."""
        text = '{"b":1,"a":[true,null,1.5,"x"],"big":18446744073709551616}'
        value = loads(text)

        assert value["big"] == JsonNumber(2**64)
        assert dumps(value) == text

    def test_dumps_indent_and_unicode(self) -> None:
        """Test pretty printing keeps non-ASCII characters."""
        assert dumps(loads('{"k":"Grüße"}'), indent=2) == '{\n  "k": "Grüße"\n}'

    def test_dumps_decimal(self) -> None:
        """Test Decimal numbers serialize as JSON numbers."""
        assert dumps(JsonArray([JsonNumber(Decimal("2")), JsonNumber(Decimal("0.5"))])) == "[2,0.5]"

    def test_to_python(self) -> None:
        """Test conversion back to plain objects."""
        original = {"a": [1, 2.5, None, True], "b": {"c": "d"}}
        assert from_python(original).to_python() == original
