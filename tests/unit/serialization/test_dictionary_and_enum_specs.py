"""Unit tests for DictionaryTypeSpec and EnumTypeSpec."""

from __future__ import annotations

from enum import Enum

import pytest

from sdkgen.runtime import (
    CollectingWarningSink,
    FailurePolicy,
    SerializationOptions,
    TypeMismatchError,
    deserialize,
    dictionary_spec,
    enum_spec,
    number_spec,
    serialize,
)


class Color(str, Enum):
    RED = "Red"
    GREEN = "Green"


class TestDictionarySpec:
    """Test dictionary conversion."""

    def test_values_converted_with_key_paths(self):
        """Test each value is converted and a bad one is reported by key."""
        spec = dictionary_spec(number_spec)
        assert serialize(spec, {"a": 1, "b": 2.5}) == {"a": 1, "b": 2.5}

        with pytest.raises(TypeMismatchError) as exc_info:
            deserialize(spec, {"a": 1, "b": "x"})
        assert str(exc_info.value.path) == "$.b"

    def test_empty_mapping(self):
        """Test an empty mapping never resolves the value spec."""
        assert serialize(dictionary_spec("Missing"), {}) == {}

    @pytest.mark.parametrize("value", [[1, 2], "abc", {1: "int key"}])
    def test_non_dictionary_rejected(self, value):
        """Test lists, strings and non-string keys fail."""
        with pytest.raises(TypeMismatchError, match="a Dictionary"):
            serialize(dictionary_spec(number_spec), value)


class TestEnumSpec:
    """Test enum matching."""

    def test_case_insensitive_match_returns_declared_spelling(self):
        """Test strings match regardless of case."""
        spec = enum_spec("Color", ["Red", "Green"])
        assert deserialize(spec, "red") == "Red"
        assert serialize(spec, "GREEN") == "Green"

    def test_python_enum_class_and_members(self):
        """Test an Enum class supplies the values and members serialize to them."""
        spec = enum_spec("Color", Color)
        assert spec.allowed_values == ("Red", "Green")
        assert serialize(spec, Color.RED) == "Red"

    def test_unknown_value_rejected(self):
        """Test values outside the set fail with the allowed values listed."""
        spec = enum_spec("Color", ["Red", "Green"])
        with pytest.raises(TypeMismatchError) as exc_info:
            serialize(spec, "Blue")
        assert exc_info.value.expected == 'one of the enum values "Red", "Green"'

    def test_numeric_values_compared_by_type(self):
        """Test numeric enums do not match strings."""
        spec = enum_spec("Level", [1, 2])
        assert deserialize(spec, 2) == 2
        with pytest.raises(TypeMismatchError):
            deserialize(spec, "2")

    def test_lenient_unknown_value(self):
        """Test warn mode passes an unknown value through."""
        sink = CollectingWarningSink()
        options = SerializationOptions(failure_policy=FailurePolicy.WARN, warning_sink=sink)
        assert deserialize(enum_spec("Color", ["Red"]), "Blue", options) == "Blue"
        assert sink.warnings[0].direction == "deserialize"
