"""Precise unit tests for SequenceTypeSpec.

Tests focus on per-element paths, the failure policy and lazy resolution.
"""

from __future__ import annotations

from typing import Any

import pytest

from sdkgen.runtime import (
    CollectingWarningSink,
    FailurePolicy,
    PropertyPath,
    SerializationOptions,
    SpecType,
    TypeMismatchError,
    TypeSpec,
    TypeSpecRegistry,
    UnresolvedTypeSpecError,
    deserialize,
    number_spec,
    sequence_spec,
    serialize,
    string_spec,
)


class CountingSpec(TypeSpec):
    """Identity element spec that counts its calls."""

    spec_type = SpecType.OBJECT

    def __init__(self) -> None:
        self.calls = 0

    def serialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        self.calls += 1
        return value

    def deserialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        self.calls += 1
        return value


@pytest.fixture
def lenient():
    sink = CollectingWarningSink()
    return SerializationOptions(failure_policy=FailurePolicy.WARN, warning_sink=sink), sink


class TestSequenceConversion:
    """Test element-wise conversion."""

    def test_round_trip_preserves_order_and_length(self):
        """Test deserialize(serialize(v)) == v with an identity element spec."""
        spec = sequence_spec(CountingSpec())
        value = [3, "a", None, {"k": 1}, [1, 2]]

        wire = serialize(spec, value)
        assert wire == value
        assert deserialize(spec, wire) == value

    def test_serialize_returns_new_list(self):
        """Test output is a fresh list, not the input."""
        value = ["a", "b"]
        result = serialize(sequence_spec(string_spec), value)
        assert result == ["a", "b"]
        assert result is not value

    def test_tuple_accepted(self):
        """Test tuples are treated as sequences and come back as lists."""
        assert serialize(sequence_spec(number_spec), (1, 2.5)) == [1, 2.5]

    def test_nested_sequences(self):
        """Test a sequence of sequences converts recursively."""
        spec = sequence_spec(sequence_spec(number_spec))
        assert deserialize(spec, [[1], [], [2, 3]]) == [[1], [], [2, 3]]

    @pytest.mark.parametrize("direction", ["serialize", "deserialize"])
    def test_empty_sequence_never_invokes_element_spec(self, direction):
        """Test an empty sequence yields [] without touching the element spec."""
        element = CountingSpec()
        convert = serialize if direction == "serialize" else deserialize

        assert convert(sequence_spec(element), []) == []
        assert element.calls == 0

    def test_empty_sequence_never_resolves_named_element_spec(self):
        """Test an unregistered element name is not looked up for empty input."""
        assert serialize(sequence_spec("Missing"), []) == []

    def test_element_spec_called_once_per_element(self):
        """Test each element is converted exactly once."""
        element = CountingSpec()
        serialize(sequence_spec(element), [1, 2, 3])
        assert element.calls == 3


class TestSequenceTypeChecks:
    """Test the failure policy for non-sequence input."""

    @pytest.mark.parametrize("value", [{"a": 1}, "abc", 42, None, b"xy"])
    def test_strict_rejects_non_sequence(self, value):
        """Test strict mode raises at the input path with 'Array' expected."""
        path = PropertyPath(["items"])
        with pytest.raises(TypeMismatchError) as exc_info:
            serialize(sequence_spec(string_spec), value, path=path)

        error = exc_info.value
        assert error.path == path
        assert "Array" in error.expected
        assert error.actual == value
        assert error.code == "PARSE_ERROR"
        assert "$.items" in str(error)

    def test_strict_rejects_non_sequence_on_deserialize(self):
        """Test deserialize applies the same shape check."""
        with pytest.raises(TypeMismatchError, match="an Array"):
            deserialize(sequence_spec(string_spec), {"not": "a list"})

    @pytest.mark.parametrize("convert", [serialize, deserialize])
    @pytest.mark.parametrize("value", [{"a": 1}, "abc", 42, None])
    def test_lenient_passes_value_through(self, lenient, convert, value):
        """Test warn mode returns the value unchanged and records a warning."""
        options, sink = lenient
        assert convert(sequence_spec(string_spec), value, options) is value
        assert len(sink) == 1
        assert sink.warnings[0].expected == "an Array"
        assert sink.warnings[0].direction == convert.__name__

    def test_element_failure_reports_element_path(self):
        """Test a bad element fails at $[1], not at $."""
        with pytest.raises(TypeMismatchError) as exc_info:
            serialize(sequence_spec(string_spec), ["ok", 123])

        assert str(exc_info.value.path) == "$[1]"
        assert exc_info.value.path.segments == (1,)

    def test_element_failure_path_under_parent(self):
        """Test element paths extend the parent path."""
        with pytest.raises(TypeMismatchError) as exc_info:
            deserialize(sequence_spec(number_spec), [1, "two"], path=PropertyPath(["values"]))

        assert str(exc_info.value.path) == "$.values[1]"

    def test_lenient_element_failure_keeps_other_elements(self, lenient):
        """Test warn mode converts the good elements and passes the bad one through."""
        options, sink = lenient
        result = serialize(sequence_spec(string_spec), ["ok", 123, "fine"], options)

        assert result == ["ok", 123, "fine"]
        assert [str(w.path) for w in sink.warnings] == ["$[1]"]


class TestSequenceResolution:
    """Test named element specs."""

    def test_named_element_spec_resolved_through_registry(self):
        """Test an element spec given by name is looked up at traversal time."""
        registry = TypeSpecRegistry()
        spec = sequence_spec("Name")
        # Registered after the sequence spec was built
        registry.register("Name", string_spec)

        options = SerializationOptions(registry=registry)
        assert serialize(spec, ["a", "b"], options) == ["a", "b"]

    def test_unresolved_name_raises_even_in_warn_mode(self, lenient):
        """Test a missing registry entry is always fatal."""
        options, sink = lenient
        with pytest.raises(UnresolvedTypeSpecError) as exc_info:
            serialize(sequence_spec("Missing"), ["a"], options)

        assert exc_info.value.name == "Missing"
        assert exc_info.value.code == "PARSE_ERROR"
        assert len(sink) == 0
