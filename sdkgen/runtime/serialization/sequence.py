"""Sequence TypeSpec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import SpecType
from .options import (
    SerializationOptions,
    fail_deserialize_type_check,
    fail_serialize_type_check,
    resolve_type_spec,
)
from .property_path import PropertyPath
from .type_spec import SpecRef, TypeSpec


@dataclass(frozen=True, repr=False)
class SequenceTypeSpec(TypeSpec):
    """A homogeneous list whose elements all share one element spec.

    Attributes:
        element_spec: Spec for every element, inline or by registry name
    """

    element_spec: SpecRef
    spec_type = SpecType.SEQUENCE

    def serialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not _is_sequence(value):
            fail_serialize_type_check(options, path, value, "an Array")
            return value
        if not value:
            return []

        element_spec = resolve_type_spec(options, path, self.element_spec)
        return [
            element_spec.serialize(path.concat(i), element, options)
            for i, element in enumerate(value)
        ]

    def deserialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not _is_sequence(value):
            fail_deserialize_type_check(options, path, value, "an Array")
            return value
        if not value:
            return []

        element_spec = resolve_type_spec(options, path, self.element_spec)
        return [
            element_spec.deserialize(path.concat(i), element, options)
            for i, element in enumerate(value)
        ]


def _is_sequence(value: Any) -> bool:
    # str and bytes are sequences too, but never arrays on the wire
    return isinstance(value, (list, tuple))


def sequence_spec(element_spec: SpecRef) -> SequenceTypeSpec:
    """Spec for a list of ``element_spec`` values."""
    return SequenceTypeSpec(element_spec)
