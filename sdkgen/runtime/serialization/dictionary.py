"""Dictionary TypeSpec."""

from __future__ import annotations

from collections.abc import Mapping
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
class DictionaryTypeSpec(TypeSpec):
    """A string-keyed mapping whose values all share one value spec."""

    value_spec: SpecRef
    spec_type = SpecType.DICTIONARY

    def serialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not _is_dictionary(value):
            fail_serialize_type_check(options, path, value, "a Dictionary")
            return value
        if not value:
            return {}

        value_spec = resolve_type_spec(options, path, self.value_spec)
        return {key: value_spec.serialize(path.concat(key), item, options) for key, item in value.items()}

    def deserialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not _is_dictionary(value):
            fail_deserialize_type_check(options, path, value, "a Dictionary")
            return value
        if not value:
            return {}

        value_spec = resolve_type_spec(options, path, self.value_spec)
        return {
            key: value_spec.deserialize(path.concat(key), item, options) for key, item in value.items()
        }


def _is_dictionary(value: Any) -> bool:
    return isinstance(value, Mapping) and all(isinstance(key, str) for key in value)


def dictionary_spec(value_spec: SpecRef) -> DictionaryTypeSpec:
    """Spec for a ``dict[str, value_spec]``."""
    return DictionaryTypeSpec(value_spec)
