"""Enum TypeSpec."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.enums import SpecType
from .options import SerializationOptions, fail_deserialize_type_check, fail_serialize_type_check
from .property_path import PropertyPath
from .type_spec import TypeSpec


@dataclass(frozen=True, repr=False)
class EnumTypeSpec(TypeSpec):
    """A value restricted to a fixed set.

    String values match case-insensitively and come back with the declared
    spelling. Python ``Enum`` members are matched by their ``.value``.
    """

    type_name: str
    allowed_values: tuple[Any, ...]
    spec_type = SpecType.ENUM

    @property
    def expected(self) -> str:
        values = ", ".join(f'"{v}"' for v in self.allowed_values)
        return f"one of the enum values {values}"

    def _match(self, value: Any) -> tuple[bool, Any]:
        if isinstance(value, Enum):
            value = value.value
        for allowed in self.allowed_values:
            if isinstance(allowed, str) and isinstance(value, str):
                if allowed.lower() == value.lower():
                    return True, allowed
            elif type(allowed) is type(value) and allowed == value:
                return True, allowed
        return False, value

    def serialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        found, result = self._match(value)
        if not found:
            fail_serialize_type_check(options, path, value, self.expected)
            return value
        return result

    def deserialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        found, result = self._match(value)
        if not found:
            fail_deserialize_type_check(options, path, value, self.expected)
            return value
        return result


def enum_spec(type_name: str, allowed_values: Any) -> EnumTypeSpec:
    """Spec for ``type_name`` limited to ``allowed_values``.

    ``allowed_values`` may be any iterable of values or a Python ``Enum``
    class, in which case its members' values are used.
    """
    if isinstance(allowed_values, type) and issubclass(allowed_values, Enum):
        values = tuple(member.value for member in allowed_values)
    else:
        values = tuple(allowed_values)
    return EnumTypeSpec(type_name, values)
