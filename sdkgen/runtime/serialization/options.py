"""Serialization options and the shared type-check failure policy.

Every TypeSpec variant reports a mismatch through
``fail_serialize_type_check`` / ``fail_deserialize_type_check`` and only
supplies the expected-type description. Whether that raises or warns is
decided here, from ``SerializationOptions.failure_policy``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..core.enums import FailurePolicy
from ..core.exceptions import TypeMismatchError, UnresolvedTypeSpecError
from .property_path import PropertyPath
from .registry import TypeSpecRegistry

if TYPE_CHECKING:
    from .type_spec import SpecRef, TypeSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializationWarning:
    """A type mismatch that was downgraded to a warning."""

    direction: str  # "serialize" | "deserialize"
    path: PropertyPath
    expected: str
    actual: Any

    @property
    def message(self) -> str:
        return _mismatch_message(self.direction, self.path, self.expected, self.actual)


WarningSink = Callable[[SerializationWarning], None]


def log_warning(warning: SerializationWarning) -> None:
    """Default sink: emit the warning through ``logging``."""
    logger.warning(
        warning.message,
        extra={
            "direction": warning.direction,
            "property_path": str(warning.path),
            "expected": warning.expected,
        },
    )


class CollectingWarningSink:
    """Sink that keeps every warning it receives."""

    def __init__(self) -> None:
        self.warnings: list[SerializationWarning] = []

    def __call__(self, warning: SerializationWarning) -> None:
        self.warnings.append(warning)

    def __len__(self) -> int:
        return len(self.warnings)


@dataclass(frozen=True)
class SerializationOptions:
    """Configuration threaded through every (de)serialize call.

    Attributes:
        registry: Named TypeSpecs used to resolve string references
        failure_policy: Raise on type mismatch, or warn and pass the value through
        warning_sink: Receives warnings in ``FailurePolicy.WARN`` mode
        omit_none: Drop optional composite properties whose value is ``None``
    """

    registry: TypeSpecRegistry = field(default_factory=TypeSpecRegistry)
    failure_policy: FailurePolicy = FailurePolicy.THROW
    warning_sink: WarningSink = log_warning
    omit_none: bool = True

    @property
    def is_strict(self) -> bool:
        return self.failure_policy == FailurePolicy.THROW


def resolve_type_spec(
    options: SerializationOptions, path: PropertyPath, spec_or_name: SpecRef
) -> TypeSpec:
    """Return the inline spec, or look a named spec up in the registry.

    Raises:
        UnresolvedTypeSpecError: If the name is not registered. Raised in
            every failure policy.
    """
    if not isinstance(spec_or_name, str):
        return spec_or_name

    spec = options.registry.get(spec_or_name)
    if spec is None:
        raise UnresolvedTypeSpecError(spec_or_name, path)
    return spec


def fail_serialize_type_check(
    options: SerializationOptions, path: PropertyPath, value: Any, expected: str
) -> None:
    _fail_type_check("serialize", options, path, value, expected)


def fail_deserialize_type_check(
    options: SerializationOptions, path: PropertyPath, value: Any, expected: str
) -> None:
    _fail_type_check("deserialize", options, path, value, expected)


def _fail_type_check(
    direction: str,
    options: SerializationOptions,
    path: PropertyPath,
    value: Any,
    expected: str,
) -> None:
    if options.is_strict:
        raise TypeMismatchError(
            _mismatch_message(direction, path, expected, value), path, expected, value
        )
    options.warning_sink(SerializationWarning(direction, path, expected, value))


def _mismatch_message(direction: str, path: PropertyPath, expected: str, actual: Any) -> str:
    return (
        f"Property {path} with value {_printable(actual)} must be {expected}."
        if direction == "serialize"
        else f"Property {path} with value {_printable(actual)} must be {expected} to deserialize."
    )


def _printable(value: Any, limit: int = 200) -> str:
    text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text
