"""Core components."""

from .enums import FailurePolicy, HttpMethod, ResponseBodyKind, SpecType
from .exceptions import (
    DuplicateTypeSpecError,
    RestError,
    SerializationError,
    TypeMismatchError,
    UnresolvedTypeSpecError,
)

__all__ = [
    "HttpMethod",
    "SpecType",
    "FailurePolicy",
    "ResponseBodyKind",
    "RestError",
    "SerializationError",
    "TypeMismatchError",
    "UnresolvedTypeSpecError",
    "DuplicateTypeSpecError",
]
