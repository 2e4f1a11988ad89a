"""Type-directed (de)serialization engine.

Example:
    >>> registry = TypeSpecRegistry()
    >>> _ = registry.register("Pet", composite_spec("Pet", {"name": PropertySpec(string_spec)}))
    >>> options = SerializationOptions(registry=registry)
    >>> serialize(sequence_spec("Pet"), [{"name": "Rex"}], options)
    [{'name': 'Rex'}]
"""

from .composite import CompositeTypeSpec, Polymorphism, PropertySpec, composite_spec
from .dictionary import DictionaryTypeSpec, dictionary_spec
from .enum import EnumTypeSpec, enum_spec
from .options import (
    CollectingWarningSink,
    SerializationOptions,
    SerializationWarning,
    fail_deserialize_type_check,
    fail_serialize_type_check,
    log_warning,
    resolve_type_spec,
)
from .primitives import (
    PrimitiveTypeSpec,
    boolean_spec,
    byte_array_spec,
    date_spec,
    date_time_rfc1123_spec,
    date_time_spec,
    number_spec,
    object_spec,
    string_spec,
    unix_time_spec,
    uuid_spec,
)
from .property_path import PropertyPath
from .registry import TypeSpecRegistry
from .sequence import SequenceTypeSpec, sequence_spec
from .type_spec import SpecRef, TypeSpec, deserialize, serialize

__all__ = [
    "PropertyPath",
    "TypeSpecRegistry",
    "SerializationOptions",
    "SerializationWarning",
    "CollectingWarningSink",
    "log_warning",
    "resolve_type_spec",
    "fail_serialize_type_check",
    "fail_deserialize_type_check",
    "TypeSpec",
    "SpecRef",
    "serialize",
    "deserialize",
    # Primitives
    "PrimitiveTypeSpec",
    "boolean_spec",
    "number_spec",
    "string_spec",
    "uuid_spec",
    "object_spec",
    "byte_array_spec",
    "date_spec",
    "date_time_spec",
    "date_time_rfc1123_spec",
    "unix_time_spec",
    # Containers
    "SequenceTypeSpec",
    "sequence_spec",
    "DictionaryTypeSpec",
    "dictionary_spec",
    "EnumTypeSpec",
    "enum_spec",
    "CompositeTypeSpec",
    "PropertySpec",
    "Polymorphism",
    "composite_spec",
]
