"""Composite (object) TypeSpec with inheritance and polymorphism.

Architecture:
    A composite describes an object as a set of named properties. The model
    form is a mapping keyed by model property names; the wire form is a dict
    keyed by each property's serialized name.

    Parents (``inherits_from``) and subtypes are found through the registry
    while a value is walked, never when the spec is built, so a base type and
    its subtypes may name each other before all of them are registered.

Polymorphism:
    A base type names a discriminator property. A value whose discriminator
    differs from the spec's own tag is handed to the registered composite
    that declares that tag and inherits (directly or transitively) from the
    spec. Unknown tags are converted by the spec itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
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

_NO_CONSTANT = object()


@dataclass(frozen=True)
class PropertySpec:
    """One property of a composite.

    Attributes:
        value_spec: Spec of the property value, inline or by registry name
        serialized_name: Key on the wire (defaults to the model key)
        required: Missing or ``None`` values go through the failure policy
        read_only: Server-populated; skipped on serialize
        constant: Fixed value always written on serialize
    """

    value_spec: SpecRef
    serialized_name: str | None = None
    required: bool = False
    read_only: bool = False
    constant: Any = _NO_CONSTANT

    @property
    def is_constant(self) -> bool:
        return self.constant is not _NO_CONSTANT

    def wire_name(self, model_name: str) -> str:
        return self.serialized_name or model_name


@dataclass(frozen=True)
class Polymorphism:
    """Discriminator settings of a polymorphic composite.

    Attributes:
        discriminator_property_name: Model key holding the type tag. Subtypes
            may leave it unset to inherit their parent's.
        discriminator_property_value: The tag identifying this type
    """

    discriminator_property_name: str | None = None
    discriminator_property_value: str | None = None


@dataclass(frozen=True, eq=False, repr=False)
class CompositeTypeSpec(TypeSpec):
    """An object made of named, individually typed properties."""

    type_name: str
    property_specs: Mapping[str, PropertySpec] = field(default_factory=dict)
    inherits_from: SpecRef | None = None
    polymorphism: Polymorphism | None = None
    additional_properties: SpecRef | None = None
    spec_type = SpecType.COMPOSITE

    def __repr__(self) -> str:
        return f"<CompositeTypeSpec {self.type_name}>"

    @property
    def expected(self) -> str:
        return "an object"

    # Inheritance

    def inheritance_chain(
        self, options: SerializationOptions, path: PropertyPath
    ) -> list[CompositeTypeSpec]:
        """Return this spec and its ancestors, root first."""
        chain: list[CompositeTypeSpec] = []
        current: CompositeTypeSpec | None = self
        while current is not None and all(current is not seen for seen in chain):
            chain.append(current)
            if current.inherits_from is None:
                break
            parent = resolve_type_spec(options, path, current.inherits_from)
            current = parent if isinstance(parent, CompositeTypeSpec) else None
        chain.reverse()
        return chain

    def all_property_specs(
        self, options: SerializationOptions, path: PropertyPath
    ) -> dict[str, PropertySpec]:
        """Merge property specs along the inheritance chain, subtypes winning."""
        merged: dict[str, PropertySpec] = {}
        for spec in self.inheritance_chain(options, path):
            merged.update(spec.property_specs)
        return merged

    def discriminator_name(self, options: SerializationOptions, path: PropertyPath) -> str | None:
        for spec in reversed(self.inheritance_chain(options, path)):
            if spec.polymorphism and spec.polymorphism.discriminator_property_name:
                return spec.polymorphism.discriminator_property_name
        return None

    @property
    def discriminator_value(self) -> str | None:
        return self.polymorphism.discriminator_property_value if self.polymorphism else None

    def find_subtype(
        self, options: SerializationOptions, path: PropertyPath, tag: Any
    ) -> CompositeTypeSpec | None:
        """Find a registered subtype of this spec declaring ``tag``."""
        if tag is None or tag == self.discriminator_value:
            return None
        for _, spec in options.registry.items():
            if spec is self or not isinstance(spec, CompositeTypeSpec):
                continue
            if spec.discriminator_value != tag:
                continue
            if any(ancestor is self for ancestor in spec.inheritance_chain(options, path)):
                return spec
        return None

    def _subtype_for(
        self, options: SerializationOptions, path: PropertyPath, value: Mapping, *, wire: bool
    ) -> CompositeTypeSpec | None:
        name = self.discriminator_name(options, path)
        if name is None:
            return None
        key = name
        if wire:
            prop = self.all_property_specs(options, path).get(name)
            key = prop.wire_name(name) if prop else name
        return self.find_subtype(options, path, value.get(key))

    # Conversion

    def serialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not isinstance(value, Mapping):
            fail_serialize_type_check(options, path, value, self.expected)
            return value

        subtype = self._subtype_for(options, path, value, wire=False)
        if subtype is not None:
            return subtype.serialize(path, value, options)

        properties = self.all_property_specs(options, path)
        discriminator = self.discriminator_name(options, path)
        result: dict[str, Any] = {}
        for name, prop in properties.items():
            wire_name = prop.wire_name(name)
            prop_path = path.concat(name)
            if prop.read_only:
                continue
            if prop.is_constant:
                result[wire_name] = prop.constant
                continue

            item = value.get(name)
            if item is None and name == discriminator:
                # A model without its tag gets the tag of the spec serializing it
                item = self.discriminator_value
            if item is None:
                if prop.required:
                    fail_serialize_type_check(
                        options, prop_path, item, f'a value for required property "{name}"'
                    )
                    if name in value:
                        result[wire_name] = item
                elif name in value and not options.omit_none:
                    result[wire_name] = None
                continue

            prop_spec = resolve_type_spec(options, prop_path, prop.value_spec)
            result[wire_name] = prop_spec.serialize(prop_path, item, options)

        known = set(properties)
        if discriminator is not None:
            prop = properties.get(discriminator)
            wire_name = prop.wire_name(discriminator) if prop else discriminator
            known.add(discriminator)
            if result.get(wire_name) is None:
                tag = value.get(discriminator)
                if tag is None:
                    tag = self.discriminator_value
                if tag is not None:
                    result[wire_name] = tag

        self._convert_additional(path, value, known, result, options, serializing=True)
        return result

    def deserialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not isinstance(value, Mapping):
            fail_deserialize_type_check(options, path, value, self.expected)
            return value

        subtype = self._subtype_for(options, path, value, wire=True)
        if subtype is not None:
            return subtype.deserialize(path, value, options)

        properties = self.all_property_specs(options, path)
        result: dict[str, Any] = {}
        known: set[str] = set()
        for name, prop in properties.items():
            wire_name = prop.wire_name(name)
            known.add(wire_name)
            prop_path = path.concat(wire_name)

            item = value.get(wire_name)
            if item is None:
                if prop.required:
                    fail_deserialize_type_check(
                        options, prop_path, item, f'a value for required property "{wire_name}"'
                    )
                if wire_name in value:
                    result[name] = None
                continue

            prop_spec = resolve_type_spec(options, prop_path, prop.value_spec)
            result[name] = prop_spec.deserialize(prop_path, item, options)

        discriminator = self.discriminator_name(options, path)
        if discriminator is not None and discriminator not in properties:
            known.add(discriminator)
            if discriminator in value:
                result[discriminator] = value[discriminator]

        self._convert_additional(path, value, known, result, options, serializing=False)
        return result

    def _convert_additional(
        self,
        path: PropertyPath,
        value: Mapping,
        known: set[str],
        result: dict[str, Any],
        options: SerializationOptions,
        *,
        serializing: bool,
    ) -> None:
        # Keys no property describes are dropped unless additional_properties is set
        if self.additional_properties is None:
            return
        extra_spec: TypeSpec | None = None
        for key, item in value.items():
            if key in known:
                continue
            if extra_spec is None:
                extra_spec = resolve_type_spec(options, path, self.additional_properties)
            key_path = path.concat(key)
            if serializing:
                result[key] = extra_spec.serialize(key_path, item, options)
            else:
                result[key] = extra_spec.deserialize(key_path, item, options)


def composite_spec(
    type_name: str,
    property_specs: Mapping[str, PropertySpec] | None = None,
    *,
    inherits_from: SpecRef | None = None,
    polymorphism: Polymorphism | None = None,
    additional_properties: SpecRef | None = None,
) -> CompositeTypeSpec:
    """Spec for an object type named ``type_name``."""
    return CompositeTypeSpec(
        type_name,
        dict(property_specs or {}),
        inherits_from=inherits_from,
        polymorphism=polymorphism,
        additional_properties=additional_properties,
    )
