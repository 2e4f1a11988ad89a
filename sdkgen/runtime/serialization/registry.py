"""Registry of named TypeSpecs.

Architecture:
    Composite specs refer to each other by name. Names are looked up here
    only when a value is being traversed, so two specs can reference each
    other before both are registered.

Design Decisions:
    - Registration is a setup-time operation; traversal only reads
    - Duplicate names are rejected rather than silently replaced
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from ..core.exceptions import DuplicateTypeSpecError

if TYPE_CHECKING:
    from .type_spec import TypeSpec


class TypeSpecRegistry:
    """Mapping from type name to TypeSpec."""

    def __init__(self, specs: Mapping[str, TypeSpec] | None = None) -> None:
        self._specs: dict[str, TypeSpec] = {}
        for name, spec in (specs or {}).items():
            self.register(name, spec)

    def register(self, name: str, spec: TypeSpec) -> TypeSpec:
        """Register ``spec`` under ``name``.

        Returns:
            The registered spec, so definitions can be written inline.

        Raises:
            DuplicateTypeSpecError: If ``name`` is already registered
        """
        if name in self._specs:
            raise DuplicateTypeSpecError(name)
        self._specs[name] = spec
        return spec

    def get(self, name: str) -> TypeSpec | None:
        return self._specs.get(name)

    def items(self) -> Iterator[tuple[str, TypeSpec]]:
        return iter(self._specs.items())

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)
