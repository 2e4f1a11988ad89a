"""Property paths used to locate values in error messages."""

from __future__ import annotations

from collections.abc import Iterable

Segment = str | int


class PropertyPath:
    """Append-only breadcrumb trail of keys and indexes.

    Rendering starts at ``$``; string segments render as ``.name`` and
    integer segments as ``[3]``, e.g. ``$.items[3].name``.
    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        self._segments: tuple[Segment, ...] = tuple(segments)

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    def concat(self, segment: Segment) -> PropertyPath:
        """Return a new path with ``segment`` appended."""
        return PropertyPath(self._segments + (segment,))

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        parts = ["$"]
        for segment in self._segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            else:
                parts.append(f".{segment}")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"PropertyPath({str(self)!r})"
