"""Case-insensitive HTTP header collection."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from multidict import CIMultiDict, CIMultiDictProxy, MultiMapping


class HttpHeaders:
    """Header names compare case-insensitively; the last value set wins.

    Repeated headers from a multidict source (``Set-Cookie`` on a response)
    are all kept and available through ``get_all``. A read-only collection
    rejects ``set`` and ``remove``; ``clone`` always returns a writable copy.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | HttpHeaders | None = None,
        *,
        read_only: bool = False,
    ) -> None:
        collected: CIMultiDict[str] = CIMultiDict()
        if isinstance(headers, HttpHeaders):
            collected.extend(headers._headers)
        elif isinstance(headers, MultiMapping):
            collected.extend(headers)
        elif headers is not None:
            for name, value in headers.items():
                collected[name] = str(value)
        self._headers: CIMultiDict[str] | CIMultiDictProxy[str] = (
            CIMultiDictProxy(collected) if read_only else collected
        )

    @property
    def read_only(self) -> bool:
        return isinstance(self._headers, CIMultiDictProxy)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._headers.get(name, default)

    def get_all(self, name: str) -> list[str]:
        return self._headers.getall(name, [])

    def set(self, name: str, value: str | int) -> None:
        self._check_writable()
        self._headers[name] = str(value)

    def remove(self, name: str) -> bool:
        """Remove ``name``. Returns whether it was present."""
        self._check_writable()
        return self._headers.popall(name, None) is not None

    def contains(self, name: str) -> bool:
        return name in self._headers

    def names(self) -> list[str]:
        return list(dict.fromkeys(self._headers.keys()))

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._headers.items())

    def to_dict(self) -> dict[str, str]:
        return dict(self._headers.items())

    def clone(self) -> HttpHeaders:
        return HttpHeaders(self)

    def _check_writable(self) -> None:
        if self.read_only:
            raise TypeError("HttpHeaders is read-only; use clone() to get a writable copy")

    def __contains__(self, name: object) -> bool:
        return name in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpHeaders):
            return NotImplemented
        return CIMultiDict(self._headers) == CIMultiDict(other._headers)

    def __repr__(self) -> str:
        return f"HttpHeaders({self.to_dict()!r})"
