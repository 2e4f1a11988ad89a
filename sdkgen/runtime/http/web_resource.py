"""Outgoing request description."""

from __future__ import annotations

from collections.abc import AsyncIterable, Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import IO, Any, Union

from ..core.enums import HttpMethod, ResponseBodyKind
from .abort import AbortSignal
from .headers import HttpHeaders

# None | raw bytes | text | callable producing a binary stream | file-like
HttpRequestBody = Union[
    None,
    bytes,
    bytearray,
    memoryview,
    str,
    Callable[[], Union[IO[bytes], AsyncIterable[bytes]]],
    IO[bytes],
]


@dataclass(frozen=True)
class TransferProgressEvent:
    """Cumulative bytes moved so far in one direction."""

    loaded_bytes: int


ProgressCallback = Callable[[TransferProgressEvent], None]


@dataclass(frozen=True)
class WebResource:
    """An HTTP request, immutable once built.

    Attributes:
        url: Absolute URL, or a path relative to the client's base_url
        method: HTTP verb (strings are normalized to ``HttpMethod``)
        body: Request payload, see ``HttpRequestBody``
        headers: Request headers, copied on construction and read-only;
            use ``with_headers`` to change them
        query: Extra query parameters appended to the URL
        with_credentials: Browser credentials flag; carried for parity,
            the aiohttp session always sends its cookies
        abort_signal: Cancels the request when aborted
        timeout: Milliseconds to wait for response headers (0 = client default)
        on_upload_progress: Called as the body is sent
        on_download_progress: Called as the response body is received
        response_body_kind: Form of ``HttpOperationResponse`` body to produce
        keep_alive: Reuse the connection after the exchange
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    body: HttpRequestBody = None
    headers: HttpHeaders = field(default_factory=HttpHeaders)
    query: Mapping[str, Any] | Sequence[tuple[str, str]] | None = None
    with_credentials: bool = False
    abort_signal: AbortSignal | None = None
    timeout: int = 0
    on_upload_progress: ProgressCallback | None = None
    on_download_progress: ProgressCallback | None = None
    response_body_kind: ResponseBodyKind = ResponseBodyKind.TEXT
    keep_alive: bool = True

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("WebResource url must not be empty")
        if self.timeout < 0:
            raise ValueError("WebResource timeout must be >= 0")
        if not isinstance(self.method, HttpMethod):
            object.__setattr__(self, "method", HttpMethod.from_str(self.method))
        object.__setattr__(self, "headers", HttpHeaders(self.headers, read_only=True))

    def with_headers(self, headers: Mapping[str, str]) -> WebResource:
        """Return a copy with ``headers`` added or replaced."""
        merged = self.headers.clone()
        for name, value in headers.items():
            merged.set(name, value)
        return replace(self, headers=merged)

    def with_body(self, body: HttpRequestBody) -> WebResource:
        return replace(self, body=body)
