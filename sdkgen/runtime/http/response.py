"""HTTP response returned by the transport."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from .headers import HttpHeaders
from .web_resource import WebResource


@dataclass
class HttpOperationResponse:
    """Status, headers and body of a completed exchange.

    Exactly one of ``body_as_text``, ``readable_stream_body`` and
    ``blob_body`` is set, chosen by the request's ``response_body_kind``.
    ``parsed_body`` and ``parsed_headers`` are filled in by the operation
    layer after deserialization.
    """

    request: WebResource
    status: int
    headers: HttpHeaders = field(default_factory=HttpHeaders)
    body_as_text: str | None = None
    readable_stream_body: AsyncIterator[bytes] | None = None
    blob_body: bytes | None = None
    parsed_body: Any = None
    parsed_headers: Any = None

    def __post_init__(self) -> None:
        bodies = [self.body_as_text, self.readable_stream_body, self.blob_body]
        if sum(body is not None for body in bodies) > 1:
            raise ValueError(
                "HttpOperationResponse takes only one of body_as_text, "
                "readable_stream_body and blob_body"
            )

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
