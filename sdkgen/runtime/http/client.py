"""HTTP transport.

``DefaultHttpClient.send_request`` resolves with an ``HttpOperationResponse``
for every completed exchange, whatever its status code. It raises
``RestError`` only when the exchange itself fails:

- ``REQUEST_ABORTED_ERROR``: the request's abort signal fired
- ``REQUEST_SEND_ERROR``: DNS failure, refused connection, timeout, or any
  other ``aiohttp.ClientError``

Nothing is retried here; retry policy belongs to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

import aiohttp
from multidict import CIMultiDict
from yarl import URL

from ..config import HttpClientConfig
from ..core.enums import ResponseBodyKind
from ..core.exceptions import RestError
from .headers import HttpHeaders
from .response import HttpOperationResponse
from .web_resource import ProgressCallback, TransferProgressEvent, WebResource

logger = logging.getLogger(__name__)


class HttpClient(ABC):
    """Anything that can send a ``WebResource``."""

    @abstractmethod
    async def send_request(self, request: WebResource) -> HttpOperationResponse:
        """Send ``request`` and return the response."""


class DefaultHttpClient(HttpClient):
    """aiohttp-backed HTTP client."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self.config = config or HttpClientConfig()
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            # Header wait is bounded per request in _send; bodies may stream for long
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None))
        return self._session

    async def send_request(self, request: WebResource) -> HttpOperationResponse:
        signal = request.abort_signal
        if signal is not None and signal.aborted:
            raise _aborted_error(request)

        logger.debug(
            "Sending request",
            extra={"method": request.method.value, "url": request.url},
        )

        if signal is None:
            return await self._send(request)

        # Each request listens on the shared signal and fails on its own
        task = asyncio.ensure_future(self._send(request))
        signal.add_abort_listener(task.cancel)
        try:
            return await task
        except asyncio.CancelledError:
            if signal.aborted:
                raise _aborted_error(request) from None
            raise
        finally:
            signal.remove_abort_listener(task.cancel)

    async def _send(self, request: WebResource) -> HttpOperationResponse:
        url = self._resolve_url(request.url)
        headers = request.headers.clone()
        if not headers.contains("User-Agent"):
            headers.set("User-Agent", self.config.user_agent)
        if not request.keep_alive:
            headers.set("Connection", "close")
        data = self._prepare_body(request, headers)

        timeout_ms = request.timeout or int(self.config.timeout * 1000)
        try:
            response = await asyncio.wait_for(
                self._open(request, url, headers, data),
                timeout=timeout_ms / 1000 if timeout_ms else None,
            )
        except asyncio.TimeoutError:
            raise RestError(
                f"timeout of {timeout_ms}ms exceeded",
                RestError.REQUEST_SEND_ERROR,
                request=request,
            ) from None
        except aiohttp.ClientError as e:
            raise RestError(
                str(e) or type(e).__name__, RestError.REQUEST_SEND_ERROR, request=request
            ) from e

        logger.debug(
            "Response received",
            extra={"method": request.method.value, "url": url, "status": response.status},
        )
        return await self._build_response(request, response)

    async def _open(
        self, request: WebResource, url: str, headers: HttpHeaders, data: Any
    ) -> aiohttp.ClientResponse:
        return await self.session.request(
            request.method.value,
            url,
            params=request.query,
            headers=CIMultiDict(headers.items()),
            data=data,
        )

    async def _build_response(
        self, request: WebResource, response: aiohttp.ClientResponse
    ) -> HttpOperationResponse:
        headers = HttpHeaders(response.headers)

        if request.response_body_kind == ResponseBodyKind.STREAM:
            stream = _stream_body(response, self.config.chunk_size, request.on_download_progress)
            return HttpOperationResponse(request, response.status, headers, readable_stream_body=stream)

        try:
            body = await _read_body(response, self.config.chunk_size, request.on_download_progress)
        except aiohttp.ClientError as e:
            raise RestError(
                str(e) or type(e).__name__, RestError.REQUEST_SEND_ERROR, request=request
            ) from e
        finally:
            response.release()

        if request.response_body_kind == ResponseBodyKind.BLOB:
            return HttpOperationResponse(request, response.status, headers, blob_body=body)
        text = body.decode(response.charset or "utf-8", errors="replace")
        return HttpOperationResponse(request, response.status, headers, body_as_text=text)

    def _prepare_body(self, request: WebResource, headers: HttpHeaders) -> Any:
        body = request.body
        if body is None:
            return None
        if callable(body):
            body = body()
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif isinstance(body, (bytearray, memoryview)):
            body = bytes(body)

        if request.on_upload_progress is None:
            return body

        if isinstance(body, bytes) and not headers.contains("Content-Length"):
            # Keeps aiohttp from switching to chunked encoding for the generator
            headers.set("Content-Length", len(body))
        return _upload_body(body, self.config.chunk_size, request.on_upload_progress)

    def _resolve_url(self, url: str) -> str:
        if self.config.base_url and not URL(url).is_absolute():
            return f"{self.config.base_url}{url}"
        return url

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> DefaultHttpClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def _aborted_error(request: WebResource) -> RestError:
    return RestError("The request was aborted", RestError.REQUEST_ABORTED_ERROR, request=request)


async def _upload_body(
    body: Any, chunk_size: int, on_progress: ProgressCallback
) -> AsyncIterator[bytes]:
    loaded = 0
    async for chunk in _iter_chunks(body, chunk_size):
        loaded += len(chunk)
        on_progress(TransferProgressEvent(loaded))
        yield chunk


async def _iter_chunks(body: Any, chunk_size: int) -> AsyncIterator[bytes]:
    if isinstance(body, bytes):
        for start in range(0, len(body), chunk_size):
            yield body[start : start + chunk_size]
    elif isinstance(body, AsyncIterable):
        async for chunk in body:
            yield chunk
    elif hasattr(body, "read"):
        # Reads run in the default executor; the file is closed once sent
        loop = asyncio.get_running_loop()
        try:
            while True:
                chunk = await loop.run_in_executor(None, body.read, chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            body.close()
    else:
        raise TypeError(f"Unsupported request body type: {type(body).__name__}")


async def _read_body(
    response: aiohttp.ClientResponse, chunk_size: int, on_progress: ProgressCallback | None
) -> bytes:
    chunks: list[bytes] = []
    loaded = 0
    async for chunk in response.content.iter_chunked(chunk_size):
        chunks.append(chunk)
        loaded += len(chunk)
        if on_progress is not None:
            on_progress(TransferProgressEvent(loaded))
    return b"".join(chunks)


async def _stream_body(
    response: aiohttp.ClientResponse, chunk_size: int, on_progress: ProgressCallback | None
) -> AsyncIterator[bytes]:
    loaded = 0
    try:
        async for chunk in response.content.iter_chunked(chunk_size):
            loaded += len(chunk)
            if on_progress is not None:
                on_progress(TransferProgressEvent(loaded))
            yield chunk
    finally:
        response.release()
