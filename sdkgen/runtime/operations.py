"""Operation runner tying the transport to the serialization engine.

Architecture:
    An ``OperationSpec`` describes one REST operation declaratively: where
    its parameters go, which TypeSpec each one uses, and which status codes
    count as success. ``OperationRunner`` turns a spec plus model-form
    arguments into a ``WebResource``, sends it, and deserializes the body.

    The transport never treats a status code as an error. This layer does:
    a status not listed in ``responses`` raises ``RestError`` carrying the
    status, the request/response pair and the (deserialized) error body.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from .core.enums import HttpMethod
from .core.exceptions import RestError
from .http.abort import AbortSignal
from .http.client import HttpClient
from .http.response import HttpOperationResponse
from .http.web_resource import WebResource
from .serialization.options import SerializationOptions
from .serialization.property_path import PropertyPath
from .serialization.type_spec import SpecRef, deserialize, serialize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationSpec:
    """Declarative description of one REST operation.

    Attributes:
        http_method: HTTP verb
        path: Path template with ``{name}`` placeholders
        url_parameters: Spec per path placeholder
        query_parameters: Spec per query parameter
        header_parameters: Spec per request header
        request_body: Spec of the JSON body, if the operation takes one
        responses: Successful status codes and the spec of each body
        default_response: Spec of the error body for any other status
    """

    http_method: HttpMethod
    path: str
    url_parameters: Mapping[str, SpecRef] = field(default_factory=dict)
    query_parameters: Mapping[str, SpecRef] = field(default_factory=dict)
    header_parameters: Mapping[str, SpecRef] = field(default_factory=dict)
    request_body: SpecRef | None = None
    responses: Mapping[int, SpecRef | None] = field(default_factory=lambda: {200: None})
    default_response: SpecRef | None = None


def serialize_request_body(
    spec: SpecRef, value: Any, options: SerializationOptions | None = None
) -> str:
    """Serialize ``value`` and encode it as JSON text."""
    return json.dumps(serialize(spec, value, options, PropertyPath(["body"])))


def deserialize_response_body(
    response: HttpOperationResponse,
    spec: SpecRef,
    options: SerializationOptions | None = None,
) -> Any:
    """Parse the response text as JSON and deserialize it.

    Returns:
        The model value, or ``None`` for an empty body

    Raises:
        RestError: With ``PARSE_ERROR`` if the body is not valid JSON
        TypeMismatchError: If the body does not match ``spec`` in strict mode
    """
    text = response.body_as_text
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError as e:
        raise RestError(
            f'Error "{e}" occurred while parsing the response body - {text}.',
            RestError.PARSE_ERROR,
            status_code=response.status,
            request=response.request,
            response=response,
            body=text,
        ) from e
    return deserialize(spec, data, options)


class OperationRunner:
    def __init__(
        self,
        client: HttpClient,
        base_url: str = "",
        options: SerializationOptions | None = None,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._options = options or SerializationOptions()

    def build_request(
        self,
        spec: OperationSpec,
        arguments: Mapping[str, Any] | None = None,
        *,
        body: Any = None,
        abort_signal: AbortSignal | None = None,
        timeout: int = 0,
    ) -> WebResource:
        """Build the ``WebResource`` for one call of ``spec``.

        Raises:
            ValueError: If a path placeholder has no argument
        """
        arguments = arguments or {}
        path = spec.path
        for name, param_spec in spec.url_parameters.items():
            if arguments.get(name) is None:
                raise ValueError(f"Missing required path parameter '{name}'")
            wire = self._serialize_parameter(param_spec, arguments[name], name)
            path = path.replace(f"{{{name}}}", quote(_to_text(wire), safe=""))

        query: list[tuple[str, str]] = []
        for name, param_spec in spec.query_parameters.items():
            if arguments.get(name) is None:
                continue
            wire = self._serialize_parameter(param_spec, arguments[name], name)
            values = wire if isinstance(wire, list) else [wire]
            query.extend((name, _to_text(v)) for v in values)

        headers: dict[str, str] = {}
        for name, param_spec in spec.header_parameters.items():
            if arguments.get(name) is None:
                continue
            headers[name] = _to_text(self._serialize_parameter(param_spec, arguments[name], name))

        content: str | None = None
        if spec.request_body is not None and body is not None:
            content = serialize_request_body(spec.request_body, body, self._options)
            headers.setdefault("Content-Type", "application/json; charset=utf-8")

        return WebResource(
            url=f"{self._base_url}{path}",
            method=spec.http_method,
            body=content,
            headers=headers,
            query=query or None,
            abort_signal=abort_signal,
            timeout=timeout,
        )

    async def run(
        self,
        spec: OperationSpec,
        arguments: Mapping[str, Any] | None = None,
        *,
        body: Any = None,
        abort_signal: AbortSignal | None = None,
        timeout: int = 0,
    ) -> HttpOperationResponse:
        """Send one call of ``spec`` and deserialize the response.

        Returns:
            The response, with ``parsed_body`` set for successful statuses

        Raises:
            RestError: On transport failure, or when the status is not one
                of ``spec.responses``
        """
        request = self.build_request(
            spec, arguments, body=body, abort_signal=abort_signal, timeout=timeout
        )
        response = await self._client.send_request(request)

        if response.status in spec.responses:
            body_spec = spec.responses[response.status]
            if body_spec is not None:
                response.parsed_body = deserialize_response_body(response, body_spec, self._options)
            return response

        logger.debug(
            "Unexpected response status",
            extra={"url": request.url, "status": response.status},
        )
        error_body: Any = response.body_as_text
        if spec.default_response is not None:
            try:
                error_body = deserialize_response_body(
                    response, spec.default_response, self._options
                )
            except RestError as e:
                # Keep the raw text; the status error below is what the caller needs
                logger.debug(f"Could not deserialize error body: {e}")
        raise RestError(
            f"Unexpected status code: {response.status}",
            status_code=response.status,
            request=request,
            response=response,
            body=error_body,
        )

    def _serialize_parameter(self, spec: SpecRef, value: Any, name: str) -> Any:
        return serialize(spec, value, self._options, PropertyPath([name]))


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
