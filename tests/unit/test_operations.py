"""Precise unit tests for OperationRunner.

Tests focus on request building, status handling and body deserialization.
"""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from sdkgen.runtime import (
    HttpClient,
    HttpMethod,
    HttpOperationResponse,
    OperationRunner,
    OperationSpec,
    PropertySpec,
    RestError,
    SerializationOptions,
    TypeMismatchError,
    TypeSpecRegistry,
    boolean_spec,
    composite_spec,
    date_spec,
    deserialize_response_body,
    number_spec,
    sequence_spec,
    serialize_request_body,
    string_spec,
)


@pytest.fixture
def options():
    registry = TypeSpecRegistry()
    registry.register(
        "Pet",
        composite_spec(
            "Pet",
            {
                "name": PropertySpec(string_spec, required=True),
                "birthday": PropertySpec(date_spec, serialized_name="birth_date"),
            },
        ),
    )
    registry.register(
        "Error", composite_spec("Error", {"message": PropertySpec(string_spec)})
    )
    return SerializationOptions(registry=registry)


@pytest.fixture
def get_pet():
    return OperationSpec(
        http_method=HttpMethod.GET,
        path="/pets/{pet_id}",
        url_parameters={"pet_id": string_spec},
        query_parameters={"verbose": boolean_spec, "ids": sequence_spec(number_spec)},
        header_parameters={"x-request-id": string_spec},
        responses={200: "Pet", 204: None},
        default_response="Error",
    )


def _client_returning(status: int, text: str | None) -> MagicMock:
    client = MagicMock(spec=HttpClient)

    async def send(request):
        return HttpOperationResponse(request, status, body_as_text=text)

    client.send_request = AsyncMock(side_effect=send)
    return client


class TestBuildRequest:
    """Test WebResource construction from an OperationSpec."""

    def test_path_query_and_headers(self, options, get_pet):
        """Test parameters land in the path, query string and headers."""
        runner = OperationRunner(MagicMock(spec=HttpClient), "https://api.example.com/", options)
        request = runner.build_request(
            get_pet,
            {"pet_id": "a b/c", "verbose": True, "ids": [1, 2], "x-request-id": "r1"},
        )

        assert request.url == "https://api.example.com/pets/a%20b%2Fc"
        assert request.method is HttpMethod.GET
        assert request.query == [("verbose", "true"), ("ids", "1"), ("ids", "2")]
        assert request.headers.get("X-Request-Id") == "r1"
        assert request.body is None

    def test_optional_parameters_skipped(self, options, get_pet):
        """Test None query/header arguments are left out."""
        runner = OperationRunner(MagicMock(spec=HttpClient), "https://api.example.com", options)
        request = runner.build_request(get_pet, {"pet_id": "1", "verbose": None})
        assert request.query is None
        assert "x-request-id" not in request.headers

    def test_missing_path_parameter(self, options, get_pet):
        """Test a missing path placeholder raises ValueError."""
        runner = OperationRunner(MagicMock(spec=HttpClient), "https://api.example.com", options)
        with pytest.raises(ValueError, match="pet_id"):
            runner.build_request(get_pet, {})

    def test_parameter_type_mismatch_reports_parameter_path(self, options, get_pet):
        """Test a bad parameter fails at its own name."""
        runner = OperationRunner(MagicMock(spec=HttpClient), "https://api.example.com", options)
        with pytest.raises(TypeMismatchError) as exc_info:
            runner.build_request(get_pet, {"pet_id": "1", "ids": [1, "two"]})
        assert str(exc_info.value.path) == "$.ids[1]"

    def test_json_body(self, options):
        """Test request bodies are serialized to JSON with a content type."""
        spec = OperationSpec(http_method=HttpMethod.POST, path="/pets", request_body="Pet")
        runner = OperationRunner(MagicMock(spec=HttpClient), "https://api.example.com", options)

        request = runner.build_request(spec, body={"name": "Rex", "birthday": date(2020, 1, 2)})

        assert json.loads(request.body) == {"name": "Rex", "birth_date": "2020-01-02"}
        assert request.headers.get("content-type").startswith("application/json")


class TestRun:
    """Test sending and response handling."""

    @pytest.mark.asyncio
    async def test_success_deserializes_body(self, options, get_pet):
        """Test a listed status sets parsed_body."""
        client = _client_returning(200, '{"name": "Rex", "birth_date": "2020-01-02"}')
        runner = OperationRunner(client, "https://api.example.com", options)

        response = await runner.run(get_pet, {"pet_id": "1"})

        assert response.parsed_body == {"name": "Rex", "birthday": date(2020, 1, 2)}
        client.send_request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_success_without_body_spec(self, options, get_pet):
        """Test a status mapped to None leaves parsed_body unset."""
        runner = OperationRunner(_client_returning(204, ""), "https://api.example.com", options)
        response = await runner.run(get_pet, {"pet_id": "1"})
        assert response.parsed_body is None

    @pytest.mark.asyncio
    async def test_unexpected_status_raises_with_error_body(self, options, get_pet):
        """Test an unlisted status raises RestError with the deserialized error body."""
        runner = OperationRunner(
            _client_returning(404, '{"message": "no such pet"}'), "https://api.example.com", options
        )

        with pytest.raises(RestError) as exc_info:
            await runner.run(get_pet, {"pet_id": "1"})

        error = exc_info.value
        assert error.status_code == 404
        assert error.code is None
        assert error.body == {"message": "no such pet"}
        assert error.response.status == 404
        assert error.request.url.endswith("/pets/1")

    @pytest.mark.asyncio
    async def test_unparseable_error_body_kept_as_text(self, options, get_pet):
        """Test a non-JSON error body is kept verbatim."""
        runner = OperationRunner(
            _client_returning(500, "<html>oops</html>"), "https://api.example.com", options
        )
        with pytest.raises(RestError) as exc_info:
            await runner.run(get_pet, {"pet_id": "1"})
        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "<html>oops</html>"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, options, get_pet):
        """Test transport failures reach the caller unchanged."""
        client = MagicMock(spec=HttpClient)
        failure = RestError("down", RestError.REQUEST_SEND_ERROR)
        client.send_request = AsyncMock(side_effect=failure)
        runner = OperationRunner(client, "https://api.example.com", options)

        with pytest.raises(RestError) as exc_info:
            await runner.run(get_pet, {"pet_id": "1"})
        assert exc_info.value is failure


class TestBodyHelpers:
    """Test serialize_request_body / deserialize_response_body."""

    def test_serialize_request_body_path_prefix(self, options):
        """Test body errors are reported under $.body."""
        with pytest.raises(TypeMismatchError) as exc_info:
            serialize_request_body("Pet", {"name": 1}, options)
        assert str(exc_info.value.path) == "$.body.name"

    def test_invalid_json_is_parse_error(self, options):
        """Test malformed JSON raises PARSE_ERROR with the raw body."""
        response = HttpOperationResponse(MagicMock(), 200, body_as_text="{not json")
        with pytest.raises(RestError) as exc_info:
            deserialize_response_body(response, "Pet", options)

        assert exc_info.value.code == RestError.PARSE_ERROR
        assert exc_info.value.body == "{not json"
        assert exc_info.value.status_code == 200

    def test_empty_body_is_none(self, options):
        """Test an empty body deserializes to None."""
        response = HttpOperationResponse(MagicMock(), 200, body_as_text="")
        assert deserialize_response_body(response, "Pet", options) is None
