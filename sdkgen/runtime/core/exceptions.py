"""Custom exception hierarchy.

Every failure raised by the runtime is a ``RestError``. Callers branch on
``code`` and on the concrete subclass rather than parsing messages:

- Transport failures carry ``REQUEST_SEND_ERROR`` or ``REQUEST_ABORTED_ERROR``.
- Serialization failures carry ``PARSE_ERROR`` plus the property path.
- Anything else keeps ``code=None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..http.response import HttpOperationResponse
    from ..http.web_resource import WebResource
    from ..serialization.property_path import PropertyPath


class RestError(Exception):
    """Base exception for all runtime errors."""

    REQUEST_SEND_ERROR = "REQUEST_SEND_ERROR"
    REQUEST_ABORTED_ERROR = "REQUEST_ABORTED_ERROR"
    PARSE_ERROR = "PARSE_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
        request: WebResource | None = None,
        response: HttpOperationResponse | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.request = request
        self.response = response
        self.body = body


class SerializationError(RestError):
    """Failure while converting a value between wire and model form."""

    def __init__(self, message: str, path: PropertyPath) -> None:
        super().__init__(message, code=RestError.PARSE_ERROR)
        self.path = path


class TypeMismatchError(SerializationError):
    """Value does not have the shape its TypeSpec expects.

    Only raised when the failure policy is ``FailurePolicy.THROW``; in warn
    mode the same condition becomes a ``SerializationWarning``.
    """

    def __init__(self, message: str, path: PropertyPath, expected: str, actual: Any) -> None:
        super().__init__(message, path)
        self.expected = expected
        self.actual = actual


class UnresolvedTypeSpecError(SerializationError):
    """A named TypeSpec reference is missing from the registry.

    This is a setup defect, so it is raised whatever the failure policy.
    """

    def __init__(self, name: str, path: PropertyPath) -> None:
        super().__init__(
            f'Missing TypeSpec registry entry for "{name}" at property {path}.', path
        )
        self.name = name


class DuplicateTypeSpecError(SerializationError):
    """A TypeSpec name was registered twice."""

    def __init__(self, name: str) -> None:
        from ..serialization.property_path import PropertyPath

        super().__init__(f'TypeSpec "{name}" is already registered', PropertyPath())
        self.name = name
