"""sdkgen runtime - HTTP transport and type-directed serialization for generated REST clients."""

from .config import HttpClientConfig
from .core import (
    DuplicateTypeSpecError,
    FailurePolicy,
    HttpMethod,
    ResponseBodyKind,
    RestError,
    SerializationError,
    SpecType,
    TypeMismatchError,
    UnresolvedTypeSpecError,
)
from .http import (
    AbortController,
    AbortSignal,
    DefaultHttpClient,
    HttpClient,
    HttpHeaders,
    HttpOperationResponse,
    TransferProgressEvent,
    WebResource,
)
from .operations import (
    OperationRunner,
    OperationSpec,
    deserialize_response_body,
    serialize_request_body,
)
from .serialization import (
    CollectingWarningSink,
    CompositeTypeSpec,
    DictionaryTypeSpec,
    EnumTypeSpec,
    Polymorphism,
    PropertyPath,
    PropertySpec,
    SequenceTypeSpec,
    SerializationOptions,
    SerializationWarning,
    TypeSpec,
    TypeSpecRegistry,
    boolean_spec,
    byte_array_spec,
    composite_spec,
    date_spec,
    date_time_rfc1123_spec,
    date_time_spec,
    deserialize,
    dictionary_spec,
    enum_spec,
    number_spec,
    object_spec,
    sequence_spec,
    serialize,
    string_spec,
    unix_time_spec,
    uuid_spec,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Configuration
    "HttpClientConfig",
    # Core
    "HttpMethod",
    "SpecType",
    "FailurePolicy",
    "ResponseBodyKind",
    # Exceptions
    "RestError",
    "SerializationError",
    "TypeMismatchError",
    "UnresolvedTypeSpecError",
    "DuplicateTypeSpecError",
    # HTTP
    "AbortController",
    "AbortSignal",
    "HttpClient",
    "DefaultHttpClient",
    "HttpHeaders",
    "HttpOperationResponse",
    "TransferProgressEvent",
    "WebResource",
    # Operations
    "OperationSpec",
    "OperationRunner",
    "serialize_request_body",
    "deserialize_response_body",
    # Serialization
    "PropertyPath",
    "TypeSpec",
    "TypeSpecRegistry",
    "SerializationOptions",
    "SerializationWarning",
    "CollectingWarningSink",
    "serialize",
    "deserialize",
    "boolean_spec",
    "number_spec",
    "string_spec",
    "uuid_spec",
    "object_spec",
    "byte_array_spec",
    "date_spec",
    "date_time_spec",
    "date_time_rfc1123_spec",
    "unix_time_spec",
    "SequenceTypeSpec",
    "sequence_spec",
    "DictionaryTypeSpec",
    "dictionary_spec",
    "EnumTypeSpec",
    "enum_spec",
    "CompositeTypeSpec",
    "PropertySpec",
    "Polymorphism",
    "composite_spec",
]
