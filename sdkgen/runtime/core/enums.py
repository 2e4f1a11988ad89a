"""Core enumerations shared by the transport and serialization layers.

Design Decisions:
    - String enums: values double as wire tags and log-friendly strings
    - Closed sets: every TypeSpec variant, HTTP verb, failure policy and
      response body form is listed here, so dispatch never sees an
      unknown tag
"""

from enum import Enum


class HttpMethod(str, Enum):
    """Standard HTTP verbs accepted by ``WebResource``."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def from_str(cls, method: str) -> "HttpMethod":
        """Normalize a method name. Raises ValueError for unknown verbs."""
        try:
            return cls(method.upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None


class SpecType(str, Enum):
    """Discriminator tag carried by every TypeSpec."""

    # Primitives
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    STRING = "String"
    UUID = "UUID"
    OBJECT = "Object"
    BYTE_ARRAY = "ByteArray"
    DATE = "Date"
    DATE_TIME = "DateTime"
    DATE_TIME_RFC1123 = "DateTimeRfc1123"
    UNIX_TIME = "UnixTime"

    # Containers
    SEQUENCE = "Sequence"
    DICTIONARY = "Dictionary"
    COMPOSITE = "Composite"
    ENUM = "Enum"


class FailurePolicy(str, Enum):
    """What a type-check failure does during (de)serialization."""

    THROW = "throw"
    WARN = "warn"


class ResponseBodyKind(str, Enum):
    """Form in which the transport hands back a response body."""

    TEXT = "text"
    STREAM = "stream"
    BLOB = "blob"
