"""Primitive TypeSpecs.

Each primitive checks the value against one Python type on the way in and,
where the wire and model forms differ, converts it. A failed check goes
through the shared failure policy and, in warn mode, the value is returned
unconverted.
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from datetime import date, datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any

from ..core.enums import SpecType
from .options import SerializationOptions, fail_deserialize_type_check, fail_serialize_type_check
from .property_path import PropertyPath
from .type_spec import TypeSpec

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
# Fractional seconds of any length; datetime.fromisoformat before 3.11 takes 3 or 6 digits
_FRACTION_PATTERN = re.compile(r"\.(\d+)")


class PrimitiveTypeSpec(TypeSpec):
    """Template for primitives.

    Subclasses describe the accepted model and wire values and the two
    conversions. Identity conversions are the default.
    """

    expected_model: str = "a value"
    expected_wire: str = "a value"

    def is_model(self, value: Any) -> bool:
        return True

    def is_wire(self, value: Any) -> bool:
        return self.is_model(value)

    def to_wire(self, value: Any) -> Any:
        return value

    def to_model(self, value: Any) -> Any:
        return value

    def serialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not self.is_model(value):
            fail_serialize_type_check(options, path, value, self.expected_model)
            return value
        return self.to_wire(value)

    def deserialize(self, path: PropertyPath, value: Any, options: SerializationOptions) -> Any:
        if not self.is_wire(value):
            fail_deserialize_type_check(options, path, value, self.expected_wire)
            return value
        try:
            return self.to_model(value)
        except ValueError:
            # Right type, unparseable content (bad date text, bad base64, ...)
            fail_deserialize_type_check(options, path, value, self.expected_wire)
            return value


class BooleanSpec(PrimitiveTypeSpec):
    spec_type = SpecType.BOOLEAN
    expected_model = expected_wire = "a boolean"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, bool)


class NumberSpec(PrimitiveTypeSpec):
    spec_type = SpecType.NUMBER
    expected_model = expected_wire = "a number"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)


class StringSpec(PrimitiveTypeSpec):
    spec_type = SpecType.STRING
    expected_model = expected_wire = "a string"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, str)


class UuidSpec(PrimitiveTypeSpec):
    """UUIDs travel as canonical strings; ``uuid.UUID`` is accepted on serialize."""

    spec_type = SpecType.UUID
    expected_model = expected_wire = "a UUID"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, uuid.UUID) or self.is_wire(value)

    def is_wire(self, value: Any) -> bool:
        return isinstance(value, str) and _UUID_PATTERN.match(value) is not None

    def to_wire(self, value: Any) -> str:
        return str(value)


class ObjectSpec(PrimitiveTypeSpec):
    """Free-form JSON object, passed through untouched."""

    spec_type = SpecType.OBJECT
    expected_model = expected_wire = "an object"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, dict)


class ByteArraySpec(PrimitiveTypeSpec):
    spec_type = SpecType.BYTE_ARRAY
    expected_model = "a bytes object"
    expected_wire = "a base64 encoded string"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, (bytes, bytearray))

    def is_wire(self, value: Any) -> bool:
        return isinstance(value, str)

    def to_wire(self, value: bytes) -> str:
        return base64.b64encode(bytes(value)).decode("ascii")

    def to_model(self, value: str) -> bytes:
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(str(e)) from e


class DateSpec(PrimitiveTypeSpec):
    """``datetime.date`` <-> ``YYYY-MM-DD``."""

    spec_type = SpecType.DATE
    expected_model = "a date"
    expected_wire = "an ISO 8601 date string"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, date)

    def is_wire(self, value: Any) -> bool:
        return isinstance(value, str)

    def to_wire(self, value: date) -> str:
        if isinstance(value, datetime):
            value = value.date()
        return value.isoformat()

    def to_model(self, value: str) -> date:
        return date.fromisoformat(value)


class DateTimeSpec(PrimitiveTypeSpec):
    """``datetime`` <-> ISO 8601 text in UTC. Naive datetimes are taken as UTC."""

    spec_type = SpecType.DATE_TIME
    expected_model = "a datetime"
    expected_wire = "an ISO 8601 date-time string"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, datetime)

    def is_wire(self, value: Any) -> bool:
        return isinstance(value, str)

    def to_wire(self, value: datetime) -> str:
        return _as_utc(value).isoformat().replace("+00:00", "Z")

    def to_model(self, value: str) -> datetime:
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        value = _FRACTION_PATTERN.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
        return datetime.fromisoformat(value)


class DateTimeRfc1123Spec(PrimitiveTypeSpec):
    """``datetime`` <-> ``Mon, 01 Jan 2024 00:00:00 GMT``."""

    spec_type = SpecType.DATE_TIME_RFC1123
    expected_model = "a datetime"
    expected_wire = "an RFC 1123 date-time string"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, datetime)

    def is_wire(self, value: Any) -> bool:
        return isinstance(value, str)

    def to_wire(self, value: datetime) -> str:
        return format_datetime(_as_utc(value), usegmt=True)

    def to_model(self, value: str) -> datetime:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, IndexError) as e:
            raise ValueError(str(e)) from e
        if parsed is None:
            raise ValueError(f"Invalid RFC 1123 date: {value!r}")
        return _as_utc(parsed)


class UnixTimeSpec(PrimitiveTypeSpec):
    """``datetime`` <-> whole seconds since the epoch."""

    spec_type = SpecType.UNIX_TIME
    expected_model = "a datetime"
    expected_wire = "a unix timestamp"

    def is_model(self, value: Any) -> bool:
        return isinstance(value, datetime)

    def is_wire(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def to_wire(self, value: datetime) -> int:
        return int(_as_utc(value).timestamp())

    def to_model(self, value: float) -> datetime:
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(str(e)) from e


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


boolean_spec = BooleanSpec()
number_spec = NumberSpec()
string_spec = StringSpec()
uuid_spec = UuidSpec()
object_spec = ObjectSpec()
byte_array_spec = ByteArraySpec()
date_spec = DateSpec()
date_time_spec = DateTimeSpec()
date_time_rfc1123_spec = DateTimeRfc1123Spec()
unix_time_spec = UnixTimeSpec()
