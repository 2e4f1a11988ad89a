"""HTTP client configuration."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_USER_AGENT = "sdkgen-runtime/0.1.0"
# Transfer chunk used when reporting upload/download progress
DEFAULT_CHUNK_SIZE = 64 * 1024


class HttpClientConfig(BaseModel):
    """Settings for ``DefaultHttpClient``.

    Attributes:
        base_url: Prefix for relative request URLs
        timeout: Seconds to wait for response headers when a request sets
            no timeout of its own (0 = wait forever)
        user_agent: Sent unless the request sets User-Agent itself
        chunk_size: Bytes per chunk when streaming bodies
    """

    base_url: str | None = None
    timeout: float = Field(default=0.0, ge=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @classmethod
    def from_env(cls, prefix: str = "SDKGEN_") -> HttpClientConfig:
        """Build a config from ``<prefix>BASE_URL``, ``<prefix>TIMEOUT`` and ``<prefix>USER_AGENT``.

        Unset variables keep their defaults. Values are validated like
        constructor arguments.
        """
        values: dict[str, str] = {}
        for field_name in ("base_url", "timeout", "user_agent"):
            raw = os.environ.get(f"{prefix}{field_name.upper()}")
            if raw is not None:
                values[field_name] = raw
        return cls.model_validate(values)
