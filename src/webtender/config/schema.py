from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientConfig(BaseModel):
    """Resolved, immutable client configuration."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    api_secret: str = Field(repr=False)
    base_url: str
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("api_key", "api_secret")
    @classmethod
    def _non_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("api_key")
    @classmethod
    def _header_safe(cls, v: str) -> str:
        # Sent verbatim as the X-API-Key header value
        if not (v.isascii() and v.isprintable()):
            raise ValueError("must contain only printable ASCII characters")
        return v

    @field_validator("base_url", mode="before")
    @classmethod
    def _validate_base_url(cls, v: Any) -> str:
        raw = str(v or "").strip()
        if not raw:
            raise ValueError("must not be empty")
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as e:
            raise ValueError(f"not a valid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("must be an absolute http(s) URL")
        return raw
