from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

from webtender.errors import DecodeError, LogicalFailure, ResponseError

JSONValue = Union[None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]]


@dataclass(frozen=True)
class ApiResponse:
    """Normalized result of one request/response cycle.

    ``data`` starts out as an empty mapping and only changes when the body
    decodes as JSON. ``error`` is the exception raised for this response, if any.
    """

    status: int
    data: JSONValue = field(default_factory=dict)
    error: ResponseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def status_message(status: int, data: Any) -> str:
    """Compose the logical-failure text, enriched with a server ``message`` string."""
    message = f"status: {status}"
    if isinstance(data, dict):
        server_message = data.get("message")
        if isinstance(server_message, str):
            message = f"{message}: {server_message}"
    return message


_UNSET: Any = object()


def fail(exc: ResponseError, status: int, data: JSONValue = _UNSET) -> ResponseError:
    """Bind ``exc`` and a partial response to each other and return the exception."""
    response = ApiResponse(status=status, data={} if data is _UNSET else data, error=exc)
    exc.response = response
    return exc


def normalize(status: int, body: bytes) -> ApiResponse:
    """Decode ``body`` and classify ``status``.

    Raises DecodeError or LogicalFailure with the partial response attached.
    """
    try:
        data: JSONValue = json.loads(body)
    except ValueError as e:
        raise fail(DecodeError(f"invalid JSON response body: {e}"), status) from e

    if status > 299:
        raise fail(LogicalFailure(status_message(status, data)), status, data)

    return ApiResponse(status=status, data=data)
