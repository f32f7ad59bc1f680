"""Exception taxonomy for the Webtender API client.

Every failure surfaces as a subclass of :class:`WebtenderError`. Errors raised
after a response was received carry the partial :class:`ApiResponse` on
``.response`` so callers keep access to the status code and payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webtender.io.response import ApiResponse


class WebtenderError(Exception):
    """Base class for all client errors."""


class ConfigError(WebtenderError):
    """Missing or invalid credentials/base URL at construction time."""


class RequestConstructionError(WebtenderError):
    """Method or URL could not be turned into a request."""


class SigningError(WebtenderError):
    """Authentication headers could not be attached."""


class BodyReadError(SigningError):
    """Request body could not be read for signing; request left unsigned."""


class TransportError(WebtenderError):
    """Network, timeout or TLS failure while dispatching."""


class ResponseError(WebtenderError):
    """A response was received but the call did not succeed."""

    def __init__(self, message: str, response: ApiResponse | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response

    @property
    def status(self) -> int | None:
        return self.response.status if self.response is not None else None


class ResponseReadError(ResponseError):
    """Response body could not be read."""


class DecodeError(ResponseError):
    """Response body is not valid JSON."""


class LogicalFailure(ResponseError):
    """Response status is above 299."""
