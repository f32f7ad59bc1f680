"""Python client for the Webtender REST API.

Requests are authenticated with an API key and an HMAC-SHA256 signature over
``METHOD:URL[:BODY]:TIMESTAMP``; JSON responses are normalized into
:class:`ApiResponse`.
"""

from webtender.errors import (
    BodyReadError,
    ConfigError,
    DecodeError,
    LogicalFailure,
    RequestConstructionError,
    ResponseError,
    ResponseReadError,
    SigningError,
    TransportError,
    WebtenderError,
)
from webtender.io.client import WebtenderClient, close_client, get_client, join_paths
from webtender.io.response import ApiResponse, JSONValue
from webtender.io.signer import sign

__version__ = "0.1.0"

__all__ = [
    "ApiResponse",
    "BodyReadError",
    "ConfigError",
    "DecodeError",
    "JSONValue",
    "LogicalFailure",
    "RequestConstructionError",
    "ResponseError",
    "ResponseReadError",
    "SigningError",
    "TransportError",
    "WebtenderClient",
    "WebtenderError",
    "close_client",
    "get_client",
    "join_paths",
    "sign",
]
