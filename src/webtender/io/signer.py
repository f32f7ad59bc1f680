from __future__ import annotations

from webtender.utils.crypto import build_hmac_signature

HEADER_API_KEY = "X-API-Key"
HEADER_TIMESTAMP = "X-Timestamp"
HEADER_SIGNATURE = "X-Signature"


def build_message(method: str, full_url: str, body: bytes, timestamp: str) -> bytes:
    """Canonical message: ``METHOD:URL:TS``, or ``METHOD:URL:BODY:TS`` for a non-empty body.

    The verifier rebuilds this from the wire request, so ``method`` and
    ``full_url`` must be exactly what gets sent. Body bytes are embedded as-is.
    """
    parts = [method.encode("utf-8"), full_url.encode("utf-8")]
    if body:
        parts.append(body)
    parts.append(timestamp.encode("utf-8"))
    return b":".join(parts)


def sign(secret: str, method: str, full_url: str, body: bytes | None, timestamp: int | str) -> str:
    message = build_message(method, full_url, body or b"", str(timestamp))
    return build_hmac_signature(secret.encode("utf-8"), message)


def build_auth_headers(
    api_key: str,
    api_secret: str,
    method: str,
    full_url: str,
    body: bytes | None,
    timestamp: int,
) -> dict[str, str]:
    """Return the three authentication headers for one request."""
    ts = str(timestamp)
    return {
        HEADER_API_KEY: api_key,
        HEADER_TIMESTAMP: ts,
        HEADER_SIGNATURE: sign(api_secret, method, full_url, body, ts),
    }
