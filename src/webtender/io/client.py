from __future__ import annotations

import re
import time
from collections.abc import Callable
from threading import Lock
from typing import Any

import httpx

from webtender.config.schema import ClientConfig
from webtender.config.settings import Settings, resolve_config
from webtender.errors import (
    BodyReadError,
    RequestConstructionError,
    ResponseReadError,
    TransportError,
)
from webtender.io.response import ApiResponse, fail, normalize
from webtender.io.signer import build_auth_headers
from webtender.utils.logging_redaction import get_logger, redact_mapping

_LOGGER = get_logger(__name__)

# RFC 7230 token
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def join_paths(base: str, path: str) -> str:
    """Join with exactly one ``/`` regardless of how either side is slashed."""
    return base.removesuffix("/") + "/" + path.removeprefix("/")


def _as_bytes(body: bytes | str | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    if not isinstance(body, (bytes, bytearray, memoryview)):
        raise RequestConstructionError(
            f"failed to create request: body must be bytes or str, not {type(body).__name__}"
        )
    return bytes(body)


def _read_body(request: httpx.Request) -> bytes:
    # Request.read() swaps a consumed iterator stream for an in-memory one,
    # so the bytes signed here are the bytes that go on the wire.
    if not isinstance(request.stream, httpx.SyncByteStream):
        raise BodyReadError("failed to read request body: stream is not synchronously readable")
    try:
        return request.read()
    except Exception as e:
        raise BodyReadError(f"failed to read request body: {e}") from e


class WebtenderClient:
    """HMAC-authenticated REST client for the Webtender API.

    - Each request is signed with a fresh timestamp (X-API-Key/X-Timestamp/X-Signature)
    - Exactly one dispatch per call, no retries
    - JSON responses are normalized into :class:`ApiResponse`

    Values not passed explicitly are read from ``WEBTENDER_API_*`` settings.
    A missing key or secret raises :class:`ConfigError` here, not on first use.
    Instances hold no per-call state and can be shared across threads.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config: ClientConfig = resolve_config(
            api_key=api_key,
            api_secret=api_secret,
            base_url=base_url,
            timeout=timeout,
            settings=settings,
        )
        if http_client is None:
            self._http = httpx.Client(timeout=self._config.timeout, transport=transport)
            self._owns_http = True
        else:
            self._http = http_client
            self._owns_http = False
        self._clock = clock

    @classmethod
    def from_env(cls, **kwargs: Any) -> WebtenderClient:
        """Build a client purely from environment settings."""
        return cls(**kwargs)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def timeout(self) -> float:
        return self._config.timeout

    def __repr__(self) -> str:
        return f"WebtenderClient(base_url={self.base_url!r})"

    # -- request construction -------------------------------------------------

    def new_request(self, method: str, path: str, body: bytes | str | None = None) -> httpx.Request:
        """Build and sign a request for ``path`` relative to the base URL."""
        if not isinstance(method, str) or not _METHOD_RE.match(method):
            raise RequestConstructionError(f"failed to create request: invalid method {method!r}")
        url = join_paths(self._config.base_url, path)
        content = _as_bytes(body)
        try:
            request = self._http.build_request(
                method,
                url,
                content=content or None,
                headers={"Accept": "application/json"},
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestConstructionError(f"failed to create request: {e}") from e
        if request.url.scheme not in ("http", "https") or not request.url.host:
            raise RequestConstructionError(f"failed to create request: unsupported URL {url!r}")

        self.sign_request(request)
        return request

    def get_request(self, path: str) -> httpx.Request:
        return self.new_request("GET", path)

    def post_request(self, path: str, body: bytes | str | None = None) -> httpx.Request:
        return self.new_request("POST", path, body)

    def patch_request(self, path: str, body: bytes | str | None = None) -> httpx.Request:
        return self.new_request("PATCH", path, body)

    def put_request(self, path: str, body: bytes | str | None = None) -> httpx.Request:
        return self.new_request("PUT", path, body)

    def delete_request(self, path: str) -> httpx.Request:
        return self.new_request("DELETE", path)

    # -- signing --------------------------------------------------------------

    def sign_request(self, request: httpx.Request) -> httpx.Request:
        """Stamp X-API-Key, X-Timestamp and X-Signature onto ``request``.

        Raises BodyReadError, with no header set, when the body cannot be read.
        """
        timestamp = int(self._clock())
        body = _read_body(request)
        headers = build_auth_headers(
            self._config.api_key,
            self._config.api_secret,
            request.method,
            str(request.url),
            body,
            timestamp,
        )
        request.headers.update(headers)
        return request

    # -- dispatch -------------------------------------------------------------

    def send(self, request: httpx.Request) -> ApiResponse:
        """Dispatch ``request`` once and normalize the response.

        Raises TransportError (no response), or ResponseReadError, DecodeError
        or LogicalFailure with the partial response on ``exc.response``.
        """
        request.extensions.setdefault("timeout", httpx.Timeout(self._config.timeout).as_dict())
        _LOGGER.debug(
            "REST %s %s headers=%s", request.method, request.url, redact_mapping(request.headers)
        )
        try:
            resp = self._http.send(request, stream=True)
        except httpx.RequestError as e:
            _LOGGER.debug("REST %s %s transport error: %s", request.method, request.url, type(e).__name__)
            raise TransportError(f"request failed: {e}") from e

        try:
            body = resp.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise fail(ResponseReadError(f"failed to read response body: {e}"), resp.status_code) from e
        finally:
            resp.close()

        _LOGGER.debug("REST %s %s status=%s", request.method, request.url, resp.status_code)
        return normalize(resp.status_code, body)

    def get(self, path: str) -> ApiResponse:
        return self.send(self.get_request(path))

    def post(self, path: str, body: bytes | str | None = None) -> ApiResponse:
        return self.send(self.post_request(path, body))

    def patch(self, path: str, body: bytes | str | None = None) -> ApiResponse:
        return self.send(self.patch_request(path, body))

    def put(self, path: str, body: bytes | str | None = None) -> ApiResponse:
        return self.send(self.put_request(path, body))

    def delete(self, path: str) -> ApiResponse:
        return self.send(self.delete_request(path))

    # -- lifecycle ------------------------------------------------------------

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> WebtenderClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_CLIENT: WebtenderClient | None = None
_CLIENT_LOCK = Lock()


def get_client() -> WebtenderClient:
    """Return the shared default client, built from the environment on first use."""
    global _CLIENT
    with _CLIENT_LOCK:
        if _CLIENT is None:
            _CLIENT = WebtenderClient.from_env()
        return _CLIENT


def close_client() -> None:
    global _CLIENT
    with _CLIENT_LOCK:
        if _CLIENT is not None:
            _CLIENT.close()
            _CLIENT = None
