from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from webtender.io.client import WebtenderClient

API_KEY = "test_api_key"
API_SECRET = "test_api_secret"
BASE_URL = "https://api.example.test/api"
FIXED_TS = 1700000000


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "WEBTENDER_API_BASE_URL",
        "WEBTENDER_API_KEY",
        "WEBTENDER_API_SECRET",
        "WEBTENDER_API_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def make_client() -> Callable[..., WebtenderClient]:
    """Build a client whose transport is the given MockTransport handler."""
    clients: list[WebtenderClient] = []

    def _make(handler=None, **kwargs) -> WebtenderClient:
        if handler is None:
            handler = lambda request: httpx.Response(200, json={})  # noqa: E731
        kwargs.setdefault("api_key", API_KEY)
        kwargs.setdefault("api_secret", API_SECRET)
        kwargs.setdefault("base_url", BASE_URL)
        kwargs.setdefault("clock", lambda: FIXED_TS)
        client = WebtenderClient(transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()
