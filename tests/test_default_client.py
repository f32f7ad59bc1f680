from __future__ import annotations

import pytest

from webtender.errors import ConfigError
from webtender.io import client as mod


@pytest.fixture(autouse=True)
def _reset_default_client():
    orig = mod._CLIENT
    mod._CLIENT = None
    yield
    mod.close_client()
    mod._CLIENT = orig


def test_get_client_is_cached(monkeypatch):
    monkeypatch.setenv("WEBTENDER_API_KEY", "k")
    monkeypatch.setenv("WEBTENDER_API_SECRET", "s")

    first = mod.get_client()
    assert mod.get_client() is first
    assert first.base_url == "https://api.webtender.host/api"


def test_close_client_resets_global_client(monkeypatch):
    monkeypatch.setenv("WEBTENDER_API_KEY", "k")
    monkeypatch.setenv("WEBTENDER_API_SECRET", "s")

    closed = {"ok": False}
    c = mod.get_client()
    monkeypatch.setattr(c, "close", lambda: closed.update(ok=True))

    mod.close_client()
    assert closed["ok"] is True
    assert mod._CLIENT is None


def test_get_client_without_env_raises():
    with pytest.raises(ConfigError):
        mod.get_client()
    assert mod._CLIENT is None
