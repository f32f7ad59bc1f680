from __future__ import annotations

import logging

import httpx

from webtender.utils.logging_redaction import (
    RedactionFilter,
    _level_from_env,
    get_logger,
    redact_mapping,
    redact_text,
)


def test_redact_mapping_masks_auth_headers():
    out = redact_mapping(
        {
            "X-API-Key": "abcdefghij",
            "x-signature": "0123456789abcdef",
            "X-Timestamp": "1700000000",
            "Accept": "application/json",
        }
    )
    assert out == {
        "X-API-Key": "***",
        "x-signature": "***",
        "X-Timestamp": "1700000000",
        "Accept": "application/json",
    }


def test_redact_mapping_accepts_httpx_headers():
    headers = httpx.Headers({"X-API-Key": "k123", "Accept": "application/json"})
    out = redact_mapping(headers)
    assert out["x-api-key"] == "***"
    assert out["accept"] == "application/json"


def test_redact_text():
    out = redact_text("X-API-Key: abc123 X-Signature=deadbeef path=/v1")
    assert "abc123" not in out
    assert "deadbeef" not in out
    assert "path=/v1" in out


def test_redact_text_dict_repr():
    out = redact_text(str({"X-API-Key": "abc123", "X-Timestamp": "17"}))
    assert "abc123" not in out
    assert "'17'" in out


def test_filter_masks_formatted_args():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "sent %s", ("x-api-key: k123",), None)
    assert RedactionFilter().filter(record) is True
    assert record.getMessage() == "sent x-api-key: ***"


def test_level_from_env(monkeypatch):
    monkeypatch.delenv("WEBTENDER_LOG_LEVEL", raising=False)
    assert _level_from_env() == logging.INFO
    monkeypatch.setenv("WEBTENDER_LOG_LEVEL", "debug")
    assert _level_from_env() == logging.DEBUG
    monkeypatch.setenv("WEBTENDER_LOG_LEVEL", "nonsense")
    assert _level_from_env() == logging.INFO


def test_get_logger_installs_single_filter():
    logger = get_logger("webtender.test")
    get_logger("webtender.test")
    assert sum(isinstance(f, RedactionFilter) for f in logger.filters) == 1


def test_client_debug_log_has_no_credentials(make_client, caplog):
    client = make_client(lambda request: httpx.Response(200, json={}))
    with caplog.at_level(logging.DEBUG, logger="webtender.io.client"):
        client.get("/v1/servers")
    text = caplog.text
    assert "REST GET" in text
    assert "test_api_key" not in text
    assert client.get_request("/v1/servers").headers["X-Signature"] not in text
