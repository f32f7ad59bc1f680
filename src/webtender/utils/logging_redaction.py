"""Logging helpers that keep request credentials out of output.

The API key and signature headers are the only secrets that ever leave the
client; the secret itself is never placed in a header or log line.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from typing import Any

from webtender.io.signer import HEADER_API_KEY, HEADER_SIGNATURE

MASK = "***"
SENSITIVE_HEADERS = frozenset({HEADER_API_KEY.lower(), HEADER_SIGNATURE.lower()})

_HEADER_VALUE_RE = re.compile(
    r"((?:%s)['\"]?\s*[:=]\s*['\"]?)([^\s,'\"}]+)" % "|".join(re.escape(h) for h in SENSITIVE_HEADERS),
    re.IGNORECASE,
)


def redact_mapping(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Copy ``headers`` with X-API-Key and X-Signature values replaced by ``***``."""
    return {k: (MASK if str(k).lower() in SENSITIVE_HEADERS else v) for k, v in headers.items()}


def redact_text(text: str) -> str:
    """Mask auth header values written as ``name: value`` or ``name=value``."""
    if not text:
        return text
    return _HEADER_VALUE_RE.sub(lambda m: m.group(1) + MASK, text)


class RedactionFilter(logging.Filter):
    """Rewrites each record's final message through :func:`redact_text`."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        try:
            record.msg = redact_text(record.getMessage())
            record.args = ()
        except (TypeError, ValueError) as redaction_err:
            logging.getLogger("redaction").debug("redaction_error: %s", redaction_err)
        return True


def _level_from_env() -> int:
    raw = (os.getenv("WEBTENDER_LOG_LEVEL") or "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not any(isinstance(f, RedactionFilter) for f in logger.filters):
        logger.addFilter(RedactionFilter())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(_level_from_env())
    return logger
