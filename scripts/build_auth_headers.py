#!/usr/bin/env python3
"""
Build Webtender authentication headers for a request.

Prints the header set that WebtenderClient would attach. API key and
signature are masked unless --reveal is given.
"""

from __future__ import annotations

import argparse
import json
import sys
import time

from webtender.config.settings import get_settings, resolve_config
from webtender.errors import ConfigError
from webtender.io.client import join_paths
from webtender.io.signer import build_auth_headers
from webtender.utils.logging_redaction import redact_mapping


def build_headers(method: str, path: str, body: str = "") -> tuple[dict[str, str], str]:
    """
    Build the signed headers for METHOD path.

    Returns: (headers, full_url)
      - headers: Accept plus the three auth headers
      - full_url: the exact URL the signature covers
    """
    config = resolve_config(settings=get_settings())
    full_url = join_paths(config.base_url, path)
    headers = {"Accept": "application/json"}
    headers.update(
        build_auth_headers(
            config.api_key,
            config.api_secret,
            method.upper(),
            full_url,
            body.encode("utf-8"),
            int(time.time()),
        )
    )
    return headers, full_url


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build Webtender API auth headers")
    parser.add_argument("path", help="Path relative to the base URL, e.g. /v1/servers")
    parser.add_argument("--method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument("--body", default=None, help="JSON body, sent exactly as given")
    parser.add_argument("--reveal", action="store_true", help="Print API key and signature unmasked")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    args = parser.parse_args(argv)

    body = ""
    if args.body is not None:
        try:
            json.loads(args.body)
        except json.JSONDecodeError as e:
            print(f"Invalid JSON body: {e}", file=sys.stderr)
            return 2
        body = args.body

    try:
        headers, full_url = build_headers(args.method, args.path, body)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    out: dict[str, object] = dict(headers) if args.reveal else redact_mapping(headers)
    out["info"] = {"method": args.method.upper(), "url": full_url, "body_len": len(body)}

    print(json.dumps(out, indent=2 if args.pretty else None))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
