"""Cryptographic utilities for the Webtender client."""

import hashlib
import hmac


def build_hmac_signature(secret: bytes, message: bytes) -> str:
    """
    Build HMAC-SHA256 signature for Webtender API authentication.

    Args:
        secret: API secret key
        message: Canonical message to sign

    Returns:
        Lowercase hexadecimal signature string
    """
    return hmac.new(secret, message, hashlib.sha256).hexdigest()
