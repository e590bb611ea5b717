"""
Webhook Signing
---------------
The receiver recomputes the same secret from (instance id, encryption key),
so both sides must agree byte-for-byte on the derivation below.
"""

from __future__ import annotations

import hashlib
import hmac

SECRET_HEX_LEN = 32
SIGNATURE_PREFIX = "sha256="


def derive_secret(instance_id: str, encryption_key: str) -> str:
    """
    sha256(instance_id + encryption_key) as lowercase hex, truncated to 32 chars.
    Empty inputs are accepted and yield a well-defined (weak) secret.
    """
    raw = ((instance_id or "") + (encryption_key or "")).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:SECRET_HEX_LEN]


def sign_body(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(body: bytes, secret: str, header: str) -> bool:
    """Receiver-side check of an X-Webhook-Signature header."""
    if not header:
        return False
    return hmac.compare_digest(sign_body(body, secret), header.strip())
