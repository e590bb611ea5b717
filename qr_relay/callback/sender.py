"""
Signed Webhook Sender (Fire-and-Forget)
---------------------------------------
Posts one event to {WEBHOOK_URL}/api/bot-webhook with an HMAC-SHA256 signature
over the exact body bytes. A single attempt is made; failures are logged and
never raised, so a dead listener cannot stall line classification.
"""

from __future__ import annotations

import time
from typing import Optional

import httpx

from qr_relay.settings import settings
from qr_relay.callback.payloads import build_webhook_payload, serialize_payload
from qr_relay.callback.signing import sign_body
from qr_relay.observability.logging import log


def _now_ms() -> int:
    return int(time.time() * 1000)


def webhook_url(base_url: str) -> str:
    path = settings.WEBHOOK_PATH or "/api/bot-webhook"
    if not path.startswith("/"):
        path = "/" + path
    return base_url.rstrip("/") + path


def send_webhook(
    base_url: str,
    instance_id: str,
    secret: str,
    status: str,
    qr_base64: str = "",
    phone: str = "",
    *,
    timeout: Optional[float] = None,
) -> Optional[int]:
    """
    Returns the remote status code, or None if skipped or the transport failed.
    Callers are not expected to act on the result.
    """
    if not base_url:
        log(event="webhook_skipped_no_url", status=status)
        return None

    payload = build_webhook_payload(instance_id, status, qr_base64=qr_base64, phone=phone)
    body = serialize_payload(payload)
    headers = {
        "Content-Type": "application/json",
        "X-Webhook-Signature": sign_body(body, secret),
    }
    url = webhook_url(base_url)
    per_try_timeout = float(timeout or settings.WEBHOOK_TIMEOUT_SEC or 10)

    start = _now_ms()
    try:
        with httpx.Client(timeout=per_try_timeout) as client:
            resp = client.post(url, content=body, headers=headers)
    except Exception as e:
        log(
            event="webhook_send_exception",
            status=status,
            url=url,
            elapsedMs=_now_ms() - start,
            errorType=type(e).__name__,
            error=str(e)[:500],
        )
        return None

    elapsed_ms = _now_ms() - start
    if 200 <= resp.status_code < 300:
        log(event="webhook_sent", status=status, statusCode=int(resp.status_code), elapsedMs=elapsed_ms)
    else:
        log(
            event="webhook_send_failed",
            status=status,
            statusCode=int(resp.status_code),
            elapsedMs=elapsed_ms,
            responseText=(resp.text or "")[:300],
        )
    return int(resp.status_code)
