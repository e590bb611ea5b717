import json
from typing import Any, Dict


def build_webhook_payload(instance_id: str, status: str, qr_base64: str = "", phone: str = "") -> Dict[str, Any]:
    # Optional fields are omitted, never sent as null
    payload: Dict[str, Any] = {
        "instance_id": instance_id or "",
        "status": status,
    }
    if qr_base64:
        payload["qr_base64"] = qr_base64
    if phone:
        payload["phone"] = phone
    return payload


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    """Compact JSON bytes; these exact bytes are both signed and posted."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
