from dataclasses import dataclass

# Event kinds sent as the webhook "status" field
QR_READY = "qr_ready"
CONFIGURING = "configuring"


@dataclass(frozen=True)
class Event:
    kind: str
    # Raw pairing code, or base64 of the captured QR art
    code_or_image: str = ""
    phone: str = ""
