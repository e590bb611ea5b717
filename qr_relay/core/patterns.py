# Text signals emitted by `openclaw channels login --channel whatsapp`.

import re

# Matched case-insensitively as substrings
CONNECTED_PATTERNS = [
    "WhatsApp Web connected",
    "Linked after restart",
    "web session ready",
    "Session authenticated",
    "WhatsApp connected",
    "logged in",
]

# Raw pairing code: "2@" followed by base64-ish data
PAIRING_CODE_RE = re.compile(r"2@[A-Za-z0-9+/=,]+")
# Shorter matches are fragments, not codes
PAIRING_CODE_MIN_LEN = 51

# Top edge of a terminal-rendered QR code
QR_START_PATTERNS = ["▄▄▄▄▄▄▄", "█ ▄▄▄▄▄"]
# Bottom edge (finder pattern of the lower-left corner)
QR_END_PATTERN = "█▄▄▄▄▄▄▄█"
# A block only closes once it has more lines than this
QR_MIN_BLOCK_LINES = 10

_CONNECTED_LOWER = [p.lower() for p in CONNECTED_PATTERNS]


def is_connected_line(line: str) -> bool:
    t = (line or "").lower()
    return any(p in t for p in _CONNECTED_LOWER)


def find_pairing_code(line: str):
    m = PAIRING_CODE_RE.search(line or "")
    return m.group(0) if m else None


def is_qr_start(line: str) -> bool:
    return any(p in line for p in QR_START_PATTERNS)


def is_qr_end(line: str) -> bool:
    return QR_END_PATTERN in line
