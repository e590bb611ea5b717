"""
Login Output Classifier
-----------------------
Consumes the login process output one line at a time (stdout and stderr are
fed into the same instance) and turns it into at most one Event per line.

Rules, first match wins:
  1. connection success phrase (once per run)         -> configuring
  2. raw pairing code longer than 50 chars (dedup'd)  -> qr_ready(code)
  3-5. terminal QR art block: start / accumulate / end -> qr_ready(base64(art))

Each channel is read on its own thread, so classify() holds a lock for the
whole rule evaluation; the rules assume state and buffer change atomically.
"""

from __future__ import annotations

import base64
import threading
from typing import List, Optional

from qr_relay.core import patterns
from qr_relay.core.models import Event, QR_READY, CONFIGURING
from qr_relay.core.state_machine import IDLE, CAPTURING_QR_BLOCK
from qr_relay.observability.logging import log


class LineClassifier:
    def __init__(self):
        self._lock = threading.Lock()
        self.state: str = IDLE
        self.buffer: List[str] = []
        # Single slot: payload of the last qr_ready actually emitted
        self.last_sent_key: str = ""
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def capturing(self) -> bool:
        return self.state == CAPTURING_QR_BLOCK

    def classify(self, line: str) -> Optional[Event]:
        line = (line or "").rstrip("\r\n")
        with self._lock:
            return self._classify_locked(line)

    def _classify_locked(self, line: str) -> Optional[Event]:
        if not self._connected and patterns.is_connected_line(line):
            self._connected = True
            log(event="login_connected_detected")
            return Event(kind=CONFIGURING)

        code = patterns.find_pairing_code(line)
        if code and len(code) >= patterns.PAIRING_CODE_MIN_LEN and code != self.last_sent_key:
            self.last_sent_key = code
            log(event="pairing_code_detected", codeLength=len(code))
            return Event(kind=QR_READY, code_or_image=code)

        if self.state == IDLE and patterns.is_qr_start(line):
            self.state = CAPTURING_QR_BLOCK
            self.buffer = []

        if self.state != CAPTURING_QR_BLOCK:
            return None

        # The start line itself is part of the block
        self.buffer.append(line)
        if len(self.buffer) <= patterns.QR_MIN_BLOCK_LINES or not patterns.is_qr_end(line):
            return None

        self.state = IDLE
        art = "\n".join(self.buffer)
        self.buffer = []
        encoded = base64.b64encode(art.encode("utf-8")).decode("ascii")
        log(event="qr_art_detected", lines=art.count("\n") + 1)
        if encoded == self.last_sent_key:
            return None
        self.last_sent_key = encoded
        return Event(kind=QR_READY, code_or_image=encoded)
