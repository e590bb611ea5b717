"""
Login Process Orchestrator
--------------------------
Runs `openclaw channels login --channel whatsapp --verbose`, relays what the
classifier finds in its output as signed webhooks, and decides the final exit
status once the process ends.

The exit code of the login process alone is never trusted as success: the
credential directory must be non-empty before we exit 0.
"""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from typing import Callable, List, Optional, Tuple

from qr_relay.settings import settings
from qr_relay.callback.dispatch import WebhookDispatcher
from qr_relay.core.classifier import LineClassifier
from qr_relay.core.credentials import credentials_dir, wait_for_credentials
from qr_relay.core.state_machine import (
    SUCCESS_CONFIRMED,
    SUCCESS_UNVERIFIED,
    FINISHED_NO_SUCCESS_SIGNAL,
    FAILED,
)
from qr_relay.observability.logging import log

LOGIN_ARGS = ["channels", "login", "--channel", "whatsapp", "--verbose"]


def build_login_command() -> List[str]:
    return [settings.OPENCLAW_BIN] + LOGIN_ARGS


def _propagated_exit_code(code: int) -> int:
    # Popen reports death-by-signal N as -N; shells report 128 + N
    if code < 0:
        return 128 + (-code)
    return code


def decide_outcome(exit_code: int, connected: bool, confirm: Callable[[int], bool]) -> Tuple[str, int]:
    """
    Returns (outcome, process exit code).
    `confirm(max_attempts)` polls for credentials and is only called on exit 0.
    """
    if exit_code == 0 and connected:
        log(event="login_reported_success_verifying")
        if confirm(int(settings.CREDS_ATTEMPTS_CONNECTED)):
            return SUCCESS_CONFIRMED, 0
        log(event="login_success_unverified", level="warning",
            message="login reported success but credentials were not found")
        return SUCCESS_UNVERIFIED, 1

    if exit_code == 0:
        log(event="login_finished_checking_credentials")
        if confirm(int(settings.CREDS_ATTEMPTS_UNCONFIRMED)):
            return SUCCESS_CONFIRMED, 0
        return FINISHED_NO_SUCCESS_SIGNAL, 1

    return FAILED, _propagated_exit_code(exit_code)


def _mirror(stream, raw: bytes) -> None:
    buf = getattr(stream, "buffer", None)
    if buf is not None:
        stream.flush()
        buf.write(raw)
        buf.flush()
    else:
        stream.write(raw.decode("utf-8", errors="replace"))
        stream.flush()


def _pump(pipe, mirror, classifier: LineClassifier, dispatcher: WebhookDispatcher, channel: str) -> None:
    try:
        for raw in iter(pipe.readline, b""):
            try:
                _mirror(mirror, raw)
                event = classifier.classify(raw.decode("utf-8", errors="replace"))
                if event is not None:
                    dispatcher.submit(event)
            except Exception as e:
                # Keep draining; a stalled pipe would block the child
                log(event="stream_line_error", channel=channel, errorType=type(e).__name__, error=str(e)[:200])
    finally:
        pipe.close()


def run_login(
    command: Optional[List[str]] = None,
    cwd: Optional[str] = None,
    classifier: Optional[LineClassifier] = None,
    dispatcher: Optional[WebhookDispatcher] = None,
    creds_path=None,
    stdout=None,
    stderr=None,
) -> int:
    """Run the login process to completion and return our own exit code."""
    command = command or build_login_command()
    cwd = cwd or settings.OPENCLAW_APP_DIR
    classifier = classifier or LineClassifier()
    dispatcher = dispatcher or WebhookDispatcher()
    creds_path = creds_path or credentials_dir()
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    log(event="login_capture_start", binary=command[0], cwd=str(cwd), credsDir=str(creds_path))

    try:
        try:
            proc = subprocess.Popen(
                command,
                stdin=None,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=os.environ.copy(),
                cwd=cwd,
            )
        except OSError as e:
            log(event="login_spawn_failed", binary=command[0], errorType=type(e).__name__, error=str(e)[:300])
            raise

        readers = [
            threading.Thread(target=_pump, args=(proc.stdout, stdout, classifier, dispatcher, "stdout"),
                             name="login-stdout", daemon=True),
            threading.Thread(target=_pump, args=(proc.stderr, stderr, classifier, dispatcher, "stderr"),
                             name="login-stderr", daemon=True),
        ]
        for t in readers:
            t.start()

        exit_code = proc.wait()
        # Every line must be classified before reconciling
        for t in readers:
            t.join()

        log(event="login_exited", exitCode=exit_code, connected=classifier.connected)

        def confirm(max_attempts: int) -> bool:
            return wait_for_credentials(creds_path, max_attempts, settings.CREDS_POLL_DELAY_MS)

        outcome, code = decide_outcome(exit_code, classifier.connected, confirm)
        log(event="login_outcome", outcome=outcome, exitCode=code)
        return code
    finally:
        dispatcher.close(wait=True)
