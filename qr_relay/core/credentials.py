import os
import time
from pathlib import Path
from typing import Callable, Optional, Union

from qr_relay.settings import settings
from qr_relay.observability.logging import log


def credentials_dir(state_dir: Optional[str] = None) -> Path:
    # openclaw stores the linked session under the "default" account
    base = Path(state_dir or settings.OPENCLAW_STATE_DIR)
    return base / "credentials" / "whatsapp" / "default"


def _list_entries(path: Path):
    """Entries of path, or None if it does not exist. Re-read on every call."""
    if not path.is_dir():
        return None
    return sorted(os.listdir(path))


def wait_for_credentials(
    path: Union[str, Path],
    max_attempts: int,
    delay_ms: int,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Poll until `path` exists and holds at least one entry.
    Absence is a plain False; read errors count as a negative attempt.
    """
    path = Path(path)
    attempts = max(0, int(max_attempts or 0))

    for i in range(attempts):
        try:
            entries = _list_entries(path)
        except OSError as e:
            log(event="creds_check_error", path=str(path), attempt=i + 1, errorType=type(e).__name__, error=str(e)[:200])
            entries = None

        if entries:
            log(event="creds_found", path=str(path), files=entries)
            return True

        log(event="creds_waiting", path=str(path), attempt=i + 1, maxAttempts=attempts)
        sleep(max(0, int(delay_ms or 0)) / 1000.0)

    # Operator diagnostics only
    parent = path.parent
    try:
        siblings = _list_entries(parent)
    except OSError as e:
        log(event="creds_parent_unreadable", path=str(parent), error=str(e)[:200])
        return False
    if siblings is None:
        log(event="creds_parent_missing", path=str(parent))
    else:
        log(event="creds_parent_listing", path=str(parent), files=siblings)
    return False
