#!/usr/bin/env python3
import sys
import os

print("Running preflight import check...")
try:
    # Delivery stays disabled during the check
    os.environ.setdefault("WEBHOOK_URL", "")

    import qr_relay.core.orchestrator
    print("Import qr_relay.core.orchestrator: OK")

    import qr_relay.callback.dispatch
    print("Import qr_relay.callback.dispatch: OK")

    from qr_relay.core.orchestrator import build_login_command
    from qr_relay.core.credentials import credentials_dir
    print(f"Login command: {' '.join(build_login_command())}")
    print(f"Credentials dir: {credentials_dir()}")

    print("Preflight check passed.")
    sys.exit(0)
except Exception as e:
    print(f"Preflight check FAILED: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
