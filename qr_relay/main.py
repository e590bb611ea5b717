import sys

from qr_relay.core.orchestrator import run_login


def main():
    sys.exit(run_login())


if __name__ == "__main__":
    main()
