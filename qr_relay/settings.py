import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # Identity used for the webhook body and the signing secret
    INSTANCE_ID: str = os.getenv("INSTANCE_ID", "")
    ENCRYPTION_KEY: str = os.getenv("ENCRYPTION_KEY", "")

    # Empty WEBHOOK_URL disables delivery (log-only no-op)
    WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
    WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", "/api/bot-webhook")
    WEBHOOK_TIMEOUT_SEC: float = float(os.getenv("WEBHOOK_TIMEOUT_SEC", "10"))
    WEBHOOK_MAX_WORKERS: int = int(os.getenv("WEBHOOK_MAX_WORKERS", "4"))

    # openclaw install layout
    OPENCLAW_STATE_DIR: str = os.getenv("OPENCLAW_STATE_DIR", "/data/.openclaw")
    OPENCLAW_BIN: str = os.getenv("OPENCLAW_BIN", "/usr/local/bin/openclaw")
    OPENCLAW_APP_DIR: str = os.getenv("OPENCLAW_APP_DIR", "/opt/openclaw/app")

    # Credential confirmation budgets
    CREDS_ATTEMPTS_CONNECTED: int = int(os.getenv("CREDS_ATTEMPTS_CONNECTED", "10"))
    CREDS_ATTEMPTS_UNCONFIRMED: int = int(os.getenv("CREDS_ATTEMPTS_UNCONFIRMED", "5"))
    CREDS_POLL_DELAY_MS: int = int(os.getenv("CREDS_POLL_DELAY_MS", "500"))

    # Pairing codes and QR art are bearer material for the account link
    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"

settings = Settings()
