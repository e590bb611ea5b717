from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from qr_relay.settings import settings
from qr_relay.callback.sender import send_webhook
from qr_relay.callback.signing import derive_secret
from qr_relay.core.models import Event
from qr_relay.observability.logging import log


class WebhookDispatcher:
    """
    Spawn-and-forget delivery of classifier events.
    Sends run on a small thread pool, unordered relative to each other.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        instance_id: Optional[str] = None,
        encryption_key: Optional[str] = None,
        max_workers: Optional[int] = None,
    ):
        self.base_url = settings.WEBHOOK_URL if base_url is None else base_url
        self.instance_id = settings.INSTANCE_ID if instance_id is None else instance_id
        key = settings.ENCRYPTION_KEY if encryption_key is None else encryption_key
        # Fixed for the whole run, recomputed on every start
        self.secret = derive_secret(self.instance_id, key)
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers or settings.WEBHOOK_MAX_WORKERS or 4,
            thread_name_prefix="webhook",
        )

    def submit(self, event: Event):
        try:
            return self._pool.submit(
                send_webhook,
                self.base_url,
                self.instance_id,
                self.secret,
                event.kind,
                event.code_or_image,
                event.phone,
            )
        except RuntimeError as e:
            # Pool already shut down
            log(event="webhook_dispatch_rejected", status=event.kind, error=str(e))
            return None

    def close(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)
