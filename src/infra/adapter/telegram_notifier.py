from typing import Optional

import httpx
import structlog

from core.port.notifier import Notifier

logger = structlog.stdlib.get_logger(__name__)


class TelegramNotifier(Notifier):
    """Posts plain-text messages to a Telegram chat through the Bot API.

    Without both a bot token and a chat id the notifier is disabled and every
    message is only logged. Delivery problems are logged and swallowed.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bot_token: Optional[str],
        chat_id: Optional[str],
        api_base_url: str = "https://api.telegram.org",
        timeout_ms: int = 10_000,
    ) -> None:
        self.http_client = http_client
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout_seconds = timeout_ms / 1_000

        if self.enabled:
            logger.info(f"Telegram notifier enabled (chat_id={self.chat_id})")
        else:
            logger.info("Telegram notifier disabled (no bot token/chat id)")

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def notify(self, message: str) -> None:
        if not self.enabled:
            logger.info(f"Notification skipped (Telegram credentials not configured): {message}")
            return

        url = f"{self.api_base_url}/bot{self.bot_token}/sendMessage"

        try:
            response = await self.http_client.post(
                url,
                json={"chat_id": self.chat_id, "text": message},
                timeout=self.timeout_seconds,
            )
        except httpx.RequestError as e:
            logger.error(f"Failed to send Telegram notification: {e.__class__.__name__}: {e}")
            return
        except Exception:
            logger.exception("Unexpected error sending Telegram notification")
            return

        if response.is_error:
            logger.warning(f"Telegram rejected notification: {response.status_code} {response.text[:200]}")
            return

        logger.debug("Telegram notification sent")
