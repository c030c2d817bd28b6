"""
Telegram notification sender.

Sends goal notifications via the Telegram Bot API.
Delivery is fire-and-forget: the result is reported as a boolean.
"""

import html
import logging
from typing import Optional, Protocol, Union

import httpx

from run_goals.config import settings

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    """Outbound notification channel."""

    async def send(self, recipient: Union[int, str], subject: str, body: str) -> bool:
        ...


class TelegramNotifier:
    """
    Async Telegram message sender.

    Fails silently (logs errors) so a Telegram outage never breaks
    the goal check.
    """

    API_URL = "https://api.telegram.org"

    def __init__(
        self,
        bot_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.bot_token = bot_token or settings.telegram_bot_token
        self.timeout = timeout
        self._transport = transport
        self._enabled = bool(self.bot_token)

        if not self._enabled:
            logger.info("TelegramNotifier disabled: TELEGRAM_BOT_TOKEN not set")

    @property
    def enabled(self) -> bool:
        """Check if notifier is configured."""
        return self._enabled

    async def send(self, recipient: Union[int, str], subject: str, body: str) -> bool:
        """
        Send a message to a Telegram chat.

        Args:
            recipient: Telegram chat ID
            subject: Rendered in bold as the first line
            body: Message text

        Returns:
            True if sent successfully, False otherwise
        """
        if not self._enabled:
            return False

        if not recipient:
            logger.warning("Cannot send Telegram message: no chat_id")
            return False

        payload = {
            "chat_id": recipient,
            "text": f"<b>{html.escape(subject)}</b>\n\n{html.escape(body)}",
            "parse_mode": "HTML",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.API_URL}/bot{self.bot_token}/sendMessage",
                    json=payload
                )
        except httpx.TimeoutException:
            logger.warning(f"Telegram timeout sending to {recipient}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Telegram send error: {type(e).__name__}")
            return False

        if response.status_code == 200:
            logger.debug(f"Telegram message sent to {recipient}")
            return True

        logger.warning(
            f"Telegram API error: {response.status_code} - {response.text[:200]}"
        )
        return False
