"""
Webhook registration service.

This module registers and tears down the bot webhook with Telegram.
"""

import logging
import secrets
from typing import Any, Dict, Optional

from telegram import Bot
from telegram.error import TelegramError

logger = logging.getLogger(__name__)


class WebhookManager:
    """Manage the webhook Telegram delivers updates to."""

    def __init__(self, bot_token: str, url: str = "", secret_token: str = "", bot: Optional[Bot] = None):
        """
        Initialize the manager.

        Args:
            bot_token: Telegram bot token
            url: Public HTTPS URL updates should be posted to
            secret_token: Value Telegram echoes in the X-Telegram-Bot-Api-Secret-Token header
            bot: Preconfigured python-telegram-bot Bot, mainly for tests
        """
        self.bot_token = bot_token
        self.url = url
        self.secret_token = secret_token
        self._bot = bot

    def _get_bot(self) -> Bot:
        if self._bot is None:
            self._bot = Bot(token=self.bot_token)
        return self._bot

    def verify(self, header_value: Optional[str]) -> bool:
        """Check the secret token header of an incoming request; False if no secret is configured."""
        if not self.secret_token:
            return False
        return secrets.compare_digest((header_value or "").encode(), self.secret_token.encode())

    async def set(self, url: Optional[str] = None, drop_pending_updates: bool = False) -> bool:
        """
        Register the webhook.

        Args:
            url: Webhook URL, defaults to the one given at construction
            drop_pending_updates: Discard updates queued while no webhook was set

        Returns:
            True if Telegram accepted the webhook, False otherwise
        """
        target = url or self.url
        if not target:
            logger.error("Cannot set webhook: no URL configured")
            return False

        try:
            result = await self._get_bot().set_webhook(
                url=target,
                allowed_updates=["message", "inline_query"],
                drop_pending_updates=drop_pending_updates,
                secret_token=self.secret_token or None,
            )
            logger.info(f"Webhook set to {target}: {result}")
            return bool(result)
        except TelegramError as e:
            logger.error(f"Telegram error setting webhook: {e}")
            return False

    async def delete(self, drop_pending_updates: bool = False) -> bool:
        """
        Remove the webhook.

        Returns:
            True if Telegram removed the webhook, False otherwise
        """
        try:
            result = await self._get_bot().delete_webhook(drop_pending_updates=drop_pending_updates)
            logger.info(f"Webhook deleted: {result}")
            return bool(result)
        except TelegramError as e:
            logger.error(f"Telegram error deleting webhook: {e}")
            return False

    async def info(self) -> Dict[str, Any]:
        """Get the current webhook status, or an empty dict on error."""
        try:
            webhook_info = await self._get_bot().get_webhook_info()
            return webhook_info.to_dict()
        except TelegramError as e:
            logger.error(f"Telegram error getting webhook info: {e}")
            return {}
