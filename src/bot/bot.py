"""
Bot facade.

The Bot is the context handed to every command handler: it carries the token,
the frozen command registry, the Bot API client and the optional key-value
store, and is the entry point for dispatching updates.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from src.bot.dispatcher import Dispatcher
from src.bot.router import CommandRouter, Handler
from src.database.kv_store import KeyValueStore
from src.models.response import BotResponse
from src.models.update import Update
from src.services.telegram_client import BotApiClient
from src.services.webhook import WebhookManager

logger = logging.getLogger(__name__)


class Bot:
    """Telegram bot bound to one token and one command registry."""

    def __init__(
        self,
        token: str,
        commands: Mapping[str, Handler],
        api: Optional[BotApiClient] = None,
        kv: Optional[KeyValueStore] = None,
        webhook: Optional[WebhookManager] = None,
    ):
        """
        Initialize the bot.

        Args:
            token: Telegram bot token
            commands: Command name to handler mapping, copied and frozen
            api: Bot API client, created from the token if omitted
            kv: Key-value store passed through to handlers
            webhook: Webhook manager, created from the token if omitted
        """
        self.token = token
        self.commands: Mapping[str, Handler] = MappingProxyType(dict(commands))
        self.api = api or BotApiClient(token)
        self.kv = kv
        self.webhook = webhook or WebhookManager(token)
        self.router = CommandRouter(self, self.commands)
        self.dispatcher = Dispatcher(self, self.router)
        logger.debug(f"Bot created with commands: {sorted(self.commands)}")

    async def dispatch(self, update: Update) -> BotResponse:
        """Dispatch one update and return its response."""
        return await self.dispatcher.dispatch(update)

    async def handle_payload(self, payload: Dict[str, Any]) -> BotResponse:
        """
        Dispatch a decoded webhook body.

        Raises:
            ValueError: If the payload is not a JSON object
        """
        return await self.dispatch(Update.from_dict(payload))

    async def close(self) -> None:
        await self.api.aclose()
