"""
Services layer for outbound Telegram calls.

This module contains the services that talk to Telegram:
- Bot API client used by command handlers
- Webhook registration
"""

from src.services.telegram_client import BotApiClient
from src.services.webhook import WebhookManager

__all__ = [
    "BotApiClient",
    "WebhookManager",
]
