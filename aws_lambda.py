#!/usr/bin/env python3
"""
AWS Lambda entry point for the Telegram webhook bot.

API Gateway forwards every Telegram webhook delivery to this function. The
update is dispatched to the command registry and the result is returned as
the HTTP response body.

Routes (matched on the end of the request path):
    /webhook/set     register the webhook at WEBHOOK_URL
    /webhook/delete  remove the webhook
    anything else    treat the body as a Telegram update

Every route requires the X-Telegram-Bot-Api-Secret-Token header to equal
WEBHOOK_SECRET; Telegram sends it on each delivery once the webhook is set.

Required Environment Variables:
    - TELEGRAM_BOT_TOKEN: Telegram bot token
    - WEBHOOK_SECRET: Shared secret for the webhook and the management routes

Optional Environment Variables:
    - WEBHOOK_URL: Public URL Telegram should post updates to
    - TELEGRAM_API_URL: Bot API root (default https://api.telegram.org)
    - REQUEST_TIMEOUT: Bot API request timeout in seconds (default 10)
    - LOG_LEVEL: Logging level (default INFO)
    - KV_ENABLED: Enable the PostgreSQL key-value store (DATABASE_URL or DB_* vars)
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

from src.bot import Bot, default_commands
from src.config import config
from src.database.kv_store import KeyValueStore
from src.models.response import BotResponse
from src.services.telegram_client import BotApiClient
from src.services.webhook import WebhookManager

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    stream=sys.stdout,
    force=True,
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}
SECRET_HEADER = "x-telegram-bot-api-secret-token"


def _json_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": JSON_HEADERS,
        "body": json.dumps(body),
    }


def _internal_error() -> Dict[str, Any]:
    return _json_response(500, {"ok": False, "error": "Internal server error"})


def _forbidden() -> Dict[str, Any]:
    return _json_response(403, {"ok": False, "error": "Forbidden"})


def _is_api_gateway_event(event: Dict[str, Any]) -> bool:
    """
    Check if the event is from API Gateway.

    Args:
        event: Lambda event object

    Returns:
        True if event is from API Gateway, False otherwise
    """
    return (
        "httpMethod" in event or
        "requestContext" in event or
        ("path" in event and "body" in event)
    )


def _event_path(event: Dict[str, Any]) -> str:
    return (event.get("path") or event.get("requestContext", {}).get("path") or "").rstrip("/")


def _event_header(event: Dict[str, Any], name: str) -> Optional[str]:
    # API Gateway keeps the client's header casing
    for key, value in (event.get("headers") or {}).items():
        if key.lower() == name:
            return value
    return None


def _is_authorized(event: Dict[str, Any], bot: Bot) -> bool:
    if bot.webhook.verify(_event_header(event, SECRET_HEADER)):
        return True
    logger.warning(f"Rejected request to {_event_path(event) or '/'}: bad or missing secret token")
    return False


def create_bot(kv: Optional[KeyValueStore] = None) -> Bot:
    """
    Build the bot from configuration.

    Args:
        kv: Key-value store override; built from config when KV_ENABLED is set

    Returns:
        Bot wired with the default command registry
    """
    config.validate()
    if kv is None and config.KV_ENABLED:
        kv = KeyValueStore()
    return Bot(
        token=config.TELEGRAM_BOT_TOKEN,
        commands=default_commands(),
        api=BotApiClient(
            config.TELEGRAM_BOT_TOKEN,
            base_url=config.TELEGRAM_API_URL,
            timeout=config.REQUEST_TIMEOUT,
        ),
        kv=kv,
        webhook=WebhookManager(
            config.TELEGRAM_BOT_TOKEN,
            url=config.WEBHOOK_URL,
            secret_token=config.WEBHOOK_SECRET,
        ),
    )


async def _dispatch(bot: Bot, update: Dict[str, Any]) -> BotResponse:
    try:
        return await bot.handle_payload(update)
    finally:
        await bot.close()


def handle_webhook_update(event: Dict[str, Any], bot: Optional[Bot] = None) -> Dict[str, Any]:
    """
    Handle webhook update from API Gateway.

    Args:
        event: API Gateway event object
        bot: Bot to dispatch with, built from config if omitted

    Returns:
        API Gateway response dictionary
    """
    try:
        bot = bot or create_bot()
        if not _is_authorized(event, bot):
            return _forbidden()

        # API Gateway sends the body as a JSON string; some setups nest it in requestContext
        body = event.get("body") or event.get("requestContext", {}).get("body", "{}")
        if isinstance(body, str):
            update = json.loads(body)
        else:
            update = body

        if not isinstance(update, dict):
            logger.warning("Webhook body is not a JSON object")
            return _json_response(400, {"ok": False, "error": "Update must be a JSON object"})

        logger.info(f"Processing webhook update {update.get('update_id')}")
        response = asyncio.run(_dispatch(bot, update))

        return _json_response(200, {"ok": True, "result": response.body})

    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse webhook body: {e}")
        return _json_response(400, {"ok": False, "error": "Invalid JSON in request body"})
    except Exception as e:
        logger.exception(f"Error handling webhook update: {e}")
        return _internal_error()


def handle_webhook_management(action: str, event: Dict[str, Any], bot: Optional[Bot] = None) -> Dict[str, Any]:
    """
    Register or remove the webhook.

    Args:
        action: ``set`` or ``delete``
        event: API Gateway event object, checked for the secret token header
        bot: Bot whose webhook manager is used, built from config if omitted

    Returns:
        API Gateway response dictionary
    """
    bot = bot or create_bot()
    if not _is_authorized(event, bot):
        return _forbidden()

    if action == "set":
        success = asyncio.run(bot.webhook.set())
    elif action == "delete":
        success = asyncio.run(bot.webhook.delete())
    else:
        return _json_response(404, {"ok": False, "error": f"Unknown webhook action: {action}"})

    logger.info(f"Webhook {action}: {'ok' if success else 'failed'}")
    return _json_response(200 if success else 502, {"ok": success, "action": action})


# ============================================================================
# Standalone Entry Point
# ============================================================================

def lambda_handler(event, context):
    try:
        if not isinstance(event, dict) or not _is_api_gateway_event(event):
            logger.warning("Unsupported event type")
            return _json_response(400, {"ok": False, "error": "Unsupported event"})

        path = _event_path(event)
        if path.endswith("/webhook/set"):
            return handle_webhook_management("set", event)
        if path.endswith("/webhook/delete"):
            return handle_webhook_management("delete", event)

        logger.info("Detected API Gateway event - processing webhook")
        return handle_webhook_update(event)
    except Exception as e:
        logger.exception(f"Error in lambda_handler: {e}")
        return _internal_error()
