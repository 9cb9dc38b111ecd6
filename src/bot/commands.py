"""
Bot command handlers.

This module contains the command handlers shipped with the bot and the default
command registry built from them. Every handler takes (bot, update, args) and
returns the Bot API response, or None when there is nothing to answer.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional
from uuid import uuid4

from telegram import InlineQueryResultArticle, InputTextMessageContent

from src.bot import messages
from src.models.response import BotResponse
from src.models.update import Update

if TYPE_CHECKING:
    from src.bot.bot import Bot
    from src.bot.router import Handler

logger = logging.getLogger(__name__)


def _chat_id(update: Update) -> Optional[int]:
    return update.message.chat.id if update.message else None


async def _reply(bot: "Bot", update: Update, text: str) -> Optional[BotResponse]:
    chat_id = _chat_id(update)
    if chat_id is None:
        # Message commands typed into an inline query have nowhere to reply
        return None
    return await bot.api.send_message(chat_id, text, parse_mode="HTML")


async def handle_start_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """Handle /start command - welcome message."""
    return await _reply(bot, update, messages.get_start_message())


async def handle_help_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """Handle /help command - show available commands."""
    return await _reply(bot, update, messages.get_help_message())


async def handle_ping_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """Handle /ping command - answer with pong and echo the arguments."""
    return await _reply(bot, update, messages.get_pong_message(args))


async def handle_dice_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """Handle /dice command - roll an animated dice, optionally with another emoji."""
    chat_id = _chat_id(update)
    if chat_id is None:
        return None
    emoji = args[0] if args else ""
    return await bot.api.send_dice(chat_id, emoji=emoji)


async def handle_location_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """
    Handle /location command - send a map pin.

    Args:
        bot: Bot context
        update: Originating update
        args: [latitude, longitude]

    Returns:
        Bot API response, or None outside of a chat
    """
    chat_id = _chat_id(update)
    if chat_id is None:
        return None
    if len(args) < 2:
        return await _reply(bot, update, messages.get_location_usage_message())
    try:
        latitude, longitude = float(args[0]), float(args[1])
    except ValueError:
        return await _reply(bot, update, messages.get_location_usage_message())
    return await bot.api.send_location(chat_id, latitude, longitude)


async def handle_remember_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """Handle /remember command - store a value in the key-value store."""
    if bot.kv is None:
        return await _reply(bot, update, messages.get_storage_disabled_message())
    if len(args) < 2:
        return await _reply(bot, update, messages.get_remember_usage_message())

    key, value = args[0], " ".join(args[1:])
    bot.kv.put(key, value)
    logger.info(f"Stored key {key!r} for chat {_chat_id(update)}")
    return await _reply(bot, update, messages.get_remember_success_message(key))


async def handle_recall_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """Handle /recall command - read a value from the key-value store."""
    if bot.kv is None:
        return await _reply(bot, update, messages.get_storage_disabled_message())
    if not args:
        return await _reply(bot, update, messages.get_recall_usage_message())

    key = args[0]
    return await _reply(bot, update, messages.get_recall_message(key, bot.kv.get(key)))


async def handle_inline_command(bot: "Bot", update: Update, args: List[str]) -> Optional[BotResponse]:
    """
    Handle inline queries - offer the query text as a message to send.

    Args:
        bot: Bot context
        update: Update carrying the inline query
        args: Tokens of the inline query

    Returns:
        Bot API response, or None for non-inline updates and empty queries
    """
    if update.inline_query is None or not args:
        return None

    text = " ".join(args)
    result = InlineQueryResultArticle(
        id=uuid4().hex,
        title=text,
        input_message_content=InputTextMessageContent(text),
    )
    return await bot.api.answer_inline_query(update.inline_query.id, [result])


def default_commands() -> Dict[str, "Handler"]:
    """Get the command registry the deployed bot starts with."""
    return {
        "start": handle_start_command,
        "help": handle_help_command,
        "ping": handle_ping_command,
        "dice": handle_dice_command,
        "location": handle_location_command,
        "remember": handle_remember_command,
        "recall": handle_recall_command,
        "inline": handle_inline_command,
    }
