"""
Message templates for bot responses.

This module contains all message templates used by the bot commands.
"""

import html
from typing import List, Optional


def get_greeting_message(chat_title: Optional[str], username: Optional[str]) -> str:
    """Get welcome message for new chat members."""
    return f"Welcome to {chat_title}, {username}"


def get_start_message() -> str:
    """Get welcome message for /start command."""
    return (
        "👋 <b>Hi! I am up and running.</b>\n\n"
        "Use /help to see all available commands."
    )


def get_help_message() -> str:
    """Get help message for /help command."""
    return (
        "📚 <b>Available Commands:</b>\n\n"
        "/start - Start the bot\n"
        "/ping [text] - Check that the bot answers\n"
        "/dice [emoji] - Roll a dice\n"
        "/location &lt;lat&gt; &lt;lon&gt; - Send a map pin\n"
        "/remember &lt;key&gt; &lt;value&gt; - Store a value\n"
        "/recall &lt;key&gt; - Read a stored value\n"
        "/help - Show this message\n\n"
        "Inline: type <code>@botname text</code> in any chat."
    )


def get_pong_message(args: List[str]) -> str:
    return " ".join(["pong", *(html.escape(arg) for arg in args)])


def get_location_usage_message() -> str:
    return "Usage: /location &lt;latitude&gt; &lt;longitude&gt;"


def get_remember_usage_message() -> str:
    return "Usage: /remember &lt;key&gt; &lt;value&gt;"


def get_remember_success_message(key: str) -> str:
    return f"✅ Saved <code>{html.escape(key)}</code>"


def get_recall_usage_message() -> str:
    return "Usage: /recall &lt;key&gt;"


def get_recall_message(key: str, value: Optional[str]) -> str:
    """Get message with a stored value, or a not-found notice."""
    key = html.escape(key)
    if value is None:
        return f"ℹ️ Nothing stored under <code>{key}</code>"
    return f"<code>{key}</code>: {html.escape(value)}"


def get_storage_disabled_message() -> str:
    return "❌ Storage is not configured for this bot."
