"""
Bot command handling module.

This module contains all Telegram bot update processing logic including:
- Command parsing
- Command routing
- Update dispatching
- Command handlers and message templates
"""

from src.bot.parser import parse_command, tokenize
from src.bot.router import CommandRouter
from src.bot.dispatcher import Dispatcher
from src.bot.bot import Bot
from src.bot.commands import default_commands

__all__ = ["parse_command", "tokenize", "CommandRouter", "Dispatcher", "Bot", "default_commands"]
