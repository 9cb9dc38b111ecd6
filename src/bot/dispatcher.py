"""
Update dispatching.

This module classifies incoming updates and runs the message or inline query
flow for them. Every path that produces nothing ends in DEFAULT_RESPONSE.
"""

import logging
from typing import TYPE_CHECKING

from src.bot.messages import get_greeting_message
from src.bot.parser import tokenize
from src.bot.router import CommandRouter, log_event
from src.models.response import BotResponse, DEFAULT_RESPONSE
from src.models.update import Update, UpdateKind

if TYPE_CHECKING:
    from src.bot.bot import Bot

logger = logging.getLogger(__name__)

INLINE_COMMAND = "inline"


class Dispatcher:
    """Route one update at a time through classification and command execution."""

    def __init__(self, bot: "Bot", router: CommandRouter):
        self.bot = bot
        self.router = router

    @staticmethod
    def classify(update: Update) -> UpdateKind:
        return update.kind

    async def dispatch(self, update: Update) -> BotResponse:
        """
        Process one update end to end.

        Args:
            update: Incoming update

        Returns:
            Response of the selected flow, or DEFAULT_RESPONSE
        """
        log_event({"update": update.raw or update})

        kind = self.classify(update)
        if kind is UpdateKind.MESSAGE:
            response = await self.message_update(update)
        elif kind is UpdateKind.INLINE_QUERY:
            response = await self.inline_query_update(update)
        else:
            logger.debug(f"Update {update.update_id} has no handled payload")
            response = DEFAULT_RESPONSE

        return response or DEFAULT_RESPONSE

    async def message_update(self, update: Update) -> BotResponse:
        """
        Run the command named by the message text, then greet new members.

        The greeting runs whether or not a command matched; its result is the
        flow's response.
        """
        message = update.message
        if message is None or not isinstance(message.text, str):
            return DEFAULT_RESPONSE

        await self.router.execute(update, message.text)
        return await self.greet_users(update) or DEFAULT_RESPONSE

    async def greet_users(self, update: Update) -> BotResponse:
        """Welcome new chat members on behalf of the message sender."""
        message = update.message
        if message is None or not message.new_chat_members:
            return DEFAULT_RESPONSE

        username = message.from_user.username if message.from_user else None
        text = get_greeting_message(message.chat.title, username)
        return await self.bot.api.send_message(message.chat.id, text)

    async def inline_query_update(self, update: Update) -> BotResponse:
        """
        Run the command named by the query, then the ``inline`` command.

        Both commands always run. The ``inline`` command receives every token of
        the query; its response is returned only when the first command
        produced one.
        """
        query = update.inline_query.query if update.inline_query else ""

        first = await self.router.execute(update, query)
        second = await self.router.execute(update, INLINE_COMMAND, tokenize(query))

        return second if first and second else DEFAULT_RESPONSE
