"""
Command routing logic.

This module resolves parsed commands against the command registry and invokes
the matching handler.
"""

import inspect
import json
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Mapping, Optional, Union

from src.bot.parser import parse_command
from src.models.response import BotResponse, DEFAULT_RESPONSE
from src.models.update import Update

if TYPE_CHECKING:
    from src.bot.bot import Bot

logger = logging.getLogger(__name__)

HandlerResult = Optional[BotResponse]
Handler = Callable[["Bot", Update, List[str]], Union[HandlerResult, Awaitable[HandlerResult]]]


def log_event(payload: Any) -> bool:
    """
    Emit one diagnostic event as a JSON line.

    Always returns True and never raises.
    """
    try:
        logger.info(json.dumps(payload, default=str))
    except Exception:
        logger.info(repr(payload))
    return True


def normalize_response(result: Any) -> BotResponse:
    """Return ``result`` if it is a usable response, else the default response."""
    if isinstance(result, BotResponse) and result:
        log_event({"response": result.body})
        return result
    return DEFAULT_RESPONSE


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None) or repr(handler)


class CommandRouter:
    """Resolve commands against a registry and invoke their handlers."""

    def __init__(self, bot: "Bot", commands: Mapping[str, Handler]):
        self.bot = bot
        self.commands = commands

    def resolve(self, command: Optional[str]) -> Optional[Handler]:
        if command is None:
            return None
        return self.commands.get(command)

    async def execute(
        self,
        update: Update,
        text: str,
        args: Optional[List[str]] = None,
    ) -> BotResponse:
        """
        Parse ``text``, run the matching handler and normalize its result.

        Args:
            update: Update the command came from
            text: Raw text naming the command and its arguments
            args: Extra arguments appended after the parsed ones

        Returns:
            The handler's response, or DEFAULT_RESPONSE if the command is
            unknown or the handler produced nothing

        Raises:
            Exception: Whatever the handler raises is propagated unchanged
        """
        extra_args = list(args or [])
        log_event({"execute": {"text": text, "args": extra_args}})

        command, text_args = parse_command(text)
        handler = self.resolve(command)

        if handler is None:
            log_event({"error": f"command '{command}' does not exist"})
            return DEFAULT_RESPONSE

        log_event({"command": command, "handler": _handler_name(handler)})
        result = handler(self.bot, update, [*text_args, *extra_args])
        if inspect.isawaitable(result):
            result = await result
        return normalize_response(result)
