"""
Telegram Bot API client service.

This module provides the outbound calls available to command handlers. Every
call serializes its named parameters into the query string of a GET request
against ``<api url>/bot<token>/<method>``.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from src.config import Config
from src.models.response import BotResponse

logger = logging.getLogger(__name__)


def _serialize(value: Any) -> str:
    """
    Convert a parameter value into its query string form.

    Booleans become ``true``/``false``, lists and dicts are JSON encoded and
    everything else goes through ``str``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value)
    return str(value)


def _result_to_dict(result: Any) -> Any:
    # python-telegram-bot objects (InlineQueryResultArticle etc.)
    to_dict = getattr(result, "to_dict", None)
    return to_dict() if callable(to_dict) else result


class BotApiClient:
    """Client for the Telegram Bot API methods used by command handlers."""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Telegram bot token
            base_url: Bot API root, defaults to the configured TELEGRAM_API_URL
            timeout: Request timeout in seconds
            http_client: Shared httpx client; one is created lazily if omitted
        """
        self.token = token
        root = (base_url or Config.TELEGRAM_API_URL).rstrip("/")
        self.api_url = f"{root}/bot{token}"
        self.timeout = timeout
        self._client = http_client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_url(self, method: str, params: Dict[str, Any]) -> httpx.URL:
        """Build the request URL for a Bot API method."""
        query = {key: _serialize(value) for key, value in params.items()}
        return httpx.URL(f"{self.api_url}/{method}", params=query)

    async def call(self, method: str, **params: Any) -> BotResponse:
        """
        Call a Bot API method.

        Args:
            method: Bot API method name, e.g. ``sendMessage``
            **params: Method parameters, serialized onto the query string

        Returns:
            BotResponse with the HTTP status and the decoded JSON body

        Raises:
            httpx.RequestError: If the request could not be sent
        """
        url = self.build_url(method, params)
        logger.info(f"Bot API request: {str(url).replace(self.token, '<token>') if self.token else url}")

        response = await self._get_client().get(url)
        try:
            body = response.json()
        except ValueError:
            body = {"ok": False, "description": response.text}

        if response.status_code != 200:
            logger.warning(f"Bot API {method} returned status {response.status_code}: {body}")
        return BotResponse(status_code=response.status_code, body=body)

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: str = "",
        disable_web_page_preview: bool = False,
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        """Send a text message to a chat."""
        return await self.call(
            "sendMessage",
            chat_id=chat_id,
            text=text,
            parse_mode=parse_mode,
            disable_web_page_preview=disable_web_page_preview,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def forward_message(
        self,
        chat_id: int,
        from_chat_id: int,
        message_id: int,
        disable_notification: bool = False,
    ) -> BotResponse:
        """Forward a message from one chat to another."""
        return await self.call(
            "forwardMessage",
            chat_id=chat_id,
            from_chat_id=from_chat_id,
            message_id=message_id,
            disable_notification=disable_notification,
        )

    async def send_photo(
        self,
        chat_id: int,
        photo: str,
        caption: str = "",
        parse_mode: str = "",
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        """Send a photo by URL or file_id."""
        return await self.call(
            "sendPhoto",
            chat_id=chat_id,
            photo=photo,
            caption=caption,
            parse_mode=parse_mode,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_video(
        self,
        chat_id: int,
        video: str,
        duration: int = 0,
        width: int = 0,
        height: int = 0,
        thumb: str = "",
        caption: str = "",
        parse_mode: str = "",
        supports_streaming: bool = False,
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        """Send a video by URL or file_id."""
        return await self.call(
            "sendVideo",
            chat_id=chat_id,
            video=video,
            duration=duration,
            width=width,
            height=height,
            thumb=thumb,
            caption=caption,
            parse_mode=parse_mode,
            supports_streaming=supports_streaming,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_animation(
        self,
        chat_id: int,
        animation: str,
        duration: int = 0,
        width: int = 0,
        height: int = 0,
        thumb: str = "",
        caption: str = "",
        parse_mode: str = "",
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        """Send a GIF or soundless video by URL or file_id."""
        return await self.call(
            "sendAnimation",
            chat_id=chat_id,
            animation=animation,
            duration=duration,
            width=width,
            height=height,
            thumb=thumb,
            caption=caption,
            parse_mode=parse_mode,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_location(
        self,
        chat_id: int,
        latitude: float,
        longitude: float,
        live_period: int = 0,
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        return await self.call(
            "sendLocation",
            chat_id=chat_id,
            latitude=latitude,
            longitude=longitude,
            live_period=live_period,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_poll(
        self,
        chat_id: int,
        question: str,
        options: List[str],
        is_anonymous: bool = False,
        type: str = "",
        allows_multiple_answers: bool = False,
        correct_option_id: int = 0,
        explanation: str = "",
        explanation_parse_mode: str = "",
        open_period: int = 0,
        close_date: int = 0,
        is_closed: bool = False,
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        """Send a native poll; ``options`` is sent as a JSON array."""
        return await self.call(
            "sendPoll",
            chat_id=chat_id,
            question=question,
            options=list(options),
            is_anonymous=is_anonymous,
            type=type,
            allows_multiple_answers=allows_multiple_answers,
            correct_option_id=correct_option_id,
            explanation=explanation,
            explanation_parse_mode=explanation_parse_mode,
            open_period=open_period,
            close_date=close_date,
            is_closed=is_closed,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def send_dice(
        self,
        chat_id: int,
        emoji: str = "",
        disable_notification: bool = False,
        reply_to_message_id: int = 0,
    ) -> BotResponse:
        return await self.call(
            "sendDice",
            chat_id=chat_id,
            emoji=emoji,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )

    async def answer_inline_query(
        self,
        inline_query_id: str,
        results: Iterable[Any],
        cache_time: int = 0,
    ) -> BotResponse:
        """
        Answer an inline query.

        Args:
            inline_query_id: Id of the query being answered
            results: Result dicts or python-telegram-bot InlineQueryResult objects
            cache_time: Seconds Telegram may cache the answer

        Returns:
            BotResponse of the call
        """
        return await self.call(
            "answerInlineQuery",
            inline_query_id=inline_query_id,
            results=[_result_to_dict(result) for result in results],
            cache_time=cache_time,
        )

    async def get_user_profile_photos(self, user_id: int, offset: int = 0, limit: int = 0) -> BotResponse:
        return await self.call(
            "getUserProfilePhotos",
            user_id=user_id,
            offset=offset,
            limit=limit,
        )
