from __future__ import annotations

from typing import Any

import pytest

from src.bot.bot import Bot
from src.models.response import BotResponse
from src.services.webhook import WebhookManager

WEBHOOK_SECRET = "s3cret-token"


def make_message_update(
    text: Any = "/start",
    *,
    chat_id: int = 1,
    chat_title: str | None = "Room",
    username: str = "alice",
    new_chat_members: list[dict] | None = None,
    update_id: int = 100,
) -> dict[str, Any]:
    message: dict[str, Any] = {
        "message_id": 10,
        "date": 1633935457,
        "from": {"id": 42, "is_bot": False, "first_name": "A", "username": username},
        "chat": {"id": chat_id, "type": "group", "title": chat_title},
    }
    if text is not None:
        message["text"] = text
    if new_chat_members is not None:
        message["new_chat_members"] = new_chat_members
    return {"update_id": update_id, "message": message}


def make_inline_update(query: str = "foo bar", *, query_id: str = "q1", update_id: int = 200) -> dict[str, Any]:
    return {
        "update_id": update_id,
        "inline_query": {
            "id": query_id,
            "from": {"id": 42, "is_bot": False, "first_name": "A", "username": "alice"},
            "query": query,
            "offset": "",
        },
    }


class FakeApiClient:
    """Records Bot API calls instead of sending them."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def _record(self, method: str, **params: Any) -> BotResponse:
        self.calls.append((method, params))
        return BotResponse(status_code=200, body={"ok": True, "result": {"method": method, **params}})

    async def send_message(self, chat_id, text, **kwargs) -> BotResponse:
        return self._record("sendMessage", chat_id=chat_id, text=text, **kwargs)

    async def send_dice(self, chat_id, emoji="", **kwargs) -> BotResponse:
        return self._record("sendDice", chat_id=chat_id, emoji=emoji, **kwargs)

    async def send_location(self, chat_id, latitude, longitude, **kwargs) -> BotResponse:
        return self._record("sendLocation", chat_id=chat_id, latitude=latitude, longitude=longitude, **kwargs)

    async def answer_inline_query(self, inline_query_id, results, cache_time=0) -> BotResponse:
        results = [r.to_dict() if hasattr(r, "to_dict") else r for r in results]
        return self._record("answerInlineQuery", inline_query_id=inline_query_id, results=results)

    async def aclose(self) -> None:
        self.closed = True

    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]


class FakeKeyValueStore:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.data[key] = value


@pytest.fixture
def api() -> FakeApiClient:
    return FakeApiClient()


@pytest.fixture
def make_bot(api):
    def _make(commands: dict | None = None, kv=None) -> Bot:
        webhook = WebhookManager("123:TEST", url="https://example.com/hook", secret_token=WEBHOOK_SECRET)
        return Bot(token="123:TEST", commands=commands or {}, api=api, kv=kv, webhook=webhook)
    return _make


@pytest.fixture
def message_update():
    return make_message_update


@pytest.fixture
def inline_update():
    return make_inline_update


@pytest.fixture
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def webhook_secret() -> str:
    return WEBHOOK_SECRET
