import dataclasses

import pytest

from src.models.response import BotResponse, DEFAULT_RESPONSE
from src.models.update import Update, UpdateKind


def test_message_update_fields(message_update):
    update = Update.from_dict(
        message_update("/start", chat_id=9, chat_title="Room", username="bob",
                       new_chat_members=[{"id": 3, "username": "carol"}])
    )

    assert update.kind is UpdateKind.MESSAGE
    assert update.message.text == "/start"
    assert update.message.chat.id == 9
    assert update.message.chat.title == "Room"
    assert update.message.from_user.username == "bob"
    assert [m.username for m in update.message.new_chat_members] == ["carol"]


def test_non_string_text_is_dropped(message_update):
    update = Update.from_dict(message_update(12345))
    assert update.message.text is None


def test_missing_members_is_empty(message_update):
    assert Update.from_dict(message_update("hi")).message.new_chat_members == ()


def test_inline_query_update(inline_update):
    update = Update.from_dict(inline_update("foo bar", query_id="abc"))

    assert update.kind is UpdateKind.INLINE_QUERY
    assert update.inline_query.id == "abc"
    assert update.inline_query.query == "foo bar"


def test_unhandled_update():
    update = Update.from_dict({"update_id": 7, "channel_post": {}})
    assert update.kind is UpdateKind.UNHANDLED
    assert update.raw == {"update_id": 7, "channel_post": {}}


def test_update_is_immutable(message_update):
    update = Update.from_dict(message_update("/start"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        update.message = None


def test_non_object_payload():
    with pytest.raises(ValueError):
        Update.from_dict("nope")


def test_default_response_is_falsy_and_shared():
    assert not DEFAULT_RESPONSE
    assert DEFAULT_RESPONSE.is_default
    assert BotResponse() == DEFAULT_RESPONSE
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_RESPONSE.status_code = 500


def test_response_with_body_is_truthy():
    response = BotResponse(status_code=400, body={"ok": False})
    assert response
    assert not response.ok
    assert response.to_dict() == {"status_code": 400, "body": {"ok": False}}
