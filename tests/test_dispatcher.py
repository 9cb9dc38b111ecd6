import logging
from types import MappingProxyType

import pytest

from src.models.response import BotResponse, DEFAULT_RESPONSE
from src.models.update import Update, UpdateKind


def recorder(result=None):
    calls = []

    async def handler(bot, update, args):
        calls.append(list(args))
        return result

    handler.calls = calls
    return handler


@pytest.mark.asyncio
async def test_message_command_invoked_once_with_args(make_bot, message_update):
    start = recorder()
    bot = make_bot({"start": start})

    await bot.dispatch(Update.from_dict(message_update("/start arg1 arg2")))

    assert start.calls == [["arg1", "arg2"]]


@pytest.mark.asyncio
async def test_bot_suffix_is_ignored_when_resolving(make_bot, message_update):
    ping = recorder()
    bot = make_bot({"ping": ping})

    await bot.dispatch(Update.from_dict(message_update("/ping@mybot hello")))

    assert ping.calls == [["hello"]]


@pytest.mark.asyncio
async def test_unregistered_command_returns_default(make_bot, message_update, api):
    bot = make_bot({})

    response = await bot.dispatch(Update.from_dict(message_update("/nope")))

    assert response is DEFAULT_RESPONSE
    assert api.calls == []


@pytest.mark.asyncio
async def test_message_command_response_is_not_the_dispatch_result(make_bot, message_update):
    bot = make_bot({"start": recorder(BotResponse(body={"ok": True}))})

    response = await bot.dispatch(Update.from_dict(message_update("/start")))

    assert response is DEFAULT_RESPONSE


@pytest.mark.asyncio
async def test_greeting_sent_for_new_members(make_bot, message_update, api):
    bot = make_bot({})
    payload = message_update(
        "hi", chat_id=1, chat_title="Room", username="bob", new_chat_members=[{"id": 7, "username": "carol"}]
    )

    response = await bot.dispatch(Update.from_dict(payload))

    assert api.calls == [("sendMessage", {"chat_id": 1, "text": "Welcome to Room, bob"})]
    assert response.ok


@pytest.mark.asyncio
async def test_greeting_runs_after_command(make_bot, message_update, api):
    order = []

    async def start(bot, update, args):
        order.append("start")
        return None

    bot = make_bot({"start": start})
    payload = message_update("/start", new_chat_members=[{"id": 7, "username": "carol"}])

    await bot.dispatch(Update.from_dict(payload))
    order.extend(api.methods())

    assert order == ["start", "sendMessage"]


@pytest.mark.asyncio
async def test_no_greeting_without_new_members(make_bot, message_update, api):
    bot = make_bot({})

    response = await bot.dispatch(Update.from_dict(message_update("hello", new_chat_members=[])))

    assert response is DEFAULT_RESPONSE
    assert api.calls == []


@pytest.mark.asyncio
async def test_message_without_text_skips_command_and_greeting(make_bot, message_update, api):
    start = recorder()
    bot = make_bot({"start": start})
    payload = message_update(None, new_chat_members=[{"id": 7, "username": "carol"}])

    response = await bot.dispatch(Update.from_dict(payload))

    assert response is DEFAULT_RESPONSE
    assert start.calls == []
    assert api.calls == []


@pytest.mark.asyncio
async def test_inline_query_runs_named_and_inline_commands(make_bot, inline_update):
    foo = recorder(BotResponse(body={"ok": True, "from": "foo"}))
    inline_result = BotResponse(body={"ok": True, "from": "inline"})
    inline = recorder(inline_result)
    bot = make_bot({"foo": foo, "inline": inline})

    response = await bot.dispatch(Update.from_dict(inline_update("foo bar")))

    assert foo.calls == [["bar"]]
    assert inline.calls == [["foo", "bar"]]
    assert response is inline_result


@pytest.mark.asyncio
async def test_inline_result_dropped_when_named_command_yields_nothing(make_bot, inline_update):
    inline = recorder(BotResponse(body={"ok": True}))
    bot = make_bot({"inline": inline})

    response = await bot.dispatch(Update.from_dict(inline_update("foo bar")))

    assert inline.calls == [["foo", "bar"]]
    assert response is DEFAULT_RESPONSE


@pytest.mark.asyncio
async def test_empty_inline_query(make_bot, inline_update):
    inline = recorder()
    bot = make_bot({"inline": inline})

    response = await bot.dispatch(Update.from_dict(inline_update("")))

    assert inline.calls == [[]]
    assert response is DEFAULT_RESPONSE


@pytest.mark.asyncio
async def test_unhandled_update_logs_once_and_returns_default(make_bot, caplog):
    caplog.set_level(logging.INFO)
    bot = make_bot({"start": recorder()})

    response = await bot.dispatch(Update.from_dict({"update_id": 5, "edited_message": {"text": "/start"}}))

    assert response is DEFAULT_RESPONSE
    events = [r for r in caplog.records if r.name.startswith("src.bot") and r.levelno >= logging.INFO]
    assert len(events) == 1


@pytest.mark.asyncio
async def test_message_wins_over_inline_query(make_bot, message_update, inline_update):
    start = recorder()
    inline = recorder()
    bot = make_bot({"start": start, "inline": inline})
    payload = {**message_update("/start"), "inline_query": inline_update("x")["inline_query"]}

    update = Update.from_dict(payload)
    await bot.dispatch(update)

    assert bot.dispatcher.classify(update) is UpdateKind.MESSAGE
    assert start.calls == [[]]
    assert inline.calls == []


@pytest.mark.asyncio
async def test_handler_exception_escapes_dispatch(make_bot, message_update):
    async def broken(bot, update, args):
        raise RuntimeError("boom")

    bot = make_bot({"broken": broken})
    with pytest.raises(RuntimeError):
        await bot.dispatch(Update.from_dict(message_update("/broken")))


def test_registry_is_read_only(make_bot):
    commands = {"start": recorder()}
    bot = make_bot(commands)
    commands["late"] = recorder()

    assert isinstance(bot.commands, MappingProxyType)
    assert "late" not in bot.commands
    with pytest.raises(TypeError):
        bot.commands["x"] = recorder()


@pytest.mark.asyncio
async def test_handle_payload_rejects_non_object(make_bot):
    with pytest.raises(ValueError):
        await make_bot({}).handle_payload(["not", "an", "object"])
