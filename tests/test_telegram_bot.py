"""Tests for the Telegram transport: chat matching, filtering and delivery (no network)."""

import asyncio
from types import SimpleNamespace

import pytest

from iogrbot.commands.context import LEADERBOARD_CHANNEL
from iogrbot.config import BotConfiguration
from iogrbot.leaderboard import Leaderboard
from iogrbot.telegram_bot import TelegramBot, chat_matches, sender_name


def _chat(id=-1001, username=None, title=None):
    return SimpleNamespace(id=id, username=username, title=title)


def test_match_by_username():
    assert chat_matches(_chat(username="IOGR_Bot"), "@iogr_bot")
    assert not chat_matches(_chat(username="other"), "@iogr_bot")


def test_match_by_id():
    assert chat_matches(_chat(id=-1001), "-1001")
    assert not chat_matches(_chat(id=-1002), "-1001")


def test_match_by_title():
    assert chat_matches(_chat(title="IOGR Bot Commands"), "iogr bot commands")


def test_match_by_resolved_id():
    assert chat_matches(_chat(id=55), "@renamed", resolved_id=55)


def test_empty_reference_never_matches():
    assert not chat_matches(_chat(username="x"), "")


def test_sender_name_prefers_username():
    assert sender_name(SimpleNamespace(username="speedy", first_name="Sam")) == "speedy"
    assert sender_name(SimpleNamespace(username=None, first_name="Sam")) == "Sam"
    assert sender_name(SimpleNamespace(username=None, first_name=None)) == "unknown"


def test_sender_name_is_stripped():
    assert sender_name(SimpleNamespace(username=None, first_name=" Sam ")) == "Sam"
    assert sender_name(SimpleNamespace(username=None, first_name="  ")) == "unknown"


# --- inbound filtering and delivery, with fake Telegram objects ---

BOT_ID = 999
COMMAND_CHAT = SimpleNamespace(id=-100, username="iogr_bot", title="IOGR Bot")
OTHER_CHAT = SimpleNamespace(id=-200, username="elsewhere", title="Elsewhere")


class FakeTelegram:
    """Stands in for Application.bot: records sends."""

    def __init__(self):
        self.sent = []

    async def send_message(self, chat_id, text):
        self.sent.append((chat_id, text))


class FakeMessage:
    def __init__(self, text, chat=COMMAND_CHAT):
        self.text = text
        self.chat = chat
        self.chat_id = chat.id
        self.deleted = False

    async def delete(self):
        self.deleted = True


def _user(id=1, username="carol"):
    return SimpleNamespace(id=id, username=username, first_name=None)


def _make_bot(board=None):
    config = BotConfiguration(
        admin_username="speedy_admin",
        announcement_channel="@iogr_announcements",
        command_listening_channel="@iogr_bot",
        high_score_channel="@iogr_highscores",
    )
    bot = TelegramBot(config, board if board is not None else Leaderboard(),
                      lambda: "https://example.org/permalink/1")
    bot._app = SimpleNamespace(bot=FakeTelegram())
    bot._resolved = {LEADERBOARD_CHANNEL: -300}
    return bot


def _handle(bot, message, user):
    async def go():
        bot._stop_event = asyncio.Event()
        update = SimpleNamespace(effective_message=message, effective_user=user)
        context = SimpleNamespace(bot=SimpleNamespace(id=BOT_ID))
        await bot._handle_message(update, context)
        return bot._stop_event.is_set()
    return asyncio.run(go())


def test_command_line_filter():
    bot = _make_bot()
    assert bot._is_command_line(FakeMessage("!ping"), _user(), BOT_ID)
    assert not bot._is_command_line(FakeMessage("!ping"), _user(id=BOT_ID), BOT_ID)
    assert not bot._is_command_line(FakeMessage("!ping"), None, BOT_ID)
    assert not bot._is_command_line(FakeMessage("!ping", chat=OTHER_CHAT), _user(), BOT_ID)
    assert not bot._is_command_line(FakeMessage("ping"), _user(), BOT_ID)


@pytest.mark.parametrize("message, user", [
    (FakeMessage("!ping"), _user(id=BOT_ID)),
    (FakeMessage("!ping", chat=OTHER_CHAT), _user()),
    (FakeMessage("ping"), _user()),
])
def test_ignored_lines_get_no_reply(message, user):
    bot = _make_bot()
    _handle(bot, message, user)
    assert bot._app.bot.sent == []
    assert not message.deleted


def test_reply_goes_to_originating_chat():
    bot = _make_bot()
    _handle(bot, FakeMessage("!ping"), _user())
    assert bot._app.bot.sent == [(COMMAND_CHAT.id, "pong!")]


def test_submit_delivers_to_channels_and_deletes():
    board = Leaderboard()
    bot = _make_bot(board)
    message = FakeMessage("!submit 01:00:00")
    _handle(bot, message, _user())
    assert bot._app.bot.sent == [
        ("@iogr_bot", "GG carol!"),               # unresolved: sent to the configured name
        (-300, "#1. carol — 01:00:00"),           # resolved leaderboard channel id
    ]
    assert message.deleted
    assert board.get("carol") is not None


def test_private_replies_go_to_the_user_and_message_is_deleted():
    bot = _make_bot()
    message = FakeMessage("!submit bad-time")
    _handle(bot, message, _user(id=42))
    assert bot._app.bot.sent == [(42, "Invalid time format. Use hh:mm:ss")]
    assert message.deleted


def test_sleep_from_admin_sets_stop_event():
    bot = _make_bot()
    stopping = _handle(bot, FakeMessage("!sleep"), _user(username="speedy_admin"))
    assert stopping
    assert bot._app.bot.sent == [(COMMAND_CHAT.id, "Goodnight!")]


def test_sleep_from_anyone_else_does_not_stop():
    bot = _make_bot()
    assert not _handle(bot, FakeMessage("!sleep"), _user())
