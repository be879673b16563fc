"""Tests for the Telegram surface."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import bot
from orchestrator import Orchestrator

from conftest import FIXED_NOW


def make_update(chat_id=456, text="London"):
    update = MagicMock()
    update.effective_chat.id = chat_id
    update.message.text = text
    update.message.reply_text = AsyncMock()
    return update


@pytest.fixture(autouse=True)
def chats(fetch):
    bot._chats.clear()
    with patch("bot.Orchestrator", lambda: Orchestrator(fetch=fetch, clock=lambda: FIXED_NOW)):
        yield bot._chats
    bot._chats.clear()


class TestWeatherCommand:
    @pytest.mark.asyncio
    async def test_replies_with_rendered_weather(self):
        update = make_update()
        context = MagicMock(args=["London"])
        await bot.cmd_weather(update, context)
        reply = update.message.reply_text.call_args.args[0]
        assert reply.startswith("London, United Kingdom")
        assert "Humidity: 82%" in reply

    @pytest.mark.asyncio
    async def test_multi_word_city(self, fetch):
        update = make_update()
        await bot.cmd_weather(update, MagicMock(args=["New", "York"]))
        assert fetch.calls == ["New York"]
        reply = update.message.reply_text.call_args.args[0]
        assert reply == "⚠ City 'New York' not found."

    @pytest.mark.asyncio
    async def test_usage_without_args(self, fetch):
        update = make_update()
        await bot.cmd_weather(update, MagicMock(args=[]))
        update.message.reply_text.assert_awaited_once_with("Usage: /weather <city>")
        assert fetch.calls == []


class TestMessages:
    @pytest.mark.asyncio
    async def test_plain_text_is_a_city(self):
        update = make_update(text="London")
        await bot.handle_message(update, MagicMock())
        assert "Slight rain" in update.message.reply_text.call_args.args[0]

    @pytest.mark.asyncio
    async def test_blank_text_is_ignored(self, fetch):
        update = make_update(text="   ")
        await bot.handle_message(update, MagicMock())
        update.message.reply_text.assert_not_awaited()
        assert fetch.calls == []

    @pytest.mark.asyncio
    async def test_each_chat_keeps_its_own_view(self, chats):
        await bot.handle_message(make_update(chat_id=1, text="London"), MagicMock())
        update = make_update(chat_id=2, text="Offline")
        await bot.handle_message(update, MagicMock())

        assert chats[1].state.result_visible
        assert not chats[2].state.result_visible
        assert update.message.reply_text.call_args.args[0] == "⚠ Connection refused"

    @pytest.mark.asyncio
    async def test_error_keeps_previous_result_in_chat(self):
        await bot.handle_message(make_update(text="London"), MagicMock())
        update = make_update(text="Offline")
        await bot.handle_message(update, MagicMock())
        reply = update.message.reply_text.call_args.args[0]
        assert reply.startswith("⚠ Connection refused")
        assert "London, United Kingdom" in reply


class TestChatViews:
    def test_same_chat_reuses_orchestrator(self):
        assert bot.orchestrator_for(1) is bot.orchestrator_for(1)

    def test_least_recently_used_chat_dropped(self, chats):
        with patch("bot.MAX_CHATS", 2):
            first = bot.orchestrator_for(1)
            bot.orchestrator_for(2)
            assert bot.orchestrator_for(1) is first  # touch 1, so 2 is oldest
            bot.orchestrator_for(3)
        assert list(chats) == [1, 3]

    def test_map_never_exceeds_limit(self, chats):
        with patch("bot.MAX_CHATS", 3):
            for chat_id in range(10):
                bot.orchestrator_for(chat_id)
        assert list(chats) == [7, 8, 9]


class TestAuth:
    @pytest.mark.asyncio
    async def test_other_chats_rejected(self, fetch):
        update = make_update(chat_id=999)
        with patch("bot.OWNER_CHAT_ID", 123):
            await bot.handle_message(update, MagicMock())
        update.message.reply_text.assert_awaited_once_with("Not authorized.")
        assert fetch.calls == []

    @pytest.mark.asyncio
    async def test_owner_allowed(self):
        update = make_update(chat_id=123)
        with patch("bot.OWNER_CHAT_ID", 123):
            await bot.handle_message(update, MagicMock())
        assert "London" in update.message.reply_text.call_args.args[0]
