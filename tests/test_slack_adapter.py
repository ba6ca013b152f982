"""Tests for SlackAdapter event filtering and sending."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from slack_sdk.errors import SlackApiError

from commandbot.chat_adapters.slack_adapter import SlackAdapter, extract_chat_message
from commandbot.core.errors import SlackError
from commandbot.core.models import InboundMessage, Presence


def _dm(**overrides):
    event = {
        "type": "message",
        "channel_type": "im",
        "channel": "D123",
        "user": "U123",
        "text": "help",
    }
    event.update(overrides)
    return event


class TestExtractChatMessage:
    def test_plain_direct_message(self):
        assert extract_chat_message(_dm()) == InboundMessage(sender="U123", text="help")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"type": "app_mention"},
            {"subtype": "message_changed"},
            {"bot_id": "B1"},
            {"channel_type": "channel"},
            {"user": None},
            {"text": "   "},
            {"text": None},
        ],
    )
    def test_other_events_ignored(self, overrides):
        assert extract_chat_message(_dm(**overrides)) is None

    def test_own_messages_ignored(self):
        assert extract_chat_message(_dm(user="UBOT"), bot_user_id="UBOT") is None


class TestSlackAdapter:
    @pytest.fixture
    def received(self):
        return []

    @pytest.fixture
    def adapter(self, received):
        async def _handle(message):
            received.append(message)

        return SlackAdapter(
            bot_token="xoxb-test",
            app_token="xapp-test",
            handle_message=_handle,
            user_token="xoxp-test",
        )

    @pytest.mark.asyncio
    async def test_socket_request_forwards_direct_message(self, adapter, received):
        client = SimpleNamespace(send_socket_mode_response=AsyncMock())
        request = SimpleNamespace(type="events_api", envelope_id="env-1", payload={"event": _dm(text="add 2 3")})

        await adapter._handle_socket_request(client, request)

        client.send_socket_mode_response.assert_awaited_once()
        assert received == [InboundMessage(sender="U123", text="add 2 3")]

    @pytest.mark.asyncio
    async def test_socket_request_acknowledges_other_types(self, adapter, received):
        client = SimpleNamespace(send_socket_mode_response=AsyncMock())
        request = SimpleNamespace(type="slash_commands", envelope_id="env-2", payload={})

        await adapter._handle_socket_request(client, request)

        client.send_socket_mode_response.assert_awaited_once()
        assert received == []

    @pytest.mark.asyncio
    async def test_send_message_posts_to_recipient(self, adapter):
        adapter._web_client.chat_postMessage = AsyncMock()

        await adapter.send_message("U123", "5")

        adapter._web_client.chat_postMessage.assert_awaited_once_with(channel="U123", text="5")

    @pytest.mark.asyncio
    async def test_send_message_wraps_api_errors(self, adapter):
        adapter._web_client.chat_postMessage = AsyncMock(
            side_effect=SlackApiError("boom", {"ok": False, "error": "channel_not_found"})
        )

        with pytest.raises(SlackError):
            await adapter.send_message("U123", "5")

    @pytest.mark.asyncio
    async def test_set_presence_logs_failures(self, adapter, caplog):
        adapter._user_client.users_setPresence = AsyncMock(
            side_effect=SlackApiError("boom", {"ok": False, "error": "not_allowed_token_type"})
        )

        await adapter.set_presence(Presence.AWAY, None)

        assert "Failed to update Slack presence" in caplog.text

    @pytest.mark.asyncio
    async def test_set_presence_and_status(self, adapter):
        adapter._user_client.users_setPresence = AsyncMock()
        adapter._user_client.users_profile_set = AsyncMock()

        await adapter.set_presence(Presence.AUTO, "Here")

        adapter._user_client.users_setPresence.assert_awaited_once_with(presence="auto")
        adapter._user_client.users_profile_set.assert_awaited_once_with(profile={"status_text": "Here"})

    def test_not_connected_before_start(self, adapter):
        assert adapter.is_connected is False
        assert adapter.bot_name is None

    @pytest.mark.asyncio
    async def test_presence_skipped_without_user_token(self, received, caplog):
        async def _handle(message):
            received.append(message)

        bot_only = SlackAdapter(bot_token="xoxb-test", app_token="xapp-test", handle_message=_handle)
        bot_only._web_client.users_setPresence = AsyncMock()
        bot_only._web_client.users_profile_set = AsyncMock()

        with caplog.at_level("INFO"):
            await bot_only.set_presence(Presence.AWAY, "Out to lunch")

        bot_only._web_client.users_setPresence.assert_not_awaited()
        bot_only._web_client.users_profile_set.assert_not_awaited()
        assert "No Slack user token configured" in caplog.text
