"""Slack adapter using the official Slack SDK."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from slack_sdk.errors import SlackApiError
from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse
from slack_sdk.web.async_client import AsyncWebClient

from .i_chat_adapter import IChatAdapter, MessageHandler
from ..core.errors import SlackError
from ..core.models import InboundMessage, Presence

LOGGER = logging.getLogger(__name__)


def extract_chat_message(
    event: Dict[str, Any], bot_user_id: Optional[str] = None
) -> Optional[InboundMessage]:
    """Return the plain direct message carried by ``event``, if any.

    Channel chatter, edits, bot posts and the bot's own messages never reach
    the dispatcher.
    """
    if event.get("type") != "message":
        return None
    if event.get("subtype") or event.get("bot_id"):
        return None
    if event.get("channel_type") != "im":
        return None
    user = event.get("user")
    text = event.get("text") or ""
    if not user or (bot_user_id and user == bot_user_id):
        return None
    if not text.strip():
        return None
    return InboundMessage(sender=user, text=text)


class SlackAdapter(IChatAdapter):
    def __init__(
        self,
        bot_token: str,
        app_token: str,
        handle_message: MessageHandler,
        user_token: Optional[str] = None,
    ) -> None:
        self._web_client = AsyncWebClient(token=bot_token)
        self._user_client = AsyncWebClient(token=user_token) if user_token else None
        self._app_token = app_token
        self._client: Optional[SocketModeClient] = None
        self._handle_message = handle_message
        self._bot_user_id: Optional[str] = None
        self._bot_name: Optional[str] = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def bot_name(self) -> Optional[str]:
        return self._bot_name

    async def send_message(self, recipient: str, text: str) -> None:
        try:
            await self._web_client.chat_postMessage(channel=recipient, text=text)
        except SlackApiError as exc:
            raise SlackError(f"Failed to send Slack message: {exc}") from exc

    async def start(self) -> None:
        try:
            identity = await self._web_client.auth_test()
        except SlackApiError as exc:
            raise SlackError(f"Slack authentication failed: {exc}") from exc
        self._bot_user_id = identity.get("user_id")
        self._bot_name = identity.get("user")

        LOGGER.info("Connecting to Slack via Socket Mode as %s", self._bot_name)
        self._client = SocketModeClient(app_token=self._app_token, web_client=self._web_client)
        self._client.socket_mode_request_listeners.append(self._handle_socket_request)
        await self._client.connect()
        self._connected = True

    async def stop(self) -> None:
        self._connected = False
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def set_presence(self, presence: Optional[Presence], status: Optional[str]) -> None:
        """Publish presence and status through the user token.

        Slack only accepts users.setPresence and users.profile.set from a user
        token (SLACK_USER_TOKEN); without one the update is skipped.
        """
        if self._user_client is None:
            LOGGER.info("No Slack user token configured; skipping presence/status update")
            return
        try:
            if presence is not None:
                await self._user_client.users_setPresence(presence=presence.value)
            if status is not None:
                await self._user_client.users_profile_set(profile={"status_text": status})
        except SlackApiError as exc:
            LOGGER.warning("Failed to update Slack presence/status: %s", exc)

    async def _handle_socket_request(
        self,
        client: SocketModeClient,
        req: SocketModeRequest,
    ) -> None:
        await client.send_socket_mode_response(SocketModeResponse(envelope_id=req.envelope_id))
        if req.type != "events_api":
            return

        payload = req.payload or {}
        event = payload.get("event", {})
        message = extract_chat_message(event, self._bot_user_id)
        if message is None:
            LOGGER.debug(
                "Ignoring Slack event type %s with subtype %s, channel_type %s",
                event.get("type"),
                event.get("subtype"),
                event.get("channel_type"),
            )
            return

        await self._handle_message(message)
