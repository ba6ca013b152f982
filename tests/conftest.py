"""Shared fixtures for bot-level tests."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from commandbot.chat_adapters.i_chat_adapter import IChatAdapter
from commandbot.core.config import BotConfig
from commandbot.core.models import Presence


class DummyChatAdapter(IChatAdapter):
    """Captures messages the bot sends instead of talking to a transport."""

    def __init__(self, name: Optional[str] = "dummybot") -> None:
        self.messages: List[Dict[str, str]] = []
        self.presence_updates: List[tuple] = []
        self.started = False
        self.stopped = False
        self._name = name

    @property
    def is_connected(self) -> bool:
        return self.started and not self.stopped

    @property
    def bot_name(self) -> Optional[str]:
        return self._name

    async def send_message(self, recipient: str, text: str) -> None:
        self.messages.append({"recipient": recipient, "text": text})

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True

    async def set_presence(self, presence: Optional[Presence], status: Optional[str]) -> None:
        self.presence_updates.append((presence, status))


@pytest.fixture
def chat_adapter():
    return DummyChatAdapter()


@pytest.fixture
def private_config():
    return BotConfig(masters=("UMASTER",), is_public=False)


@pytest.fixture
def public_config():
    return BotConfig(masters=("UMASTER", "UOTHERMASTER"), is_public=True)
