"""Shared fixtures for command engine tests."""

from __future__ import annotations

import pytest

from commandbot.core.commands.authorizer import Authorizer
from commandbot.core.commands.registry import Command, CommandRegistry

MASTER = "UMASTER"
STRANGER = "USTRANGER"


@pytest.fixture
def mock_send_message():
    """Async mock for send_message that prints to terminal."""

    messages: list[dict[str, str]] = []

    async def _send(recipient: str, text: str):
        print(f"\n{'='*60}")
        print("CHAT OUTPUT")
        print(f"   To: {recipient}")
        print(f"{'-'*60}")
        print(f"{text}")
        print(f"{'='*60}\n")
        messages.append({"recipient": recipient, "text": text})

    _send.messages = messages  # type: ignore[attr-defined]
    return _send


@pytest.fixture
def registry():
    return CommandRegistry()


@pytest.fixture
def private_authorizer():
    return Authorizer([MASTER], agent_is_public=False)


@pytest.fixture
def public_authorizer():
    return Authorizer([MASTER], agent_is_public=True)


@pytest.fixture
def make_command():
    """Build a Command with a no-op callback unless one is given."""

    def _make(syntax, pattern, callback=None, is_public=False, description="test command"):
        return Command.create(
            syntax,
            description,
            pattern,
            callback or (lambda sender, params: None),
            is_public,
        )

    return _make
