"""Common types and helpers for command handlers."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, List, Optional, Union

Parameters = Union[None, str, List[Optional[str]]]
CommandCallback = Callable[[str, Parameters], Any]
SendMessageFn = Callable[[str, str], Awaitable[None]]


class BaseCommandHandler:
    """Provides helper methods for replying to a sender."""

    def __init__(self, send_message: Optional[SendMessageFn] = None) -> None:
        self._send_message = send_message

    async def _reply(self, recipient: str, text: str) -> None:
        if not self._send_message:
            raise RuntimeError("send_message not bound for command handler")
        await self._send_message(recipient, text)
