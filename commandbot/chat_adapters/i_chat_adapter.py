"""Chat adapter abstraction."""

from __future__ import annotations

import abc
from typing import Awaitable, Callable, Optional

from ..core.models import InboundMessage, Presence

MessageHandler = Callable[[InboundMessage], Awaitable[None]]


class IChatAdapter(abc.ABC):
    """Abstraction for chat platform integrations (Slack, XMPP, etc.).

    ``send_message`` may be called concurrently from the listener and from
    other call sites, so implementations must tolerate overlapping sends.
    """

    @abc.abstractmethod
    async def send_message(self, recipient: str, text: str) -> None:
        """Send a plain chat message to a single identity."""

    @abc.abstractmethod
    async def start(self) -> None:
        """Connect and begin delivering inbound messages to the handler."""

    @abc.abstractmethod
    async def stop(self) -> None:
        """Shutdown the adapter."""

    @property
    @abc.abstractmethod
    def is_connected(self) -> bool:
        """Whether the adapter currently holds a live connection."""

    @property
    def bot_name(self) -> Optional[str]:
        """Display name the transport knows the bot by, when available."""
        return None

    async def set_presence(self, presence: Optional[Presence], status: Optional[str]) -> None:
        """Publish presence and status. Transports without presence ignore it."""
        return None
