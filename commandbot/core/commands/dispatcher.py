"""Routes inbound chat messages to registered command callbacks."""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Optional

from .authorizer import Authorizer
from .base import BaseCommandHandler, SendMessageFn
from .registry import CommandRegistry

LOGGER = logging.getLogger(__name__)

MISUNDERSTOOD_TEMPLATE = (
    "I don't understand '{text}' Try saying 'help' to see what commands I understand."
)


class DispatchOutcome(str, Enum):
    IGNORED_EMPTY = "ignored_empty"
    MISUNDERSTOOD = "misunderstood"
    UNAUTHORIZED = "unauthorized"
    HANDLED = "handled"
    FAILED = "failed"


class CommandDispatcher(BaseCommandHandler):
    """Matches text against the registry, authorizes the sender and runs the callback.

    Messages are handled one at a time by the caller; a slow callback delays
    every message queued behind it.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        authorizer: Authorizer,
        send_message: Optional[SendMessageFn] = None,
        misunderstood_message: bool = True,
    ) -> None:
        super().__init__(send_message)
        self._registry = registry
        self._authorizer = authorizer
        self._misunderstood_message = misunderstood_message

    @property
    def misunderstood_message(self) -> bool:
        return self._misunderstood_message

    async def dispatch(self, sender: str, text: str) -> DispatchOutcome:
        text = (text or "").strip()
        if not text:
            return DispatchOutcome.IGNORED_EMPTY

        found = self._registry.find_match(text)
        if found is None:
            LOGGER.debug("No command matches message from %s", sender)
            if self._misunderstood_message:
                await self._reply(sender, MISUNDERSTOOD_TEMPLATE.format(text=text))
            return DispatchOutcome.MISUNDERSTOOD

        command, captures = found
        if not self._authorizer.authorized(sender, command):
            # Unauthorized senders get no hint that the command exists.
            LOGGER.info("Ignoring command %s from unauthorized sender %s", command.name, sender)
            return DispatchOutcome.UNAUTHORIZED

        params = command.extract_parameters(captures)
        LOGGER.info("Running command %s for %s", command.name, sender)
        try:
            response = command.callback(sender, params)
            if inspect.isawaitable(response):
                response = await response
        except Exception:
            LOGGER.exception("Command %s failed for sender %s", command.name, sender)
            return DispatchOutcome.FAILED

        if response is None:
            return DispatchOutcome.HANDLED
        response_text = str(response)
        if response_text:
            await self._reply(sender, response_text)
        return DispatchOutcome.HANDLED
