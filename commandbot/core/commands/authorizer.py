"""Decides which senders may invoke which commands."""

from __future__ import annotations

from typing import Iterable, Tuple

from .registry import Command


class Authorizer:
    """Combines the bot's public flag, a command's visibility and the master list."""

    def __init__(self, masters: Iterable[str], agent_is_public: bool = False) -> None:
        self._masters: Tuple[str, ...] = tuple(dict.fromkeys(masters))
        self._agent_is_public = bool(agent_is_public)

    @property
    def masters(self) -> Tuple[str, ...]:
        return self._masters

    @property
    def agent_is_public(self) -> bool:
        return self._agent_is_public

    def is_master(self, sender: str) -> bool:
        return sender in self._masters

    def authorized(self, sender: str, command: Command) -> bool:
        if self.is_master(sender):
            return True
        return self._agent_is_public and command.is_public
