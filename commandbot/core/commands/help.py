"""Builds the text returned by the builtin ``help`` command."""

from __future__ import annotations

from .authorizer import Authorizer
from .base import Parameters
from .registry import CommandRegistry

HELP_SYNTAX = "help [<command>]"
HELP_DESCRIPTION = "Display help for the given command, or all commands if no command is specified"
HELP_PATTERN = r"^help\s?(.+?)?$"
HELP_ALIAS_SYNTAX = "? [<command>]"
HELP_ALIAS_PATTERN = r"^\?(\s+?.+?)?$"

HELP_HEADER = "I understand the following commands:"
UNKNOWN_TOPIC_TEMPLATE = (
    "I don't understand '{topic}' Try saying 'help' to see what commands I understand."
)


class HelpGenerator:
    """Lists the commands a sender is allowed to see."""

    def __init__(self, registry: CommandRegistry, authorizer: Authorizer) -> None:
        self._registry = registry
        self._authorizer = authorizer

    def help_message(self, sender: str, topic: Parameters = None) -> str:
        if isinstance(topic, list):
            topic = " ".join(part for part in topic if part)
        name = (topic or "").strip()
        if not name:
            return self.build_listing(sender)
        return self.build_topic(sender, name)

    def build_listing(self, sender: str) -> str:
        chunks = [HELP_HEADER + "\n\n"]
        for command in self._registry.by_name_sorted():
            if command.is_alias or not self._authorizer.authorized(sender, command):
                continue
            chunks.append(command.help_text())
        return "".join(chunks)

    def build_topic(self, sender: str, name: str) -> str:
        """Help for one command.

        Commands the sender may not use are answered like unknown names, so
        help never reveals that a hidden command exists.
        """
        command = self._registry.named(name)
        if command is None or not self._authorizer.authorized(sender, command):
            return UNKNOWN_TOPIC_TEMPLATE.format(topic=name)
        return command.help_text()
