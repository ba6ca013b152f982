"""Registry of the commands a bot understands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import DuplicateCommand, InvalidCommand
from ..models import PatternLike
from .base import CommandCallback, Parameters
from .matcher import NO_MATCH, MatchResult, PatternMatcher

LOGGER = logging.getLogger(__name__)

SYNTAX_PREFIX = "- "
DESCRIPTION_INDENT = "  "


def command_name(syntax: str) -> str:
    """Return the first whitespace-delimited token of ``syntax``."""
    parts = syntax.strip().split(None, 1)
    return parts[0] if parts else ""


@dataclass
class Command:
    """A named dispatch entry: syntax forms, matchers, visibility and callback."""

    name: str
    description: str
    callback: CommandCallback
    is_public: bool = False
    is_alias: bool = False
    syntax_forms: List[str] = field(default_factory=list)
    matchers: List[PatternMatcher] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        syntax: Optional[str],
        description: str,
        pattern: PatternLike,
        callback: CommandCallback,
        is_public: bool = False,
    ) -> "Command":
        if not syntax or not syntax.strip():
            raise InvalidCommand("Command missing syntax")
        if not callable(callback):
            raise InvalidCommand(f"Command {syntax!r} has no callable callback")
        return cls(
            name=command_name(syntax),
            description=description or "",
            callback=callback,
            is_public=bool(is_public),
            syntax_forms=[syntax],
            matchers=[PatternMatcher(pattern)],
        )

    @property
    def syntax(self) -> str:
        return self.syntax_forms[0]

    def add_alias(self, syntax: str, pattern: PatternLike) -> "Command":
        """Attach an alias form and return the alias entry to be registered.

        The alias shares this command's callback and copies its visibility as
        it is right now.
        """
        alias = Command.create(syntax, self.description, pattern, self.callback, self.is_public)
        alias.is_alias = True
        self.syntax_forms.append(alias.syntax)
        self.matchers.append(alias.matchers[0])
        return alias

    def matches(self, text: str) -> MatchResult:
        for matcher in self.matchers:
            result = matcher.try_match(text)
            if result:
                return result
        return NO_MATCH

    @staticmethod
    def extract_parameters(captures: Sequence[Optional[str]]) -> Parameters:
        """Shape captures for the callback: nothing, a single value, or a list."""
        if len(captures) == 0:
            return None
        if len(captures) == 1:
            return captures[0]
        return list(captures)

    def help_text(self) -> str:
        lines = [f"{SYNTAX_PREFIX}{form}" for form in self.syntax_forms]
        lines.append(f"{DESCRIPTION_INDENT}{self.description}")
        return "\n".join(lines) + "\n\n"


class CommandRegistry:
    """Thread-safe store of commands, scanned in registration order."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._ordered: List[Command] = []
        self._lock = RLock()

    def add(self, command: Command) -> Command:
        with self._lock:
            if command.name in self._commands:
                raise DuplicateCommand(command.name)
            self._commands[command.name] = command
            self._ordered.append(command)
        LOGGER.debug("Registered command %s (public=%s, alias=%s)", command.name, command.is_public, command.is_alias)
        return command

    def add_alias(self, command: Command, syntax: str, pattern: PatternLike) -> Command:
        name = command_name(syntax or "")
        with self._lock:
            if name in self._commands:
                raise DuplicateCommand(name)
            alias = command.add_alias(syntax, pattern)
            return self.add(alias)

    def find_match(self, text: str) -> Optional[Tuple[Command, Tuple[Optional[str], ...]]]:
        for command in self._snapshot():
            result = command.matches(text)
            if result:
                return command, result.captures
        return None

    def by_name_sorted(self) -> Iterator[Command]:
        """Yield commands alphabetically by name; each call starts afresh."""
        for command in sorted(self._snapshot(), key=lambda item: item.name):
            yield command

    def named(self, name: str) -> Optional[Command]:
        with self._lock:
            return self._commands.get(name)

    def _snapshot(self) -> Tuple[Command, ...]:
        with self._lock:
            return tuple(self._ordered)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._ordered)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._commands
