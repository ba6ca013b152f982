"""The bot: owns one command registry and routes transport messages through it."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence, Tuple, Union

from .commands.authorizer import Authorizer
from .commands.base import CommandCallback
from .commands.dispatcher import CommandDispatcher
from .commands.help import (
    HELP_ALIAS_PATTERN,
    HELP_ALIAS_SYNTAX,
    HELP_DESCRIPTION,
    HELP_PATTERN,
    HELP_SYNTAX,
    HelpGenerator,
)
from .commands.registry import Command, CommandRegistry
from .config import BotConfig
from .errors import CommandBotError
from .models import CommandAlias, InboundMessage, PatternLike, Presence

if TYPE_CHECKING:
    from ..chat_adapters.i_chat_adapter import IChatAdapter

LOGGER = logging.getLogger(__name__)

DEFAULT_BOT_NAME = "bot"

AliasSpec = Union[CommandAlias, Tuple[str, PatternLike]]


class Bot:
    """Chat bot that understands a registered set of commands.

    By default the bot knows a single command, ``help [<command>]`` (alias
    ``?``), which lists every command the asking sender may use. Masters may
    use every command. Anyone else may only use commands registered with
    ``is_public=True``, and only when the bot itself is public.

    Inbound messages are queued and handled by a single listener task, one
    at a time and in arrival order. A callback that blocks stalls every
    message behind it.
    """

    def __init__(self, config: BotConfig, adapter: Optional[IChatAdapter] = None) -> None:
        self._config = config
        self._registry = CommandRegistry()
        self._authorizer = Authorizer(config.masters, config.is_public)
        self._dispatcher = CommandDispatcher(
            registry=self._registry,
            authorizer=self._authorizer,
            send_message=self.deliver,
            misunderstood_message=config.misunderstood_message,
        )
        self._help = HelpGenerator(self._registry, self._authorizer)
        self._chat_adapter = adapter
        self._inbox: asyncio.Queue[InboundMessage] = asyncio.Queue()
        self._listener_task: Optional[asyncio.Task[None]] = None

        self.add_command(
            syntax=HELP_SYNTAX,
            description=HELP_DESCRIPTION,
            pattern=HELP_PATTERN,
            callback=self._help.help_message,
            is_public=config.is_public,
            aliases=[CommandAlias(HELP_ALIAS_SYNTAX, HELP_ALIAS_PATTERN)],
        )

    @property
    def config(self) -> BotConfig:
        return self._config

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def masters(self) -> Tuple[str, ...]:
        return self._authorizer.masters

    @property
    def name(self) -> str:
        if self._config.name:
            return self._config.name
        if self._chat_adapter and self._chat_adapter.bot_name:
            return self._chat_adapter.bot_name
        return DEFAULT_BOT_NAME

    @property
    def is_connected(self) -> bool:
        return bool(self._chat_adapter and self._chat_adapter.is_connected)

    def bind_adapter(self, adapter: IChatAdapter) -> None:
        """Attach the chat adapter so the bot can send replies."""

        self._chat_adapter = adapter

    def add_command(
        self,
        syntax: str,
        description: str,
        pattern: PatternLike,
        callback: CommandCallback,
        *,
        is_public: bool = False,
        aliases: Sequence[AliasSpec] = (),
    ) -> Command:
        """Add a command to the bot's repertoire.

        Parameters are taken from the capture groups in ``pattern``. The
        callback receives the sender and ``None`` (no groups), a string (one
        group) or a list of strings (several groups), and returns the reply
        text or ``None``.

            bot.add_command(
                syntax="puts <string>",
                description="Write something to the log",
                pattern=r"^puts\\s+(.+)$",
                callback=lambda sender, message: f"'{message}' logged.",
                aliases=[("p <string>", r"^p\\s+(.+)$")],
            )
        """
        command = self._registry.add(
            Command.create(syntax, description, pattern, callback, is_public)
        )
        for alias in aliases:
            alias_syntax, alias_pattern = _unpack_alias(alias)
            self._registry.add_alias(command, alias_syntax, alias_pattern)
        return command

    def command(
        self,
        syntax: str,
        description: str,
        pattern: PatternLike,
        *,
        is_public: bool = False,
        aliases: Sequence[AliasSpec] = (),
    ) -> Callable[[CommandCallback], CommandCallback]:
        """Decorator form of :meth:`add_command`."""

        def decorator(callback: CommandCallback) -> CommandCallback:
            self.add_command(
                syntax, description, pattern, callback, is_public=is_public, aliases=aliases
            )
            return callback

        return decorator

    async def deliver(self, to: Union[str, Iterable[str]], text: str) -> None:
        """Send ``text`` to one recipient or to each of several."""
        recipients = [to] if isinstance(to, str) else list(to)
        if not self._chat_adapter:
            LOGGER.warning("Chat adapter not bound; dropping message: %s", text)
            return
        for recipient in recipients:
            try:
                await self._chat_adapter.send_message(recipient, text)
            except CommandBotError as exc:
                LOGGER.warning("Failed to deliver message to %s: %s", recipient, exc)

    async def handle_message(self, message: InboundMessage) -> None:
        """Queue an inbound message for the listener."""
        await self._inbox.put(message)

    def start_listener(self) -> None:
        if self._listener_task is None or self._listener_task.done():
            self._listener_task = asyncio.create_task(self._listen())

    async def stop_listener(self) -> None:
        task, self._listener_task = self._listener_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def join(self) -> None:
        """Wait until every queued message has been handled."""
        await self._inbox.join()

    async def connect(self) -> None:
        """Connect the transport, greet the masters and start listening."""
        if not self._chat_adapter:
            raise RuntimeError("Chat adapter not bound; cannot connect")
        await self._chat_adapter.start()
        self.start_listener()
        try:
            startup = self._config.startup_message.replace("NAME", self.name)
            await self.deliver(self.masters, startup)
            if self._config.presence is not None or self._config.status is not None:
                await self._chat_adapter.set_presence(self._config.presence, self._config.status)
        except Exception:
            await self.stop_listener()
            await self._chat_adapter.stop()
            raise
        LOGGER.info("%s connected with %s command(s)", self.name, len(self._registry))

    async def disconnect(self) -> None:
        """Say goodbye to the masters and close the transport."""
        if not self.is_connected:
            await self.stop_listener()
            return
        await self.deliver(self.masters, f"{self.name} disconnecting...")
        await self.stop_listener()
        await self._chat_adapter.stop()
        LOGGER.info("%s disconnected", self.name)

    async def presence(
        self, presence: Optional[Presence] = None, status: Optional[str] = None
    ) -> None:
        """Set the bot presence and status message."""
        self._config.presence = presence
        self._config.status = status
        if self.is_connected:
            await self._chat_adapter.set_presence(presence, status)

    async def set_presence(self, presence: Optional[Presence]) -> None:
        await self.presence(presence, self._config.status)

    async def set_status(self, status: Optional[str]) -> None:
        await self.presence(self._config.presence, status)

    async def _listen(self) -> None:
        while True:
            message = await self._inbox.get()
            try:
                await self._dispatcher.dispatch(message.sender, message.text)
            except Exception:
                LOGGER.exception("Failed to handle message from %s", message.sender)
            finally:
                self._inbox.task_done()


def _unpack_alias(alias: AliasSpec) -> Tuple[str, PatternLike]:
    if isinstance(alias, CommandAlias):
        return alias.syntax, alias.pattern
    syntax, pattern = alias
    return syntax, pattern
