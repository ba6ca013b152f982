"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
import os
import signal
from pathlib import Path
from typing import Optional, Sequence

from .chat_adapters.slack_adapter import SlackAdapter
from .core import Bot, BotConfig, ConfigError, load_config
from .core.config import resolve_config_dir

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="commandbot",
        description="commandbot - chat bot that runs pattern-matched commands",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding .env and bot.yaml (default: ~/.commandbot)",
    )
    parser.add_argument(
        "--commands",
        help="Python module whose setup(bot) function registers commands",
    )
    args = parser.parse_args(argv)

    try:
        asyncio.run(_run_async(args.config_dir, args.commands))
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user")
        return 130
    return 0


def register_commands(bot: Bot, module_name: Optional[str]) -> None:
    """Import ``module_name`` and let its ``setup(bot)`` add commands."""
    if not module_name:
        LOGGER.info("No commands module configured; only builtin commands are available")
        return
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import commands module {module_name}: {exc}") from exc
    setup = getattr(module, "setup", None)
    if not callable(setup):
        raise ConfigError(f"Commands module {module_name} has no setup(bot) function")
    setup(bot)
    LOGGER.info("Loaded commands from %s", module_name)


async def _run_async(config_dir: str | Path | None, commands_module: Optional[str]) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    resolved_dir = resolve_config_dir(config_dir)
    LOGGER.info("Using config directory: %s", resolved_dir)

    config: BotConfig = load_config(resolved_dir)

    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.getLogger().setLevel(log_level)

    LOGGER.info(
        "Loaded config with %s master(s); public=%s",
        len(config.masters),
        config.is_public,
    )

    bot = Bot(config)
    register_commands(bot, commands_module or config.commands_module)
    slack_adapter = SlackAdapter(
        bot_token=config.slack_bot_token,
        app_token=config.slack_app_token,
        handle_message=bot.handle_message,
        user_token=config.slack_user_token,
    )
    bot.bind_adapter(slack_adapter)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _request_shutdown() -> None:
        LOGGER.info("Shutdown requested")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_shutdown)
        except NotImplementedError:
            # Windows event loops before 3.11 do not support signal handlers.
            pass

    await bot.connect()
    LOGGER.info("commandbot daemon started")

    await stop_event.wait()
    await bot.disconnect()
    LOGGER.info("Shutdown complete")


if __name__ == "__main__":
    raise SystemExit(cli())
