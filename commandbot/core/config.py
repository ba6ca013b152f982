"""Configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from .errors import ConfigError
from .models import Presence

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.commandbot").expanduser()
ENV_FILE_NAME = ".env"
BOT_FILE = "bot.yaml"
DEFAULT_STARTUP_MESSAGE = "NAME reporting for duty."


@dataclass
class BotConfig:
    masters: Tuple[str, ...]
    slack_bot_token: str = ""
    slack_app_token: str = ""
    slack_user_token: Optional[str] = None
    name: Optional[str] = None
    is_public: bool = False
    misunderstood_message: bool = True
    startup_message: str = DEFAULT_STARTUP_MESSAGE
    presence: Optional[Presence] = None
    status: Optional[str] = None
    commands_module: Optional[str] = None
    config_dir: Optional[Path] = None


def normalize_masters(value: Any) -> Tuple[str, ...]:
    """Accept a single identity or a list of them; keep order, drop duplicates."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"master must be a string or a list, got {type(value).__name__}")
    cleaned = [str(item).strip() for item in value if str(item).strip()]
    return tuple(dict.fromkeys(cleaned))


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Resolve and validate the directory containing .env + bot.yaml."""
    target = (
        Path(config_dir).expanduser() if config_dir else DEFAULT_CONFIG_DIR
    ).resolve()
    if not target.exists():
        raise ConfigError(
            f"Config directory {target} does not exist. "
            "Create it and add .env and bot.yaml."
        )
    if not target.is_dir():
        raise ConfigError(f"Config directory {target} is not a directory")
    return target


def load_config(config_dir: Path | str | None = None) -> BotConfig:
    """Load bot configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    return _load_config_from_root(root)


def _load_config_from_root(root: Path) -> BotConfig:
    _load_env_file(root / ENV_FILE_NAME)
    data = _load_bot_file(root / BOT_FILE)

    masters = normalize_masters(data.get("master"))
    if not masters:
        masters = _load_masters_from_env()
    if not masters:
        raise ConfigError("bot.yaml must define master (or set COMMANDBOT_MASTERS)")

    misunderstood = data.get("misunderstood_message")
    return BotConfig(
        masters=masters,
        slack_bot_token=_require_env("SLACK_BOT_TOKEN"),
        slack_app_token=_require_env("SLACK_APP_TOKEN"),
        slack_user_token=os.getenv("SLACK_USER_TOKEN") or None,
        name=data.get("name") or None,
        is_public=bool(data.get("is_public", False)),
        misunderstood_message=True if misunderstood is None else bool(misunderstood),
        startup_message=data.get("startup_message") or DEFAULT_STARTUP_MESSAGE,
        presence=_parse_presence(data.get("presence")),
        status=data.get("status"),
        commands_module=data.get("commands_module"),
        config_dir=root,
    )


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.warning("No .env file found at %s; relying on shell environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigError(f"{name} is not set")
    return value


def _load_masters_from_env() -> Tuple[str, ...]:
    raw_value = os.getenv("COMMANDBOT_MASTERS") or ""
    return normalize_masters(raw_value.split(","))


def _load_bot_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"bot.yaml not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid bot.yaml structure at {path}")
    return data


def _parse_presence(value: Any) -> Optional[Presence]:
    if value is None:
        return None
    try:
        return Presence(str(value).lower())
    except ValueError as exc:
        raise ConfigError(f"Unsupported presence: {value}") from exc
