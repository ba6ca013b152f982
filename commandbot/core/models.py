"""Domain models for commandbot."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

PatternLike = Union[str, re.Pattern]


class Presence(str, Enum):
    AUTO = "auto"
    AWAY = "away"


@dataclass(frozen=True)
class InboundMessage:
    """A plain chat message delivered by the transport."""

    sender: str
    text: str


@dataclass(frozen=True)
class CommandAlias:
    """Additional syntax form routed to an existing command's callback."""

    syntax: str
    pattern: PatternLike
