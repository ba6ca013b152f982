"""Command registration, matching, authorization and dispatch."""

from .authorizer import Authorizer
from .base import BaseCommandHandler, CommandCallback, Parameters, SendMessageFn
from .dispatcher import CommandDispatcher, DispatchOutcome
from .help import HelpGenerator
from .matcher import NO_MATCH, MatchResult, PatternMatcher
from .registry import Command, CommandRegistry, command_name

__all__ = [
    "Authorizer",
    "BaseCommandHandler",
    "Command",
    "CommandCallback",
    "CommandDispatcher",
    "CommandRegistry",
    "DispatchOutcome",
    "HelpGenerator",
    "MatchResult",
    "NO_MATCH",
    "Parameters",
    "PatternMatcher",
    "SendMessageFn",
    "command_name",
]
