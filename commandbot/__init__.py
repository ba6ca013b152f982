"""Pattern-matched chat commands for automation bots."""

__version__ = "0.1.0"
