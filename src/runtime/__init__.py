"""Runtime engine exports."""

from .commands import Command, CommandDispatcher, CommandError, parse_command
from .loop import RuntimeBootstrap, RuntimeEngine

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandError",
    "RuntimeBootstrap",
    "RuntimeEngine",
    "parse_command",
]
