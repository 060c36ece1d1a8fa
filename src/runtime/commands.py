"""Console command parsing and dispatch onto the pomodoro timer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pomodoro import PomodoroTimer
from pomodoro.constants import PHASE_LONG_BREAK, PHASE_SHORT_BREAK, PHASE_WORK

from .messages import action_reply, settings_message, status_message

COMMAND_TOGGLE = "toggle"
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESET = "reset"
COMMAND_PHASE = "phase"
COMMAND_VARIANT = "variant"
COMMAND_SET = "set"
COMMAND_STATUS = "status"
COMMAND_SETTINGS = "settings"
COMMAND_HELP = "help"
COMMAND_QUIT = "quit"

_PHASE_ALIASES: dict[str, str] = {
    "work": PHASE_WORK,
    "short": PHASE_SHORT_BREAK,
    "short_break": PHASE_SHORT_BREAK,
    "long": PHASE_LONG_BREAK,
    "long_break": PHASE_LONG_BREAK,
}

_SETTING_FIELDS: dict[str, str] = {
    "work": "work_minutes",
    "short": "short_break_minutes",
    "long": "long_break_minutes",
}

_SIMPLE_COMMANDS: dict[str, str] = {
    "toggle": COMMAND_TOGGLE,
    "t": COMMAND_TOGGLE,
    "": COMMAND_TOGGLE,
    "start": COMMAND_START,
    "pause": COMMAND_PAUSE,
    "reset": COMMAND_RESET,
    "status": COMMAND_STATUS,
    "s": COMMAND_STATUS,
    "settings": COMMAND_SETTINGS,
    "help": COMMAND_HELP,
    "?": COMMAND_HELP,
    "quit": COMMAND_QUIT,
    "q": COMMAND_QUIT,
    "exit": COMMAND_QUIT,
}

HELP_TEXT = (
    "Commands: [enter]/toggle, start, pause, reset, work, short, long, "
    "variant <minutes>, set <work|short|long> <minutes>, status, settings, quit"
)


class CommandError(Exception):
    """Raised when console input cannot be parsed into a command."""


@dataclass(frozen=True)
class Command:
    name: str
    phase: Optional[str] = None
    minutes: Optional[int] = None
    field: Optional[str] = None
    raw_value: Optional[str] = None


def parse_command(line: str) -> Command:
    parts = line.strip().lower().split()
    head = parts[0] if parts else ""
    args = parts[1:]

    if head in _SIMPLE_COMMANDS and not args:
        return Command(name=_SIMPLE_COMMANDS[head])

    if head in _PHASE_ALIASES and not args:
        return Command(name=COMMAND_PHASE, phase=_PHASE_ALIASES[head])

    if head == COMMAND_VARIANT:
        if len(args) != 1 or not args[0].isdigit():
            raise CommandError("Usage: variant <minutes>")
        return Command(name=COMMAND_VARIANT, minutes=int(args[0]))

    if head == COMMAND_SET:
        if len(args) != 2 or args[0] not in _SETTING_FIELDS:
            raise CommandError("Usage: set <work|short|long> <minutes>")
        # The value is passed through raw; the timer coerces invalid minutes.
        return Command(name=COMMAND_SET, field=_SETTING_FIELDS[args[0]], raw_value=args[1])

    raise CommandError(f"Unknown command: {line.strip()!r}. {HELP_TEXT}")


class CommandDispatcher:
    """Routes parsed console commands to timer actions and returns reply text."""
    def __init__(self, *, timer: PomodoroTimer, logger: Optional[logging.Logger] = None):
        self._timer = timer
        self._logger = logger or logging.getLogger("runtime")

    def handle(self, command: Command) -> str:
        timer = self._timer
        if command.name == COMMAND_TOGGLE:
            return action_reply(timer.toggle())
        if command.name == COMMAND_START:
            return action_reply(timer.start())
        if command.name == COMMAND_PAUSE:
            return action_reply(timer.pause())
        if command.name == COMMAND_RESET:
            return action_reply(timer.reset())
        if command.name == COMMAND_PHASE and command.phase:
            return action_reply(timer.switch_phase(command.phase))
        if command.name == COMMAND_VARIANT and command.minutes is not None:
            return action_reply(timer.set_work_variant(command.minutes))
        if command.name == COMMAND_SET and command.field:
            return action_reply(timer.update_settings(**{command.field: command.raw_value}))
        if command.name == COMMAND_STATUS:
            return status_message(timer.snapshot())
        if command.name == COMMAND_SETTINGS:
            return settings_message(timer.snapshot())
        if command.name == COMMAND_HELP:
            return HELP_TEXT

        self._logger.warning("Unhandled command: %s", command)
        return HELP_TEXT
