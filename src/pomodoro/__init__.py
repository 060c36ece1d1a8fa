from .formatting import format_duration, progress_fraction
from .machine import SessionState, Transition, initial_state, next_phase_after, transition
from .service import (
    PomodoroAction,
    PomodoroActionResult,
    PomodoroPhase,
    PomodoroSnapshot,
    PomodoroTick,
    PomodoroTimer,
)
from .settings import TimerSettings, coerce_minutes
from .ticker import Ticker

__all__ = [
    "PomodoroAction",
    "PomodoroActionResult",
    "PomodoroPhase",
    "PomodoroSnapshot",
    "PomodoroTick",
    "PomodoroTimer",
    "SessionState",
    "Ticker",
    "TimerSettings",
    "Transition",
    "coerce_minutes",
    "format_duration",
    "initial_state",
    "next_phase_after",
    "progress_fraction",
    "transition",
]
