"""Phase, action, and reason constants used by the pomodoro state machine."""

from __future__ import annotations

PHASE_WORK = "work"
PHASE_SHORT_BREAK = "short_break"
PHASE_LONG_BREAK = "long_break"

PHASES: tuple[str, ...] = (PHASE_WORK, PHASE_SHORT_BREAK, PHASE_LONG_BREAK)
BREAK_PHASES: frozenset[str] = frozenset({PHASE_SHORT_BREAK, PHASE_LONG_BREAK})

PHASE_LABELS: dict[str, str] = {
    PHASE_WORK: "Work",
    PHASE_SHORT_BREAK: "Short break",
    PHASE_LONG_BREAK: "Long break",
}

DEFAULT_WORK_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_WORK_PRESETS: tuple[int, ...] = (10, 25, 50)
DEFAULT_LONG_BREAK_INTERVAL = 4
MAX_DURATION_MINUTES = 60

DEFAULT_TICK_INTERVAL_SECONDS = 1.0

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_TOGGLE = "toggle"
ACTION_RESET = "reset"
ACTION_SWITCH_PHASE = "switch_phase"
ACTION_SET_WORK_VARIANT = "set_work_variant"
ACTION_UPDATE_SETTINGS = "update_settings"

ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_PHASE_SWITCHED = "phase_switched"
REASON_VARIANT_SELECTED = "variant_selected"
REASON_SETTINGS_UPDATED = "settings_updated"
REASON_UNCHANGED = "unchanged"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_UNSUPPORTED_PHASE = "unsupported_phase"
REASON_UNSUPPORTED_VARIANT = "unsupported_variant"
REASON_UNSUPPORTED_ACTION = "unsupported_action"
REASON_TICK = "tick"
REASON_COMPLETED = "completed"
