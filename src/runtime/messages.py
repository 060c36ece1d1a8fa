"""Status and reply text builders for the console runtime."""

from __future__ import annotations

from pomodoro import PomodoroActionResult, PomodoroSnapshot, PomodoroTick
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SET_WORK_VARIANT,
    ACTION_START,
    ACTION_SWITCH_PHASE,
    ACTION_TOGGLE,
    ACTION_UPDATE_SETTINGS,
    PHASE_LABELS,
    PHASE_WORK,
    REASON_ALREADY_RUNNING,
    REASON_NOT_RUNNING,
    REASON_UNCHANGED,
    REASON_UNSUPPORTED_PHASE,
    REASON_UNSUPPORTED_VARIANT,
)

_BAR_WIDTH = 20


def progress_bar(fraction: float, width: int = _BAR_WIDTH) -> str:
    filled = int(round(max(0.0, min(1.0, fraction)) * width))
    return "#" * filled + "-" * (width - filled)


def status_message(snapshot: PomodoroSnapshot) -> str:
    """Build a one-line status for the current session snapshot."""
    state = "running" if snapshot.is_running else "paused"
    return (
        f"[{snapshot.label}] {snapshot.remaining_text} {state} "
        f"|{progress_bar(snapshot.progress_fraction)}| "
        f"completed={snapshot.completed_work_count} "
        f"focus={snapshot.accumulated_work_minutes}min"
    )


def settings_message(snapshot: PomodoroSnapshot) -> str:
    settings = snapshot.settings
    presets = "/".join(str(minutes) for minutes in settings.work_presets)
    variant = f"{settings.work_variant}min" if settings.work_variant is not None else "custom"
    return (
        f"work={settings.work_minutes}min short={settings.short_break_minutes}min "
        f"long={settings.long_break_minutes}min variant={variant} presets={presets} "
        f"long_break_every={settings.long_break_interval}"
    )


def action_reply(result: PomodoroActionResult) -> str:
    if not result.accepted:
        return rejection_text(result)

    snapshot = result.snapshot
    if result.reason == REASON_UNCHANGED:
        return f"No change. {status_message(snapshot)}"
    if result.action in (ACTION_START, ACTION_TOGGLE) and snapshot.is_running:
        return f"{snapshot.label} started ({snapshot.remaining_text} remaining)."
    if result.action in (ACTION_PAUSE, ACTION_TOGGLE):
        return f"{snapshot.label} paused ({snapshot.remaining_text} remaining)."
    if result.action == ACTION_RESET:
        return f"{snapshot.label} reset to {snapshot.remaining_text}."
    if result.action == ACTION_SWITCH_PHASE:
        return f"Switched to {snapshot.label} ({snapshot.remaining_text})."
    if result.action == ACTION_SET_WORK_VARIANT:
        return f"Work preset set to {snapshot.work_variant} minutes. {status_message(snapshot)}"
    if result.action == ACTION_UPDATE_SETTINGS:
        return f"Settings updated: {settings_message(snapshot)}"
    return status_message(snapshot)


def rejection_text(result: PomodoroActionResult) -> str:
    if result.reason == REASON_ALREADY_RUNNING:
        return "The timer is already running."
    if result.reason == REASON_NOT_RUNNING:
        return "The timer is not running."
    if result.reason == REASON_UNSUPPORTED_VARIANT:
        presets = ", ".join(str(minutes) for minutes in result.snapshot.settings.work_presets)
        return f"Unknown work preset. Choose one of: {presets}."
    if result.reason == REASON_UNSUPPORTED_PHASE:
        return "Unknown phase."
    return "That action is not possible right now."


def completion_message(tick: PomodoroTick) -> str:
    finished = PHASE_LABELS.get(tick.completed_phase or "", "Session")
    snapshot = tick.snapshot
    if tick.completed_phase == PHASE_WORK:
        return (
            f"{finished} complete! Pomodoro #{snapshot.completed_work_count} done. "
            f"Next: {snapshot.label} ({snapshot.remaining_text})."
        )
    return f"{finished} over. Next: {snapshot.label} ({snapshot.remaining_text})."
