"""Pure session state transitions for the work/break cycle.

Every change to a session goes through :func:`transition`, which takes the
current :class:`SessionState` and one event and returns a new state. Nothing
here touches clocks, threads, or audio, so each rule can be exercised
directly.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from .constants import (
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
    PHASE_WORK,
    PHASES,
    REASON_ALREADY_RUNNING,
    REASON_COMPLETED,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_PHASE_SWITCHED,
    REASON_RESET,
    REASON_SETTINGS_UPDATED,
    REASON_STARTED,
    REASON_TICK,
    REASON_UNCHANGED,
    REASON_UNSUPPORTED_ACTION,
    REASON_UNSUPPORTED_PHASE,
    REASON_UNSUPPORTED_VARIANT,
    REASON_VARIANT_SELECTED,
)
from .settings import TimerSettings


@dataclass(frozen=True)
class SessionState:
    phase: str
    remaining_seconds: int
    is_running: bool
    completed_work_count: int
    accumulated_work_minutes: int
    settings: TimerSettings

    @property
    def duration_seconds(self) -> int:
        return self.settings.phase_duration_seconds(self.phase)


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Toggle:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class SwitchPhase:
    phase: str


@dataclass(frozen=True)
class SetSettings:
    settings: TimerSettings


@dataclass(frozen=True)
class SetWorkVariant:
    minutes: int


Event = Union[Tick, Start, Pause, Toggle, Reset, SwitchPhase, SetSettings, SetWorkVariant]


@dataclass(frozen=True)
class Transition:
    """Outcome of applying one event to a session."""
    state: SessionState
    accepted: bool
    reason: str
    completed: bool = False
    completed_phase: Optional[str] = None


def initial_state(settings: Optional[TimerSettings] = None) -> SessionState:
    settings = settings or TimerSettings()
    return SessionState(
        phase=PHASE_WORK,
        remaining_seconds=settings.phase_duration_seconds(PHASE_WORK),
        is_running=False,
        completed_work_count=0,
        accumulated_work_minutes=0,
        settings=settings,
    )


def next_phase_after(phase: str, completed_work_count: int, long_break_interval: int) -> str:
    """Breaks return to work; every ``long_break_interval``-th work completion earns a long break."""
    if phase != PHASE_WORK:
        return PHASE_WORK
    if completed_work_count % long_break_interval == 0:
        return PHASE_LONG_BREAK
    return PHASE_SHORT_BREAK


def transition(state: SessionState, event: Event) -> Transition:
    if isinstance(event, Tick):
        return _tick(state)

    if isinstance(event, Start):
        if state.is_running:
            return Transition(state, False, REASON_ALREADY_RUNNING)
        return Transition(replace(state, is_running=True), True, REASON_STARTED)

    if isinstance(event, Pause):
        if not state.is_running:
            return Transition(state, False, REASON_NOT_RUNNING)
        return Transition(replace(state, is_running=False), True, REASON_PAUSED)

    if isinstance(event, Toggle):
        if state.is_running:
            return Transition(replace(state, is_running=False), True, REASON_PAUSED)
        return Transition(replace(state, is_running=True), True, REASON_STARTED)

    if isinstance(event, Reset):
        return Transition(_enter_phase(state, state.phase), True, REASON_RESET)

    if isinstance(event, SwitchPhase):
        if event.phase not in PHASES:
            return Transition(state, False, REASON_UNSUPPORTED_PHASE)
        return Transition(_enter_phase(state, event.phase), True, REASON_PHASE_SWITCHED)

    if isinstance(event, SetSettings):
        if event.settings == state.settings:
            return Transition(state, True, REASON_UNCHANGED)
        updated = replace(state, settings=event.settings)
        return Transition(_enter_phase(updated, state.phase), True, REASON_SETTINGS_UPDATED)

    if isinstance(event, SetWorkVariant):
        if not state.settings.supports_variant(event.minutes):
            return Transition(state, False, REASON_UNSUPPORTED_VARIANT)
        if state.settings.work_variant == event.minutes:
            return Transition(state, True, REASON_UNCHANGED)
        updated = replace(state, settings=state.settings.with_work_variant(event.minutes))
        return Transition(_enter_phase(updated, state.phase), True, REASON_VARIANT_SELECTED)

    return Transition(state, False, REASON_UNSUPPORTED_ACTION)


def _tick(state: SessionState) -> Transition:
    if not state.is_running:
        return Transition(state, False, REASON_NOT_RUNNING)

    remaining = max(0, state.remaining_seconds - 1)
    if remaining > 0:
        return Transition(replace(state, remaining_seconds=remaining), True, REASON_TICK)

    return Transition(
        _complete(state),
        True,
        REASON_COMPLETED,
        completed=True,
        completed_phase=state.phase,
    )


def _complete(state: SessionState) -> SessionState:
    completed_work_count = state.completed_work_count
    accumulated_work_minutes = state.accumulated_work_minutes
    if state.phase == PHASE_WORK:
        completed_work_count += 1
        accumulated_work_minutes += state.settings.active_work_minutes

    following = next_phase_after(
        state.phase,
        completed_work_count,
        state.settings.long_break_interval,
    )
    finished = replace(
        state,
        is_running=False,
        remaining_seconds=0,
        completed_work_count=completed_work_count,
        accumulated_work_minutes=accumulated_work_minutes,
    )
    return _enter_phase(finished, following)


def _enter_phase(state: SessionState, phase: str) -> SessionState:
    # Entering a phase always pauses and loads its full duration.
    return replace(
        state,
        phase=phase,
        remaining_seconds=state.settings.phase_duration_seconds(phase),
        is_running=False,
    )
