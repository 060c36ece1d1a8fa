"""Thread-safe in-memory pomodoro timer built on the pure session machine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Protocol

from .constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SET_WORK_VARIANT,
    ACTION_START,
    ACTION_SWITCH_PHASE,
    ACTION_TOGGLE,
    ACTION_UPDATE_SETTINGS,
    DEFAULT_TICK_INTERVAL_SECONDS,
    PHASE_LABELS,
    REASON_UNSUPPORTED_ACTION,
)
from .formatting import format_duration, progress_fraction
from .machine import (
    Event,
    Pause,
    Reset,
    SessionState,
    SetSettings,
    SetWorkVariant,
    Start,
    SwitchPhase,
    Tick,
    Toggle,
    Transition,
    initial_state,
    transition,
)
from .settings import TimerSettings
from .ticker import Ticker

PomodoroPhase = Literal["work", "short_break", "long_break"]
PomodoroAction = Literal[
    "start",
    "pause",
    "toggle",
    "reset",
    "switch_phase",
    "set_work_variant",
    "update_settings",
]

Notifier = Callable[[], object]


class TickerLike(Protocol):
    @property
    def generation(self) -> int:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def close(self, timeout_seconds: float = 2.0) -> None:
        ...


TickerFactory = Callable[[Callable[[int], object]], TickerLike]


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Immutable timer snapshot exposed to the runtime and display layers."""
    phase: PomodoroPhase
    remaining_seconds: int
    duration_seconds: int
    is_running: bool
    completed_work_count: int
    accumulated_work_minutes: int
    settings: TimerSettings

    @property
    def label(self) -> str:
        return PHASE_LABELS.get(self.phase, self.phase)

    @property
    def remaining_text(self) -> str:
        return format_duration(self.remaining_seconds)

    @property
    def progress_fraction(self) -> float:
        return progress_fraction(self.duration_seconds, self.remaining_seconds)

    @property
    def work_variant(self) -> Optional[int]:
        return self.settings.work_variant


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying a timer action."""
    action: str
    accepted: bool
    reason: str
    snapshot: PomodoroSnapshot


@dataclass(frozen=True)
class PomodoroTick:
    """Tick payload produced for every applied countdown step."""
    snapshot: PomodoroSnapshot
    completed: bool = False
    completed_phase: Optional[str] = None


class PomodoroTimer:
    """In-memory pomodoro cycle with a cancellable one-second ticker."""

    def __init__(
        self,
        *,
        settings: Optional[TimerSettings] = None,
        notifier: Optional[Notifier] = None,
        on_tick: Optional[Callable[[PomodoroTick], None]] = None,
        tick_interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        ticker_factory: Optional[TickerFactory] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()
        self._state: SessionState = initial_state(settings)
        self._notifier = notifier
        self._on_tick = on_tick

        if ticker_factory is None:
            ticker_logger = self._logger.getChild("ticker")

            def default_ticker(callback: Callable[[int], object]) -> TickerLike:
                return Ticker(
                    callback,
                    interval_seconds=tick_interval_seconds,
                    logger=ticker_logger,
                )

            ticker_factory = default_ticker

        self._ticker = ticker_factory(self._tick_from_ticker)

    def set_on_tick(self, fn: Optional[Callable[[PomodoroTick], None]]) -> None:
        self._on_tick = fn

    def snapshot(self) -> PomodoroSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def apply(
        self,
        action: PomodoroAction,
        *,
        phase: Optional[str] = None,
        minutes: Optional[int] = None,
        settings: Optional[TimerSettings] = None,
    ) -> PomodoroActionResult:
        event = _event_for_action(action, phase=phase, minutes=minutes, settings=settings)
        with self._lock:
            return self._apply_locked(action, event)

    def start(self) -> PomodoroActionResult:
        return self.apply(ACTION_START)

    def pause(self) -> PomodoroActionResult:
        return self.apply(ACTION_PAUSE)

    def toggle(self) -> PomodoroActionResult:
        return self.apply(ACTION_TOGGLE)

    def reset(self) -> PomodoroActionResult:
        return self.apply(ACTION_RESET)

    def switch_phase(self, phase: str) -> PomodoroActionResult:
        return self.apply(ACTION_SWITCH_PHASE, phase=phase)

    def set_work_variant(self, minutes: int) -> PomodoroActionResult:
        return self.apply(ACTION_SET_WORK_VARIANT, minutes=minutes)

    def update_settings(self, **durations: Any) -> PomodoroActionResult:
        """Change one or more of ``work_minutes``, ``short_break_minutes``, ``long_break_minutes``."""
        with self._lock:
            proposed = self._state.settings.with_durations(**durations)
            return self._apply_locked(ACTION_UPDATE_SETTINGS, SetSettings(proposed))

    def tick(self) -> Optional[PomodoroTick]:
        """Advance the countdown by one step; returns None while paused."""
        return self._tick(None)

    def _tick_from_ticker(self, generation: int) -> Optional[PomodoroTick]:
        return self._tick(generation)

    def _tick(self, generation: Optional[int]) -> Optional[PomodoroTick]:
        with self._lock:
            if generation is not None and generation != self._ticker.generation:
                self._logger.debug("Dropping tick from stopped ticker generation %d", generation)
                return None
            outcome = self._transition_locked(Tick())
            if not outcome.accepted:
                return None
            tick = PomodoroTick(
                snapshot=self._snapshot_locked(),
                completed=outcome.completed,
                completed_phase=outcome.completed_phase,
            )

        if tick.completed:
            self._logger.info(
                "Pomodoro %s completed: next=%s completed_work=%d total_minutes=%d",
                tick.completed_phase,
                tick.snapshot.phase,
                tick.snapshot.completed_work_count,
                tick.snapshot.accumulated_work_minutes,
            )
            self._notify()
        else:
            self._logger.debug("Pomodoro tick: remaining=%ss", tick.snapshot.remaining_seconds)

        if self._on_tick:
            self._on_tick(tick)
        return tick

    def close(self) -> None:
        with self._lock:
            self._state = transition(self._state, Pause()).state
        self._ticker.close()

    def _apply_locked(self, action: str, event: Optional[Event]) -> PomodoroActionResult:
        if event is None:
            return self._result_locked(action, False, REASON_UNSUPPORTED_ACTION)
        outcome = self._transition_locked(event)
        if outcome.accepted:
            self._logger.info(
                "Pomodoro %s (%s): phase=%s remaining=%ss running=%s",
                action,
                outcome.reason,
                outcome.state.phase,
                outcome.state.remaining_seconds,
                outcome.state.is_running,
            )
        return self._result_locked(action, outcome.accepted, outcome.reason)

    def _transition_locked(self, event: Event) -> Transition:
        outcome = transition(self._state, event)
        if outcome.accepted:
            self._state = outcome.state
            # Ticker calls never block, so they are safe under the lock.
            if self._state.is_running:
                self._ticker.start()
            else:
                self._ticker.stop()
        return outcome

    def _notify(self) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier()
        except Exception as error:
            self._logger.error("Completion notification failed: %s", error)

    def _result_locked(
        self,
        action: str,
        accepted: bool,
        reason: str,
    ) -> PomodoroActionResult:
        return PomodoroActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )

    def _snapshot_locked(self) -> PomodoroSnapshot:
        state = self._state
        return PomodoroSnapshot(
            phase=state.phase,  # type: ignore[arg-type]
            remaining_seconds=state.remaining_seconds,
            duration_seconds=state.duration_seconds,
            is_running=state.is_running,
            completed_work_count=state.completed_work_count,
            accumulated_work_minutes=state.accumulated_work_minutes,
            settings=state.settings,
        )


def _event_for_action(
    action: str,
    *,
    phase: Optional[str],
    minutes: Optional[int],
    settings: Optional[TimerSettings],
) -> Optional[Event]:
    if action == ACTION_START:
        return Start()
    if action == ACTION_PAUSE:
        return Pause()
    if action == ACTION_TOGGLE:
        return Toggle()
    if action == ACTION_RESET:
        return Reset()
    if action == ACTION_SWITCH_PHASE and phase is not None:
        return SwitchPhase(phase)
    if action == ACTION_SET_WORK_VARIANT and minutes is not None:
        return SetWorkVariant(int(minutes))
    if action == ACTION_UPDATE_SETTINGS and settings is not None:
        return SetSettings(settings)
    return None
