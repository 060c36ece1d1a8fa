"""Duration settings and work-duration presets for the pomodoro timer."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Optional

from .constants import (
    DEFAULT_LONG_BREAK_INTERVAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_WORK_MINUTES,
    DEFAULT_WORK_PRESETS,
    MAX_DURATION_MINUTES,
    PHASE_LONG_BREAK,
    PHASE_SHORT_BREAK,
    PHASE_WORK,
)

_UNSET: Any = object()
_LEADING_INT = re.compile(r"^[+-]?\d+")


def coerce_minutes(value: Any, fallback: int) -> int:
    """Return ``value`` as minutes in [1, 60], or ``fallback`` if it is not a positive integer.

    Strings are read by their leading integer, so ``"12min"`` and ``"12.5"``
    both give 12 while ``"abc"`` and ``"-4"`` give ``fallback``.
    """
    minutes: Optional[int] = None
    if isinstance(value, bool):
        minutes = None
    elif isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value.strip())
        if match:
            minutes = int(match.group(0))

    if minutes is None or minutes <= 0:
        return fallback
    return min(minutes, MAX_DURATION_MINUTES)


@dataclass(frozen=True)
class TimerSettings:
    """Immutable duration configuration plus the active work-duration preset."""
    work_minutes: int = DEFAULT_WORK_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    work_presets: tuple[int, ...] = DEFAULT_WORK_PRESETS
    work_variant: Optional[int] = None
    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(
            self,
            "work_minutes",
            coerce_minutes(self.work_minutes, DEFAULT_WORK_MINUTES),
        )
        object.__setattr__(
            self,
            "short_break_minutes",
            coerce_minutes(self.short_break_minutes, DEFAULT_SHORT_BREAK_MINUTES),
        )
        object.__setattr__(
            self,
            "long_break_minutes",
            coerce_minutes(self.long_break_minutes, DEFAULT_LONG_BREAK_MINUTES),
        )

        presets = tuple(
            sorted({coerce_minutes(p, DEFAULT_WORK_MINUTES) for p in self.work_presets})
        )
        object.__setattr__(self, "work_presets", presets or DEFAULT_WORK_PRESETS)

        if self.work_variant is not None and self.work_variant not in self.work_presets:
            object.__setattr__(self, "work_variant", None)

        if not isinstance(self.long_break_interval, int) or self.long_break_interval <= 0:
            object.__setattr__(self, "long_break_interval", DEFAULT_LONG_BREAK_INTERVAL)

    @property
    def active_work_minutes(self) -> int:
        if self.work_variant is not None:
            return self.work_variant
        return self.work_minutes

    def phase_minutes(self, phase: str) -> int:
        if phase == PHASE_WORK:
            return self.active_work_minutes
        if phase == PHASE_SHORT_BREAK:
            return self.short_break_minutes
        if phase == PHASE_LONG_BREAK:
            return self.long_break_minutes
        raise ValueError(f"Unknown phase: {phase}")

    def phase_duration_seconds(self, phase: str) -> int:
        return self.phase_minutes(phase) * 60

    def supports_variant(self, minutes: int) -> bool:
        return minutes in self.work_presets

    def with_durations(
        self,
        *,
        work_minutes: Any = _UNSET,
        short_break_minutes: Any = _UNSET,
        long_break_minutes: Any = _UNSET,
    ) -> "TimerSettings":
        """Return settings with proposed durations coerced against the phase defaults.

        A changed work duration clears the active preset so the new value
        is what the next work phase uses.
        """
        updated = self
        if work_minutes is not _UNSET:
            minutes = coerce_minutes(work_minutes, DEFAULT_WORK_MINUTES)
            if minutes != self.work_minutes or self.work_variant is not None:
                updated = replace(updated, work_minutes=minutes, work_variant=None)
        if short_break_minutes is not _UNSET:
            updated = replace(
                updated,
                short_break_minutes=coerce_minutes(
                    short_break_minutes,
                    DEFAULT_SHORT_BREAK_MINUTES,
                ),
            )
        if long_break_minutes is not _UNSET:
            updated = replace(
                updated,
                long_break_minutes=coerce_minutes(
                    long_break_minutes,
                    DEFAULT_LONG_BREAK_MINUTES,
                ),
            )
        return updated

    def with_work_variant(self, minutes: int) -> "TimerSettings":
        if not self.supports_variant(minutes):
            raise ValueError(f"Unsupported work preset: {minutes}")
        return replace(self, work_variant=minutes)
