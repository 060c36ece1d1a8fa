"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pomodoro.constants import (
    DEFAULT_LONG_BREAK_INTERVAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_TICK_INTERVAL_SECONDS,
    DEFAULT_WORK_MINUTES,
    DEFAULT_WORK_PRESETS,
)

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettingsConfig:
    """Phase durations and cycle tuning loaded from `[timer]`."""
    work_minutes: int = DEFAULT_WORK_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    work_presets: tuple[int, ...] = DEFAULT_WORK_PRESETS
    work_variant: Optional[int] = None
    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL
    tick_interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS


@dataclass(frozen=True)
class NotifierSettings:
    """Completion chime settings loaded from `[notifier]`."""
    enabled: bool = True
    backend: str = "chime"
    frequency_hz: float = 880.0
    duration_seconds: float = 0.25
    volume: float = 0.4
    repeats: int = 2
    sample_rate_hz: int = 44100
    output_device: Optional[int] = None


@dataclass(frozen=True)
class LoggingSettings:
    """Root log level loaded from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Top-level immutable configuration container for runtime services."""
    timer: TimerSettingsConfig
    notifier: NotifierSettings
    logging: LoggingSettings
    source_file: str
