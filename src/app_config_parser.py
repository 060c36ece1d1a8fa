"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotifierSettings,
    TimerSettingsConfig,
)
from pomodoro.constants import (
    DEFAULT_LONG_BREAK_INTERVAL,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_TICK_INTERVAL_SECONDS,
    DEFAULT_WORK_MINUTES,
    DEFAULT_WORK_PRESETS,
)
from pomodoro.settings import coerce_minutes

_ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_app_config(raw: Mapping[str, Any], *, source_file: str) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        timer=_parse_timer_settings(_section(raw, "timer")),
        notifier=_parse_notifier_settings(_section(raw, "notifier")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettingsConfig:
    # Durations are coerced like interactive input rather than rejected.
    tick_interval = _as_float(
        section.get("tick_interval_seconds", DEFAULT_TICK_INTERVAL_SECONDS),
        "timer.tick_interval_seconds",
    )
    if tick_interval <= 0:
        raise AppConfigurationError("timer.tick_interval_seconds must be positive.")

    long_break_interval = _as_int(
        section.get("long_break_interval", DEFAULT_LONG_BREAK_INTERVAL),
        "timer.long_break_interval",
    )
    if long_break_interval <= 0:
        raise AppConfigurationError("timer.long_break_interval must be positive.")

    return TimerSettingsConfig(
        work_minutes=coerce_minutes(
            section.get("work_minutes", DEFAULT_WORK_MINUTES),
            DEFAULT_WORK_MINUTES,
        ),
        short_break_minutes=coerce_minutes(
            section.get("short_break_minutes", DEFAULT_SHORT_BREAK_MINUTES),
            DEFAULT_SHORT_BREAK_MINUTES,
        ),
        long_break_minutes=coerce_minutes(
            section.get("long_break_minutes", DEFAULT_LONG_BREAK_MINUTES),
            DEFAULT_LONG_BREAK_MINUTES,
        ),
        work_presets=_as_presets(
            section.get("work_presets", list(DEFAULT_WORK_PRESETS)),
            "timer.work_presets",
        ),
        work_variant=_as_optional_variant(
            section.get("work_variant"),
            "timer.work_variant",
        ),
        long_break_interval=long_break_interval,
        tick_interval_seconds=tick_interval,
    )


def _parse_notifier_settings(section: Mapping[str, Any]) -> NotifierSettings:
    return NotifierSettings(
        enabled=_as_bool(section.get("enabled", True), "notifier.enabled"),
        backend=_as_str(section.get("backend", "chime"), "notifier.backend") or "chime",
        frequency_hz=_as_float(
            section.get("frequency_hz", 880.0),
            "notifier.frequency_hz",
        ),
        duration_seconds=_as_float(
            section.get("duration_seconds", 0.25),
            "notifier.duration_seconds",
        ),
        volume=_as_float(section.get("volume", 0.4), "notifier.volume"),
        repeats=_as_int(section.get("repeats", 2), "notifier.repeats"),
        sample_rate_hz=_as_int(
            section.get("sample_rate_hz", 44100),
            "notifier.sample_rate_hz",
        ),
        output_device=(
            _as_int(section.get("output_device"), "notifier.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper() or "INFO"
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(_ALLOWED_LOG_LEVELS)
        raise AppConfigurationError(f"logging.level must be one of: {allowed}")
    return LoggingSettings(level=level)


def log_level(settings: LoggingSettings) -> int:
    return int(getattr(logging, settings.level, logging.INFO))


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_presets(value: Any, field: str) -> tuple[int, ...]:
    if not isinstance(value, (list, tuple)):
        raise AppConfigurationError(f"{field} must be an array of minutes.")
    presets = sorted({coerce_minutes(item, DEFAULT_WORK_MINUTES) for item in value})
    if not presets:
        raise AppConfigurationError(f"{field} must not be empty.")
    return tuple(presets)


def _as_optional_variant(value: Any, field: str) -> Optional[int]:
    # 0 or an empty string means "no preset": use work_minutes directly.
    if value is None or value == 0 or value == "":
        return None
    minutes = _as_int(value, field)
    if minutes < 0:
        raise AppConfigurationError(f"{field} must not be negative.")
    return minutes


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")
