from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import log_level, parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotifierSettings,
    TimerSettingsConfig,
)
from pomodoro.settings import TimerSettings

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "LoggingSettings",
    "NotifierSettings",
    "TimerSettingsConfig",
    "default_app_config",
    "load_app_config",
    "log_level",
    "resolve_config_path",
    "timer_settings_from_config",
]


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    env_path = os.getenv("APP_CONFIG_FILE")
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def default_app_config() -> AppConfig:
    return parse_app_config({}, source_file="")


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """Load config.toml; without an explicit path a missing file means built-in defaults."""
    explicit = bool(config_path or os.getenv("APP_CONFIG_FILE"))
    path = resolve_config_path(config_path)
    if not path.exists():
        if not explicit:
            return default_app_config()
        raise AppConfigurationError(f"Config file not found: {path}")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw: Any = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return parse_app_config(raw, source_file=str(path))


def timer_settings_from_config(settings: TimerSettingsConfig) -> TimerSettings:
    return TimerSettings(
        work_minutes=settings.work_minutes,
        short_break_minutes=settings.short_break_minutes,
        long_break_minutes=settings.long_break_minutes,
        work_presets=settings.work_presets,
        work_variant=settings.work_variant,
        long_break_interval=settings.long_break_interval,
    )
