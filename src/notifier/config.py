"""Configuration model for the completion notifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class NotifierConfigurationError(Exception):
    """Raised when notifier configuration is invalid."""


BACKEND_CHIME = "chime"
BACKEND_BELL = "bell"
_BACKENDS = (BACKEND_CHIME, BACKEND_BELL)


@dataclass(frozen=True)
class NotifierConfig:
    """Validated notifier configuration derived from app settings."""
    enabled: bool = True
    backend: str = BACKEND_CHIME
    frequency_hz: float = 880.0
    duration_seconds: float = 0.25
    volume: float = 0.4
    repeats: int = 2
    sample_rate_hz: int = 44100
    output_device_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.backend not in _BACKENDS:
            allowed = ", ".join(_BACKENDS)
            raise NotifierConfigurationError(f"notifier.backend must be one of: {allowed}")

        if self.frequency_hz <= 0:
            raise NotifierConfigurationError(
                f"notifier.frequency_hz must be positive, got: {self.frequency_hz}"
            )
        if self.duration_seconds <= 0:
            raise NotifierConfigurationError(
                f"notifier.duration_seconds must be positive, got: {self.duration_seconds}"
            )
        if not 0.0 <= self.volume <= 1.0:
            raise NotifierConfigurationError(
                f"notifier.volume must be in [0, 1], got: {self.volume}"
            )
        if self.repeats < 1:
            raise NotifierConfigurationError(
                f"notifier.repeats must be at least 1, got: {self.repeats}"
            )
        if self.sample_rate_hz <= 0:
            raise NotifierConfigurationError(
                f"notifier.sample_rate_hz must be positive, got: {self.sample_rate_hz}"
            )

    @classmethod
    def from_settings(cls, settings) -> "NotifierConfig":
        backend = (settings.backend or BACKEND_CHIME).strip().lower()
        return cls(
            enabled=bool(settings.enabled),
            backend=backend,
            frequency_hz=settings.frequency_hz,
            duration_seconds=settings.duration_seconds,
            volume=settings.volume,
            repeats=settings.repeats,
            sample_rate_hz=settings.sample_rate_hz,
            output_device_index=settings.output_device,
        )
