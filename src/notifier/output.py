"""Sounddevice-backed playback for the completion chime."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np


class NotifierError(Exception):
    """Raised when a completion notification cannot be delivered."""


class SoundDeviceAudioOutput:
    """Plays mono PCM arrays through a selected sounddevice output."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._logger = logger or logging.getLogger(__name__)

    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        if wav.ndim != 1:
            raise NotifierError("Expected mono PCM array for playback")
        if len(wav) == 0:
            raise NotifierError("Cannot play empty audio buffer")

        try:
            # PortAudio is loaded on import, so a missing audio stack surfaces here.
            import sounddevice as sd
        except (ImportError, OSError) as error:
            raise NotifierError(f"Audio backend unavailable: {error}") from error

        try:
            sd.play(wav, samplerate=sample_rate_hz, device=self._output_device_index)
            sd.wait()
        except Exception as error:
            raise NotifierError(f"Audio playback failed: {error}") from error

        self._logger.debug(
            "Played %d chime samples at %d Hz",
            len(wav),
            sample_rate_hz,
        )
