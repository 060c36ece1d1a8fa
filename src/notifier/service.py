"""Fire-and-forget completion notifiers."""

from __future__ import annotations

import concurrent.futures
import logging
import sys
from typing import Optional, Protocol, TextIO

import numpy as np

from .chime import synthesize_chime
from .config import BACKEND_BELL, NotifierConfig
from .output import NotifierError, SoundDeviceAudioOutput


class AudioOutput(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        ...


class NotificationService:
    """Plays the completion chime on a worker thread; ``notify()`` never blocks or raises."""

    def __init__(
        self,
        config: NotifierConfig,
        output: AudioOutput,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._output = output
        self._logger = logger or logging.getLogger("notifier")
        self._wav = synthesize_chime(
            frequency_hz=config.frequency_hz,
            duration_seconds=config.duration_seconds,
            sample_rate_hz=config.sample_rate_hz,
            volume=config.volume,
            repeats=config.repeats,
        )
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="notifier",
        )

    def __call__(self) -> None:
        self.notify()

    def notify(self) -> Optional[concurrent.futures.Future[None]]:
        try:
            future = self._executor.submit(self._play)
        except RuntimeError as error:
            self._logger.warning("Notifier is shut down, skipping chime: %s", error)
            return None
        future.add_done_callback(self._log_outcome)
        return future

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _play(self) -> None:
        self._output.play(self._wav, self._config.sample_rate_hz)

    def _log_outcome(self, future: concurrent.futures.Future[None]) -> None:
        error = future.exception()
        if error is None:
            self._logger.debug("Completion chime played")
        elif isinstance(error, NotifierError):
            self._logger.error("Completion chime failed: %s", error)
        else:
            self._logger.error("Unexpected notifier failure: %s", error, exc_info=error)


class BellNotifier:
    """Writes the terminal bell character; used where no audio device is wanted."""

    def __init__(
        self,
        *,
        repeats: int = 1,
        stream: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._repeats = max(1, repeats)
        self._stream = stream
        self._logger = logger or logging.getLogger("notifier")

    def __call__(self) -> None:
        self.notify()

    def notify(self) -> None:
        stream = self._stream or sys.stdout
        try:
            stream.write("\a" * self._repeats)
            stream.flush()
        except (OSError, ValueError) as error:
            self._logger.error("Terminal bell failed: %s", error)

    def close(self, wait: bool = True) -> None:
        return None


def build_notifier(
    config: NotifierConfig,
    logger: Optional[logging.Logger] = None,
):
    """Return the notifier selected by ``config``, or None when notifications are disabled."""
    logger = logger or logging.getLogger("notifier")
    if not config.enabled:
        logger.info("Completion notifier disabled")
        return None
    if config.backend == BACKEND_BELL:
        return BellNotifier(repeats=config.repeats, logger=logger)
    return NotificationService(
        config=config,
        output=SoundDeviceAudioOutput(
            output_device_index=config.output_device_index,
            logger=logger.getChild("output"),
        ),
        logger=logger,
    )
