"""Cancellable once-per-interval driver for the countdown."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .constants import DEFAULT_TICK_INTERVAL_SECONDS


class Ticker:
    """Calls ``callback(generation)`` every ``interval_seconds`` on a daemon thread until stopped.

    Each ``start()`` begins a new numbered generation with its own stop
    event. A callback that was already past its wait when the generation
    was stopped still receives the old number, so the receiver can compare
    it with ``generation`` and drop the late tick.
    """

    def __init__(
        self,
        callback: Callable[[int], object],
        *,
        interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._callback = callback
        self._interval_seconds = float(interval_seconds)
        self._logger = logger or logging.getLogger("pomodoro.ticker")
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        with self._lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return

            stop_event = threading.Event()
            self._generation += 1
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run,
                args=(stop_event, self._generation),
                daemon=True,
                name="pomodoro-ticker",
            )
            self._thread.start()
            self._logger.debug(
                "Ticker started (generation=%d interval=%ss)",
                self._generation,
                self._interval_seconds,
            )

    def stop(self) -> None:
        """Cancel the current generation without waiting for its thread."""
        with self._lock:
            if self._stop_event is None or self._stop_event.is_set():
                return
            self._stop_event.set()
            self._logger.debug("Ticker stopped")

    def close(self, timeout_seconds: float = 2.0) -> None:
        self.stop()
        with self._lock:
            thread = self._thread
            self._thread = None

        if thread is None or thread is threading.current_thread():
            return

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error(
                "Ticker thread did not stop within %ss (daemon will be killed on exit).",
                timeout_seconds,
            )

    def _run(self, stop_event: threading.Event, generation: int) -> None:
        while not stop_event.wait(self._interval_seconds):
            if stop_event.is_set():
                break
            try:
                self._callback(generation)
            except Exception as error:
                self._logger.error("Tick callback failed: %s", error, exc_info=True)
