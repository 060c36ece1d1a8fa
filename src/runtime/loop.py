"""Console runtime loop that feeds commands to the timer and renders ticks."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional, TextIO

from pomodoro import PomodoroTick, PomodoroTimer

from .commands import (
    COMMAND_QUIT,
    HELP_TEXT,
    CommandDispatcher,
    CommandError,
    parse_command,
)
from .messages import completion_message, status_message


@dataclass(frozen=True)
class CommandLineEvent:
    text: str


@dataclass(frozen=True)
class InputClosedEvent:
    pass


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    timer: PomodoroTimer
    notifier_close: Optional[Callable[[], None]] = None
    input_stream: Optional[TextIO] = None
    output_stream: Optional[TextIO] = None
    show_ticks: bool = True


class RuntimeEngine:
    """Single control loop: every command and tick is handled on the calling thread."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._timer = bootstrap.timer
        self._input = bootstrap.input_stream or sys.stdin
        self._output = bootstrap.output_stream or sys.stdout
        self._dispatcher = CommandDispatcher(timer=self._timer, logger=self._logger)
        self._event_queue: Queue[Any] = Queue()
        self._input_thread: Optional[threading.Thread] = None

        self._timer.set_on_tick(self._event_queue.put)

    @property
    def event_queue(self) -> Queue[Any]:
        return self._event_queue

    def run(self) -> int:
        self._write(HELP_TEXT)
        self._write(status_message(self._timer.snapshot()))
        self._start_input_reader()

        try:
            while True:
                event = self._poll_event()
                if event is None:
                    continue
                exit_code = self._handle_event(event)
                if exit_code is not None:
                    return exit_code
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _start_input_reader(self) -> None:
        self._input_thread = threading.Thread(
            target=self._read_input,
            daemon=True,
            name="console-input",
        )
        self._input_thread.start()

    def _read_input(self) -> None:
        try:
            for line in self._input:
                self._event_queue.put(CommandLineEvent(text=line))
        except (OSError, ValueError) as error:
            self._logger.error("Console input failed: %s", error)
        finally:
            self._event_queue.put(InputClosedEvent())

    def _poll_event(self) -> Optional[Any]:
        try:
            return self._event_queue.get(timeout=0.25)
        except Empty:
            return None

    def _handle_event(self, event: Any) -> Optional[int]:
        if isinstance(event, PomodoroTick):
            self._handle_tick(event)
            return None

        if isinstance(event, CommandLineEvent):
            try:
                command = parse_command(event.text)
            except CommandError as error:
                self._write(str(error))
                return None
            if command.name == COMMAND_QUIT:
                self._logger.info("Quit requested.")
                return 0
            self._write(self._dispatcher.handle(command))
            return None

        if isinstance(event, InputClosedEvent):
            self._logger.info("Console input closed, stopping.")
            return 0

        self._logger.warning("Ignoring unknown runtime event: %r", event)
        return None

    def _handle_tick(self, tick: PomodoroTick) -> None:
        if tick.completed:
            self._write(completion_message(tick))
            return
        if self._bootstrap.show_ticks:
            self._write(status_message(tick.snapshot))

    def _write(self, text: str) -> None:
        print(text, file=self._output, flush=True)

    def _shutdown(self) -> None:
        self._timer.set_on_tick(None)
        self._timer.close()
        if self._bootstrap.notifier_close is not None:
            try:
                self._bootstrap.notifier_close()
            except Exception as error:
                self._logger.error("Notifier shutdown failed: %s", error)
        self._logger.info("Runtime stopped.")
