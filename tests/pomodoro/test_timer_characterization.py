import logging
import threading
import unittest
from unittest.mock import patch

from pomodoro import PomodoroTimer, TimerSettings


class _FakeTicker:
    def __init__(self, callback):
        self.callback = callback
        self.running = False
        self.starts = 0
        self.stops = 0
        self.closed = False
        self.generation = 0

    def start(self) -> None:
        if not self.running:
            self.starts += 1
            self.generation += 1
        self.running = True

    def stop(self) -> None:
        if self.running:
            self.stops += 1
        self.running = False

    def close(self, timeout_seconds: float = 2.0) -> None:
        self.stop()
        self.closed = True

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if not self.running:
                return
            self.callback(self.generation)


def _build_timer(**kwargs):
    tickers: list[_FakeTicker] = []

    def factory(callback):
        ticker = _FakeTicker(callback)
        tickers.append(ticker)
        return ticker

    timer = PomodoroTimer(
        ticker_factory=factory,
        logger=logging.getLogger("test.pomodoro"),
        **kwargs,
    )
    return timer, tickers[0]


class PomodoroTimerCharacterizationTests(unittest.TestCase):
    def test_start_runs_ticker_and_pause_stops_it(self) -> None:
        timer, ticker = _build_timer()

        start = timer.start()
        self.assertTrue(start.accepted)
        self.assertTrue(start.snapshot.is_running)
        self.assertTrue(ticker.running)

        ticker.fire(3)
        pause = timer.pause()

        self.assertTrue(pause.accepted)
        self.assertFalse(ticker.running)
        self.assertEqual(25 * 60 - 3, pause.snapshot.remaining_seconds)
        self.assertEqual("22:57", pause.snapshot.remaining_text)

    def test_pause_rejected_when_not_running(self) -> None:
        timer, _ = _build_timer()

        result = timer.pause()

        self.assertFalse(result.accepted)
        self.assertEqual("not_running", result.reason)

    def test_toggle_flips_running(self) -> None:
        timer, ticker = _build_timer()

        self.assertTrue(timer.toggle().snapshot.is_running)
        self.assertFalse(timer.toggle().snapshot.is_running)
        self.assertEqual(1, ticker.starts)
        self.assertEqual(1, ticker.stops)

    def test_tick_returns_none_while_paused(self) -> None:
        timer, _ = _build_timer()

        self.assertIsNone(timer.tick())
        self.assertEqual(25 * 60, timer.snapshot().remaining_seconds)

    def test_completion_notifies_once_and_stops_ticker(self) -> None:
        notifications: list[str] = []
        ticks = []
        timer, ticker = _build_timer(
            settings=TimerSettings(work_minutes=1, work_variant=None),
            notifier=lambda: notifications.append("ding"),
            on_tick=ticks.append,
        )

        timer.start()
        ticker.fire(100)

        snapshot = timer.snapshot()
        self.assertEqual(["ding"], notifications)
        self.assertEqual(60, len(ticks))
        self.assertTrue(ticks[-1].completed)
        self.assertEqual("work", ticks[-1].completed_phase)
        self.assertFalse(ticker.running)
        self.assertEqual("short_break", snapshot.phase)
        self.assertEqual(300, snapshot.remaining_seconds)
        self.assertEqual(1, snapshot.completed_work_count)
        self.assertEqual(1, snapshot.accumulated_work_minutes)

    def test_notifier_failure_does_not_affect_state(self) -> None:
        def broken_notifier() -> None:
            raise RuntimeError("playback rejected")

        timer, ticker = _build_timer(
            settings=TimerSettings(short_break_minutes=1),
            notifier=broken_notifier,
        )
        timer.switch_phase("short_break")
        timer.start()

        with self.assertLogs("test.pomodoro", level="ERROR") as captured:
            ticker.fire(60)

        snapshot = timer.snapshot()
        self.assertEqual("work", snapshot.phase)
        self.assertFalse(snapshot.is_running)
        self.assertEqual(0, snapshot.completed_work_count)
        self.assertTrue(any("playback rejected" in line for line in captured.output))

    def test_update_settings_mid_run_pauses_with_new_duration(self) -> None:
        timer, ticker = _build_timer()
        timer.start()
        ticker.fire(10)

        result = timer.update_settings(work_minutes=30)

        self.assertTrue(result.accepted)
        self.assertEqual("settings_updated", result.reason)
        self.assertFalse(result.snapshot.is_running)
        self.assertFalse(ticker.running)
        self.assertEqual(30 * 60, result.snapshot.remaining_seconds)
        self.assertIsNone(result.snapshot.work_variant)

    def test_update_settings_coerces_invalid_input(self) -> None:
        timer, _ = _build_timer()

        result = timer.update_settings(short_break_minutes="abc", long_break_minutes="-2")

        self.assertEqual(5, result.snapshot.settings.short_break_minutes)
        self.assertEqual(15, result.snapshot.settings.long_break_minutes)

    def test_set_work_variant_mid_run(self) -> None:
        timer, ticker = _build_timer()
        timer.start()
        ticker.fire(5)

        result = timer.set_work_variant(10)

        self.assertTrue(result.accepted)
        self.assertFalse(result.snapshot.is_running)
        self.assertEqual(600, result.snapshot.remaining_seconds)
        self.assertEqual(10, result.snapshot.work_variant)

    def test_switch_phase_keeps_counters(self) -> None:
        timer, _ = _build_timer()

        result = timer.switch_phase("long_break")

        self.assertEqual("long_break", result.snapshot.phase)
        self.assertEqual(900, result.snapshot.remaining_seconds)
        self.assertEqual(0, result.snapshot.completed_work_count)
        self.assertEqual(0, result.snapshot.accumulated_work_minutes)

    def test_unsupported_action_is_rejected(self) -> None:
        timer, _ = _build_timer()

        result = timer.apply("abort")  # type: ignore[arg-type]

        self.assertFalse(result.accepted)
        self.assertEqual("unsupported_action", result.reason)

    def test_progress_fraction_tracks_elapsed_time(self) -> None:
        timer, ticker = _build_timer(settings=TimerSettings(short_break_minutes=1))
        timer.switch_phase("short_break")
        timer.start()
        ticker.fire(15)

        self.assertAlmostEqual(0.25, timer.snapshot().progress_fraction)

    def test_tick_from_stopped_generation_is_dropped(self) -> None:
        timer, ticker = _build_timer()
        timer.start()
        stale_generation = ticker.generation
        timer.pause()
        timer.start()

        self.assertIsNone(ticker.callback(stale_generation))
        self.assertEqual(25 * 60, timer.snapshot().remaining_seconds)

        tick = ticker.callback(ticker.generation)
        self.assertIsNotNone(tick)
        self.assertEqual(25 * 60 - 1, timer.snapshot().remaining_seconds)

    def test_update_settings_does_not_lose_concurrent_variant_change(self) -> None:
        timer, _ = _build_timer()
        original = TimerSettings.with_durations
        contender: list[threading.Thread] = []

        def with_durations_then_contend(settings, **durations):
            thread = threading.Thread(target=timer.set_work_variant, args=(10,))
            contender.append(thread)
            thread.start()
            thread.join(timeout=0.05)
            # Still waiting on the timer lock held by update_settings.
            self.assertTrue(thread.is_alive())
            return original(settings, **durations)

        with patch.object(TimerSettings, "with_durations", with_durations_then_contend):
            result = timer.update_settings(short_break_minutes=8)
        contender[0].join(timeout=2.0)

        self.assertTrue(result.accepted)
        snapshot = timer.snapshot()
        self.assertEqual(8, snapshot.settings.short_break_minutes)
        self.assertEqual(10, snapshot.work_variant)
        self.assertEqual(600, snapshot.remaining_seconds)

    def test_close_stops_and_joins_ticker(self) -> None:
        timer, ticker = _build_timer()
        timer.start()

        timer.close()

        self.assertTrue(ticker.closed)
        self.assertFalse(timer.snapshot().is_running)


if __name__ == "__main__":
    unittest.main()
