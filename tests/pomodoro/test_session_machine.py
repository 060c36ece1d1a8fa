import unittest
from dataclasses import replace

from pomodoro.machine import (
    Pause,
    Reset,
    SetSettings,
    SetWorkVariant,
    Start,
    SwitchPhase,
    Tick,
    Toggle,
    initial_state,
    next_phase_after,
    transition,
)
from pomodoro.settings import TimerSettings


def _run_to_completion(state):
    state = transition(state, Start()).state
    while True:
        outcome = transition(state, Tick())
        state = outcome.state
        if outcome.completed:
            return outcome


class SessionMachineTests(unittest.TestCase):
    def test_initial_state_is_paused_work(self) -> None:
        state = initial_state(TimerSettings())

        self.assertEqual("work", state.phase)
        self.assertFalse(state.is_running)
        self.assertEqual(25 * 60, state.remaining_seconds)
        self.assertEqual(0, state.completed_work_count)
        self.assertEqual(0, state.accumulated_work_minutes)

    def test_tick_decrements_by_one_while_running(self) -> None:
        state = transition(initial_state(), Start()).state

        outcome = transition(state, Tick())

        self.assertTrue(outcome.accepted)
        self.assertFalse(outcome.completed)
        self.assertEqual(25 * 60 - 1, outcome.state.remaining_seconds)
        self.assertTrue(outcome.state.is_running)

    def test_tick_ignored_while_paused(self) -> None:
        state = initial_state()

        outcome = transition(state, Tick())

        self.assertFalse(outcome.accepted)
        self.assertEqual("not_running", outcome.reason)
        self.assertIs(state, outcome.state)

    def test_last_work_second_completes_into_short_break(self) -> None:
        settings = TimerSettings(work_minutes=25, short_break_minutes=5, long_break_minutes=15)
        state = transition(initial_state(settings), Start()).state
        state = replace(state, remaining_seconds=1)

        outcome = transition(state, Tick())

        self.assertTrue(outcome.completed)
        self.assertEqual("work", outcome.completed_phase)
        self.assertEqual(1, outcome.state.completed_work_count)
        self.assertEqual(25, outcome.state.accumulated_work_minutes)
        self.assertEqual("short_break", outcome.state.phase)
        self.assertEqual(300, outcome.state.remaining_seconds)
        self.assertFalse(outcome.state.is_running)

    def test_completion_fires_once_and_never_goes_negative(self) -> None:
        settings = TimerSettings(short_break_minutes=1)
        state = transition(initial_state(settings), SwitchPhase("short_break")).state
        state = transition(state, Start()).state

        completions = 0
        for _ in range(200):
            outcome = transition(state, Tick())
            state = outcome.state
            self.assertGreaterEqual(state.remaining_seconds, 0)
            if outcome.completed:
                completions += 1

        self.assertEqual(1, completions)
        self.assertEqual("work", state.phase)
        self.assertFalse(state.is_running)

    def test_four_work_sessions_cycle_into_long_break(self) -> None:
        settings = TimerSettings(
            work_minutes=1,
            short_break_minutes=1,
            long_break_minutes=2,
            work_presets=(1, 25),
            work_variant=1,
        )
        state = initial_state(settings)
        phases = [state.phase]

        for _ in range(4):
            outcome = _run_to_completion(state)
            state = outcome.state
            phases.append(state.phase)
            if state.phase == "short_break":
                state = _run_to_completion(state).state
                phases.append(state.phase)

        self.assertEqual(
            [
                "work",
                "short_break",
                "work",
                "short_break",
                "work",
                "short_break",
                "work",
                "long_break",
            ],
            phases,
        )
        self.assertEqual(4, state.completed_work_count)
        self.assertEqual(4, state.accumulated_work_minutes)
        self.assertEqual(120, state.remaining_seconds)

    def test_long_break_after_fourth_completion_with_default_settings(self) -> None:
        state = initial_state(TimerSettings())
        for _ in range(3):
            state = _run_to_completion(state).state
            state = _run_to_completion(state).state

        outcome = _run_to_completion(state)

        self.assertEqual("long_break", outcome.state.phase)
        self.assertEqual(900, outcome.state.remaining_seconds)
        self.assertEqual(4, outcome.state.completed_work_count)
        self.assertEqual(100, outcome.state.accumulated_work_minutes)

    def test_accumulated_minutes_follow_selected_variant(self) -> None:
        state = initial_state(TimerSettings())
        state = transition(state, SetWorkVariant(10)).state
        state = _run_to_completion(state).state
        state = _run_to_completion(state).state
        state = transition(state, SetWorkVariant(50)).state

        state = _run_to_completion(state).state

        self.assertEqual(2, state.completed_work_count)
        self.assertEqual(60, state.accumulated_work_minutes)

    def test_long_break_interval_is_configurable(self) -> None:
        self.assertEqual("long_break", next_phase_after("work", 2, 2))
        self.assertEqual("short_break", next_phase_after("work", 3, 2))
        self.assertEqual("work", next_phase_after("long_break", 4, 4))
        self.assertEqual("work", next_phase_after("short_break", 1, 4))

    def test_reset_is_idempotent(self) -> None:
        state = transition(initial_state(), Start()).state
        for _ in range(30):
            state = transition(state, Tick()).state

        once = transition(state, Reset()).state
        twice = transition(once, Reset()).state

        self.assertEqual(
            (once.remaining_seconds, once.is_running),
            (twice.remaining_seconds, twice.is_running),
        )
        self.assertEqual(25 * 60, twice.remaining_seconds)
        self.assertFalse(twice.is_running)

    def test_manual_switch_never_changes_counters(self) -> None:
        state = _run_to_completion(initial_state()).state
        count = state.completed_work_count
        minutes = state.accumulated_work_minutes

        for phase in ("work", "short_break", "long_break", "work"):
            state = transition(state, Start()).state
            state = transition(state, SwitchPhase(phase)).state
            self.assertEqual(phase, state.phase)
            self.assertFalse(state.is_running)
            self.assertEqual(state.duration_seconds, state.remaining_seconds)

        self.assertEqual(count, state.completed_work_count)
        self.assertEqual(minutes, state.accumulated_work_minutes)

    def test_unknown_phase_is_rejected(self) -> None:
        state = initial_state()

        outcome = transition(state, SwitchPhase("lunch"))

        self.assertFalse(outcome.accepted)
        self.assertEqual("unsupported_phase", outcome.reason)
        self.assertIs(state, outcome.state)

    def test_settings_change_mid_run_pauses_and_loads_new_duration(self) -> None:

        state = transition(initial_state(), Start()).state
        state = replace(state, remaining_seconds=300)

        outcome = transition(
            state,
            SetSettings(state.settings.with_durations(work_minutes=40)),
        )

        self.assertTrue(outcome.accepted)
        self.assertFalse(outcome.state.is_running)
        self.assertEqual(40 * 60, outcome.state.remaining_seconds)

    def test_variant_change_mid_run_pauses_and_loads_new_duration(self) -> None:
        state = transition(initial_state(), Start()).state
        state = replace(state, remaining_seconds=300)

        outcome = transition(state, SetWorkVariant(50))

        self.assertEqual("variant_selected", outcome.reason)
        self.assertFalse(outcome.state.is_running)
        self.assertEqual(50 * 60, outcome.state.remaining_seconds)

    def test_variant_change_during_break_keeps_break_duration(self) -> None:
        state = transition(initial_state(), SwitchPhase("short_break")).state

        state = transition(state, SetWorkVariant(10)).state

        self.assertEqual("short_break", state.phase)
        self.assertEqual(5 * 60, state.remaining_seconds)

        state = transition(state, SwitchPhase("work")).state
        self.assertEqual(10 * 60, state.remaining_seconds)

    def test_unsupported_variant_leaves_state_untouched(self) -> None:
        state = transition(initial_state(), Start()).state

        outcome = transition(state, SetWorkVariant(33))

        self.assertFalse(outcome.accepted)
        self.assertEqual("unsupported_variant", outcome.reason)
        self.assertTrue(outcome.state.is_running)

    def test_unchanged_settings_do_not_reset_countdown(self) -> None:
        state = transition(initial_state(), Start()).state
        state = transition(state, Tick()).state

        outcome = transition(state, SetSettings(state.settings))

        self.assertEqual("unchanged", outcome.reason)
        self.assertTrue(outcome.state.is_running)
        self.assertEqual(25 * 60 - 1, outcome.state.remaining_seconds)

    def test_start_pause_and_toggle(self) -> None:
        state = initial_state()

        started = transition(state, Start())
        again = transition(started.state, Start())
        paused = transition(started.state, Pause())
        pause_again = transition(paused.state, Pause())
        toggled = transition(paused.state, Toggle())

        self.assertTrue(started.state.is_running)
        self.assertFalse(again.accepted)
        self.assertEqual("already_running", again.reason)
        self.assertFalse(paused.state.is_running)
        self.assertFalse(pause_again.accepted)
        self.assertEqual("not_running", pause_again.reason)
        self.assertTrue(toggled.state.is_running)
        self.assertEqual("started", toggled.reason)

    def test_start_at_zero_completes_on_next_tick(self) -> None:

        state = replace(initial_state(), remaining_seconds=0)
        state = transition(state, Start()).state

        outcome = transition(state, Tick())

        self.assertTrue(outcome.completed)
        self.assertEqual("short_break", outcome.state.phase)
        self.assertEqual(1, outcome.state.completed_work_count)


if __name__ == "__main__":
    unittest.main()
