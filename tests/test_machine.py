"""Tests for the training session state machine.

Covers: START initialisation and the empty-program guard, TICK countdown,
lookahead banner and step expiry, pause/resume accounting, SKIP_REST,
NEXT_STEP, ADD_TEN_SECONDS, EXIT, RESET purity, preference flags, and
the identity no-op contract for invalid combinations.
"""

from dataclasses import replace

import pytest

from fitflow.program import FULL_BODY_EXPRESS, Program, ProgramLevel, StepType
from fitflow.session import (
    AddTenSeconds,
    Exit,
    NextStep,
    NO_STEPS_ERROR,
    Pause,
    Reset,
    Resume,
    SetPreferences,
    SkipRest,
    Start,
    Tick,
    TrainingState,
    get_total_progress,
    initial_state,
    reduce,
)

from helpers import REST_30, SQUATS_20, assert_invariants, make_program


STEPS = FULL_BODY_EXPRESS.steps


# ═══════════════════════════════════════════════════════════════════════════
#  START
# ═══════════════════════════════════════════════════════════════════════════


class TestStart:

    def test_initializes_first_step(self, running, clock):
        assert running.state is TrainingState.RUNNING
        assert running.program is FULL_BODY_EXPRESS
        assert running.current_step_index == 0
        assert running.current_step is STEPS[0]
        assert running.remaining_ms == STEPS[0].duration_sec * 1000
        assert running.step_start_time == clock.now
        assert running.next_up_step is STEPS[1]
        assert running.is_last_step is False
        assert running.step_results == ()
        assert running.paused_at is None
        assert running.paused_duration_ms == 0
        assert running.total_elapsed_ms == 0
        assert running.show_next_up_banner is False
        assert running.error is None
        assert_invariants(running)

    def test_single_step_program(self, idle, clock):
        state = reduce(idle, Start(make_program(SQUATS_20)), clock)
        assert state.is_last_step is True
        assert state.next_up_step is None

    def test_single_step_expiry_finishes(self, idle, clock):
        state = reduce(idle, Start(make_program(SQUATS_20)), clock)
        state = reduce(state, Tick(0), clock)
        assert state.state is TrainingState.FINISHED
        assert len(state.step_results) == 1
        assert_invariants(state)

    def test_empty_program_reports_error(self, idle, clock):
        empty = Program(id="empty", title="Empty", level=ProgramLevel.BEGINNER, steps=())
        state = reduce(idle, Start(empty), clock)
        assert state.state is TrainingState.IDLE
        assert state.error == NO_STEPS_ERROR
        assert state == replace(initial_state(), error=NO_STEPS_ERROR)

    def test_empty_program_resets_preferences(self, idle, clock):
        state = reduce(idle, SetPreferences(sounds_enabled=False, vibrations_enabled=False), clock)
        state = reduce(state, Start(make_program()), clock)
        assert state.sounds_enabled is True
        assert state.vibrations_enabled is True
        assert state == replace(initial_state(), error=NO_STEPS_ERROR)

    def test_empty_program_discards_running_session(self, running, clock):
        empty = replace(FULL_BODY_EXPRESS, steps=(), steps_count=0)
        state = reduce(running, Start(empty), clock)
        assert state.state is TrainingState.IDLE
        assert state.program is None
        assert state.step_results == ()

    def test_restart_from_finished(self, idle, clock):
        program = make_program(SQUATS_20)
        state = reduce(reduce(idle, Start(program), clock), Tick(0), clock)
        assert state.state is TrainingState.FINISHED

        state = reduce(state, Start(FULL_BODY_EXPRESS), clock)
        assert state.state is TrainingState.RUNNING
        assert state.step_results == ()
        assert state.current_step is STEPS[0]

    def test_start_clears_previous_error(self, idle, clock):
        empty = make_program()
        state = reduce(idle, Start(empty), clock)
        state = reduce(state, Start(FULL_BODY_EXPRESS), clock)
        assert state.error is None

    def test_start_without_program_is_noop(self, idle, clock):
        assert reduce(idle, Start(None), clock) is idle


# ═══════════════════════════════════════════════════════════════════════════
#  TICK
# ═══════════════════════════════════════════════════════════════════════════


class TestTick:

    def test_updates_remaining(self, running, clock):
        state = reduce(running, Tick(30000), clock)
        assert state.remaining_ms == 30000
        assert state.current_step_index == 0

    def test_banner_shows_at_t_minus_5s(self, running, clock):
        assert reduce(running, Tick(4500), clock).show_next_up_banner is True

    def test_banner_hidden_above_threshold(self, running, clock):
        assert reduce(running, Tick(6000), clock).show_next_up_banner is False

    def test_banner_threshold_is_inclusive(self, running, clock):
        assert reduce(running, Tick(5000), clock).show_next_up_banner is True
        assert reduce(running, Tick(5001), clock).show_next_up_banner is False

    def test_banner_is_not_latched(self, running, clock):
        state = reduce(running, Tick(4500), clock)
        state = reduce(state, Tick(6000), clock)
        assert state.show_next_up_banner is False

    def test_zero_advances_to_next_step(self, running, clock):
        clock.advance(45000)
        state = reduce(running, Tick(0), clock)

        assert state.current_step_index == 1
        assert state.current_step is STEPS[1]
        assert state.remaining_ms == STEPS[1].duration_sec * 1000
        assert state.step_start_time == clock.now
        assert state.show_next_up_banner is False
        assert state.next_up_step is STEPS[2]
        assert len(state.step_results) == 1

        result = state.step_results[0]
        assert result.step_id == STEPS[0].id
        assert result.step_index == 0
        assert result.step_type is StepType.EXERCISE
        assert result.was_skipped is False
        assert result.actual_duration_ms == 45000
        assert_invariants(state)

    def test_negative_remaining_advances_only_one_step(self, running, clock):
        clock.advance(10 * 60 * 1000)
        state = reduce(running, Tick(-600000), clock)
        assert state.current_step_index == 1
        assert state.remaining_ms == STEPS[1].duration_sec * 1000

    def test_full_program_completion(self, running, clock):
        state = running
        for step in STEPS:
            clock.advance(step.duration_sec * 1000)
            state = reduce(state, Tick(0), clock)
            assert_invariants(state)

        assert state.state is TrainingState.FINISHED
        assert len(state.step_results) == len(STEPS)
        assert [r.step_id for r in state.step_results] == [s.id for s in STEPS]
        assert state.current_step is None
        assert state.remaining_ms == 0
        assert state.total_elapsed_ms == sum(s.duration_sec for s in STEPS) * 1000
        assert get_total_progress(state) == 1.0

    def test_last_step_flagged(self, running, clock):
        state = running
        for _ in range(len(STEPS) - 1):
            state = reduce(state, Tick(0), clock)
        assert state.is_last_step is True
        assert state.next_up_step is None

    def test_tick_after_finish_is_noop(self, idle, clock):
        state = reduce(reduce(idle, Start(make_program(SQUATS_20)), clock), Tick(0), clock)
        assert reduce(state, Tick(0), clock) is state

    def test_tick_while_paused_is_noop(self, running, clock):
        paused = reduce(running, Pause(), clock)
        assert reduce(paused, Tick(1000), clock) is paused

    def test_tick_while_idle_is_noop(self, idle, clock):
        assert reduce(idle, Tick(0), clock) is idle

    @pytest.mark.parametrize(
        "value", [None, "1000", float("nan"), float("inf"), float("-inf"), True, False],
    )
    def test_malformed_tick_is_noop(self, running, clock, value):
        assert reduce(running, Tick(value), clock) is running

    def test_elapsed_counts_late_tick_overshoot(self, running, clock):
        clock.advance(60_000)
        state = reduce(running, Tick(-15_000), clock)
        assert state.total_elapsed_ms == 60_000
        assert state.step_results[0].actual_duration_ms == 45_000

    def test_elapsed_excludes_paused_time(self, running, clock):
        clock.advance(10_000)
        state = reduce(running, Pause(), clock)
        clock.advance(120_000)
        state = reduce(state, Resume(), clock)
        clock.advance(35_000)
        state = reduce(state, Tick(0), clock)
        assert state.total_elapsed_ms == 45_000

    def test_elapsed_accumulates_across_steps(self, running, clock):
        clock.advance(47_000)
        state = reduce(running, Tick(0), clock)
        clock.advance(15_000)
        state = reduce(state, Tick(0), clock)
        assert state.total_elapsed_ms == 62_000

    def test_advance_resets_pause_accounting(self, running, clock):
        state = reduce(running, Pause(), clock)
        clock.advance(3000)
        state = reduce(state, Resume(), clock)
        assert state.paused_duration_ms == 3000

        state = reduce(state, Tick(0), clock)
        assert state.paused_duration_ms == 0


# ═══════════════════════════════════════════════════════════════════════════
#  PAUSE / RESUME
# ═══════════════════════════════════════════════════════════════════════════


class TestPauseResume:

    def test_pause_from_running(self, running, clock):
        clock.advance(1234)
        paused = reduce(running, Pause(), clock)
        assert paused.state is TrainingState.PAUSED
        assert paused.paused_at == clock.now
        assert_invariants(paused)

    def test_double_pause_is_identity(self, running, clock):
        paused = reduce(running, Pause(), clock)
        assert reduce(paused, Pause(), clock) is paused

    def test_pause_from_idle_is_identity(self, idle, clock):
        assert reduce(idle, Pause(), clock) is idle

    def test_resume_accumulates_pause(self, running, clock):
        paused = reduce(running, Pause(), clock)
        clock.advance(5000)
        resumed = reduce(paused, Resume(), clock)

        assert resumed.state is TrainingState.RUNNING
        assert resumed.paused_at is None
        assert resumed.paused_duration_ms == 5000
        assert_invariants(resumed)

    def test_multiple_pauses_sum(self, running, clock):
        state = running
        for gap in (5000, 3000):
            state = reduce(state, Pause(), clock)
            clock.advance(gap)
            state = reduce(state, Resume(), clock)
        assert state.paused_duration_ms == 8000

    def test_resume_does_not_touch_remaining(self, running, clock):
        state = reduce(running, Tick(30000), clock)
        state = reduce(state, Pause(), clock)
        clock.advance(60000)
        state = reduce(state, Resume(), clock)
        assert state.remaining_ms == 30000

    def test_resume_while_running_is_identity(self, running, clock):
        assert reduce(running, Resume(), clock) is running


# ═══════════════════════════════════════════════════════════════════════════
#  SKIP_REST / NEXT_STEP
# ═══════════════════════════════════════════════════════════════════════════


class TestSkip:

    def test_skip_rest_advances(self, idle, clock):
        state = reduce(idle, Start(make_program(REST_30, STEPS[0])), clock)
        state = reduce(state, SkipRest(), clock)

        assert state.current_step_index == 1
        assert len(state.step_results) == 1
        assert state.step_results[0].was_skipped is True
        assert state.step_results[0].step_type is StepType.REST
        assert_invariants(state)

    def test_skip_rest_records_elapsed_so_far(self, idle, clock):
        state = reduce(idle, Start(make_program(REST_30, SQUATS_20)), clock)
        state = reduce(state, Tick(20000), clock)
        clock.advance(10000)
        state = reduce(state, SkipRest(), clock)
        assert state.step_results[0].actual_duration_ms == 10000
        assert state.total_elapsed_ms == 10000

    def test_skip_exercise_is_identity(self, running, clock):
        assert reduce(running, SkipRest(), clock) is running

    def test_skip_rest_on_last_step_finishes(self, idle, clock):
        state = reduce(idle, Start(make_program(SQUATS_20, REST_30)), clock)
        state = reduce(state, Tick(0), clock)
        state = reduce(state, SkipRest(), clock)
        assert state.state is TrainingState.FINISHED
        assert len(state.step_results) == 2

    def test_skip_rest_while_paused_is_identity(self, idle, clock):
        state = reduce(idle, Start(make_program(REST_30, SQUATS_20)), clock)
        paused = reduce(state, Pause(), clock)
        assert reduce(paused, SkipRest(), clock) is paused

    def test_next_step_skips_exercise(self, running, clock):
        state = reduce(running, Tick(40000), clock)
        state = reduce(state, NextStep(), clock)
        assert state.current_step_index == 1
        assert state.step_results[0].was_skipped is True
        assert state.step_results[0].actual_duration_ms == 5000

    def test_next_step_when_idle_is_identity(self, idle, clock):
        assert reduce(idle, NextStep(), clock) is idle


# ═══════════════════════════════════════════════════════════════════════════
#  ADD_TEN_SECONDS
# ═══════════════════════════════════════════════════════════════════════════


class TestAddTenSeconds:

    def test_adds_to_rest(self, idle, clock):
        state = reduce(idle, Start(make_program(REST_30)), clock)
        before = state.remaining_ms
        state = reduce(state, AddTenSeconds(), clock)
        assert state.remaining_ms == before + 10000
        assert state.extension_ms == 10000

    def test_exercise_is_identity(self, running, clock):
        assert reduce(running, AddTenSeconds(), clock) is running

    def test_extension_recorded_in_result(self, idle, clock):
        state = reduce(idle, Start(make_program(REST_30, SQUATS_20)), clock)
        state = reduce(state, AddTenSeconds(), clock)
        state = reduce(state, AddTenSeconds(), clock)
        state = reduce(state, Tick(0), clock)

        result = state.step_results[0]
        assert result.extension_sec == 20
        assert result.was_extended is True
        assert result.actual_duration_ms == 50000
        assert state.extension_ms == 0

    def test_banner_rehides_when_pushed_above_threshold(self, idle, clock):
        state = reduce(idle, Start(make_program(REST_30, SQUATS_20)), clock)
        state = reduce(state, Tick(4000), clock)
        assert state.show_next_up_banner is True
        state = reduce(state, AddTenSeconds(), clock)
        assert state.remaining_ms == 14000
        assert state.show_next_up_banner is False


# ═══════════════════════════════════════════════════════════════════════════
#  EXIT / RESET
# ═══════════════════════════════════════════════════════════════════════════


class TestExitReset:

    def test_exit_from_running(self, running, clock):
        state = reduce(running, Tick(0), clock)
        exited = reduce(state, Exit(), clock)
        assert exited.state is TrainingState.EXITED
        assert exited.step_results == state.step_results
        assert_invariants(exited)

    def test_exit_from_paused_clears_paused_at(self, running, clock):
        paused = reduce(running, Pause(), clock)
        exited = reduce(paused, Exit(), clock)
        assert exited.state is TrainingState.EXITED
        assert exited.paused_at is None

    def test_exit_while_paused_excludes_pause(self, running, clock):
        clock.advance(8000)
        paused = reduce(running, Pause(), clock)
        clock.advance(60_000)
        exited = reduce(paused, Exit(), clock)
        assert exited.total_elapsed_ms == 8000

    def test_exit_counts_partial_step(self, running, clock):
        clock.advance(15000)
        state = reduce(running, Tick(30000), clock)
        exited = reduce(state, Exit(), clock)
        assert exited.total_elapsed_ms == 15000

    @pytest.mark.parametrize("make_state", ["idle", "finished", "exited"])
    def test_exit_outside_session_is_identity(self, make_state, idle, running, clock):
        if make_state == "idle":
            state = idle
        elif make_state == "finished":
            state = reduce(reduce(idle, Start(make_program(SQUATS_20)), clock), Tick(0), clock)
        else:
            state = reduce(running, Exit(), clock)
        assert reduce(state, Exit(), clock) is state

    def test_reset_returns_pristine_state(self, running, clock):
        state = reduce(running, Tick(0), clock)
        state = reduce(state, SetPreferences(sounds_enabled=False), clock)
        state = reduce(state, Pause(), clock)
        state = reduce(state, Reset(), clock)
        assert state == initial_state()

    def test_reset_from_idle(self, idle, clock):
        assert reduce(idle, Reset(), clock) == initial_state()


# ═══════════════════════════════════════════════════════════════════════════
#  PREFERENCES / TOTALITY
# ═══════════════════════════════════════════════════════════════════════════


class TestPreferencesAndTotality:

    def test_set_preferences(self, running, clock):
        state = reduce(running, SetPreferences(sounds_enabled=False), clock)
        assert state.sounds_enabled is False
        assert state.vibrations_enabled is True

    def test_unchanged_preferences_is_identity(self, running, clock):
        assert reduce(running, SetPreferences(sounds_enabled=True), clock) is running

    def test_preferences_survive_start(self, idle, clock):
        state = reduce(idle, SetPreferences(vibrations_enabled=False), clock)
        state = reduce(state, Start(FULL_BODY_EXPRESS), clock)
        assert state.vibrations_enabled is False

    @pytest.mark.parametrize("event", [object(), "PAUSE", None, {"type": "TICK"}])
    def test_unknown_events_are_identity(self, running, clock, event):
        assert reduce(running, event, clock) is running

    def test_result_count_invariant_over_mixed_run(self, idle, clock):
        program = make_program(SQUATS_20, REST_30, SQUATS_20, REST_30, SQUATS_20)
        events = [
            Start(program), Tick(15000), Pause(), Resume(), Tick(0),
            AddTenSeconds(), Tick(4000), SkipRest(), Tick(12000), NextStep(),
            Pause(), Tick(0), Resume(), Tick(0), Tick(0),
        ]
        state = idle
        for event in events:
            clock.advance(1000)
            state = reduce(state, event, clock)
            assert_invariants(state)
        assert state.state is TrainingState.FINISHED
        assert [r.was_skipped for r in state.step_results] == [False, True, True, False, False]
