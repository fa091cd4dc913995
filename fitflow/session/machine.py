"""Training session state machine.

``reduce(state, event) -> state`` is the only way session state changes.
It is a pure, total function: no I/O, no timers, no exceptions.  Every
``(state, event)`` pair yields a defined state, and combinations that make
no sense (``Pause`` while idle, ``SkipRest`` on an exercise step, events
of unknown type) return the *same* state object unchanged.

The one impure input is the clock.  It is injected as a zero-argument
callable returning integer milliseconds so tests can substitute a fixed
or manually advanced clock.

Time accounting
---------------
The reducer never counts down on its own.  The driver computes the
remaining time for the current step from wall-clock reads and reports it
with ``Tick``; the reducer trusts that value verbatim.  ``Resume`` only
accumulates ``paused_duration_ms`` so the driver's next computation
excludes the paused interval.  Pause and extension accounting restart
with every step because ``step_start_time`` does.

``total_elapsed_ms`` is wall-clock time between step starts minus paused
time, read from the clock when a step ends or the session exits.  It can
differ from the sum of the step results: a late tick counts the overshoot
here but records the allotted duration in the result.
"""

from __future__ import annotations

import math
import time
from dataclasses import replace
from typing import Callable

from ..program.models import RestStep, Step, step_duration_ms
from .events import (
    AddTenSeconds,
    Event,
    Exit,
    NextStep,
    Pause,
    Reset,
    Resume,
    SetPreferences,
    SkipRest,
    Start,
    Tick,
)
from .state import (
    SessionState,
    StepResult,
    TrainingState,
    initial_state,
)


Clock = Callable[[], int]

NEXT_UP_THRESHOLD_MS = 5000
EXTEND_MS = 10_000
NO_STEPS_ERROR = "Program has no steps"


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


# ── public API ────────────────────────────────────────────────────────────


def reduce(
    state: SessionState,
    event: Event,
    clock: Clock = wall_clock_ms,
) -> SessionState:
    """Apply *event* to *state* and return the resulting state."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return state
    return handler(state, event, clock)


# ── helpers ───────────────────────────────────────────────────────────────


def _show_banner(remaining_ms: int) -> bool:
    return 0 < remaining_ms <= NEXT_UP_THRESHOLD_MS


def _next_up(steps: tuple[Step, ...], index: int) -> Step | None:
    nxt = index + 1
    return steps[nxt] if nxt < len(steps) else None


def _allotted_ms(state: SessionState) -> int:
    """Planned duration of the current step plus any extension."""
    return step_duration_ms(state.current_step) + state.extension_ms


def _elapsed_in_step(state: SessionState) -> int:
    allotted = _allotted_ms(state)
    return max(0, min(allotted, allotted - state.remaining_ms))


def _active_ms(state: SessionState, now: int) -> int:
    """Wall-clock time spent in the current step, excluding pauses."""
    if state.step_start_time is None:
        return 0
    end = state.paused_at if state.paused_at is not None else now
    return max(0, end - state.step_start_time - state.paused_duration_ms)


def _result_for_current(
    state: SessionState, actual_ms: int, skipped: bool
) -> StepResult:
    step = state.current_step
    return StepResult(
        step_id=step.id,
        step_index=state.current_step_index,
        step_type=step.type,
        planned_duration_sec=step.duration_sec,
        actual_duration_ms=actual_ms,
        was_skipped=skipped,
        extension_sec=state.extension_ms // 1000,
    )


def _advance(state: SessionState, result: StepResult, clock: Clock) -> SessionState:
    """Record *result* and move to the next step, or finish."""
    steps = state.program.steps
    results = state.step_results + (result,)
    now = clock()
    total = state.total_elapsed_ms + _active_ms(state, now)
    nxt = state.current_step_index + 1

    if nxt >= len(steps):
        return replace(
            state,
            state=TrainingState.FINISHED,
            current_step_index=len(steps),
            current_step=None,
            remaining_ms=0,
            paused_at=None,
            extension_ms=0,
            show_next_up_banner=False,
            next_up_step=None,
            is_last_step=False,
            step_results=results,
            total_elapsed_ms=total,
        )

    step = steps[nxt]
    return replace(
        state,
        current_step_index=nxt,
        current_step=step,
        remaining_ms=step_duration_ms(step),
        step_start_time=now,
        paused_duration_ms=0,
        extension_ms=0,
        show_next_up_banner=False,
        next_up_step=_next_up(steps, nxt),
        is_last_step=nxt == len(steps) - 1,
        step_results=results,
        total_elapsed_ms=total,
    )


def _is_running(state: SessionState) -> bool:
    return (
        state.state is TrainingState.RUNNING
        and state.program is not None
        and state.current_step is not None
    )


# ── handlers ──────────────────────────────────────────────────────────────


def _on_start(state: SessionState, event: Start, clock: Clock) -> SessionState:
    program = event.program
    steps = getattr(program, "steps", None)
    if steps is None:
        return state

    if len(steps) == 0:
        return replace(initial_state(), error=NO_STEPS_ERROR)

    prefs = dict(
        sounds_enabled=state.sounds_enabled,
        vibrations_enabled=state.vibrations_enabled,
    )

    first = steps[0]
    return SessionState(
        state=TrainingState.RUNNING,
        program=program,
        current_step_index=0,
        current_step=first,
        remaining_ms=step_duration_ms(first),
        total_elapsed_ms=0,
        step_start_time=clock(),
        paused_at=None,
        paused_duration_ms=0,
        extension_ms=0,
        show_next_up_banner=False,
        next_up_step=_next_up(steps, 0),
        is_last_step=len(steps) == 1,
        step_results=(),
        error=None,
        **prefs,
    )


def _on_tick(state: SessionState, event: Tick, clock: Clock) -> SessionState:
    if not _is_running(state):
        return state
    remaining = event.remaining_ms
    if (
        isinstance(remaining, bool)
        or not isinstance(remaining, (int, float))
        or not math.isfinite(remaining)
    ):
        return state

    if remaining <= 0:
        result = _result_for_current(state, _allotted_ms(state), skipped=False)
        return _advance(state, result, clock)

    return replace(
        state,
        remaining_ms=remaining,
        show_next_up_banner=_show_banner(remaining),
    )


def _on_pause(state: SessionState, event: Pause, clock: Clock) -> SessionState:
    if state.state is not TrainingState.RUNNING:
        return state
    return replace(state, state=TrainingState.PAUSED, paused_at=clock())


def _on_resume(state: SessionState, event: Resume, clock: Clock) -> SessionState:
    if state.state is not TrainingState.PAUSED or state.paused_at is None:
        return state
    return replace(
        state,
        state=TrainingState.RUNNING,
        paused_at=None,
        paused_duration_ms=state.paused_duration_ms + (clock() - state.paused_at),
    )


def _skip_current(state: SessionState, clock: Clock) -> SessionState:
    result = _result_for_current(state, _elapsed_in_step(state), skipped=True)
    return _advance(state, result, clock)


def _on_skip_rest(state: SessionState, event: SkipRest, clock: Clock) -> SessionState:
    if not _is_running(state) or not isinstance(state.current_step, RestStep):
        return state
    return _skip_current(state, clock)


def _on_next_step(state: SessionState, event: NextStep, clock: Clock) -> SessionState:
    if not _is_running(state):
        return state
    return _skip_current(state, clock)


def _on_add_ten_seconds(
    state: SessionState, event: AddTenSeconds, clock: Clock
) -> SessionState:
    if not _is_running(state) or not isinstance(state.current_step, RestStep):
        return state
    remaining = state.remaining_ms + EXTEND_MS
    return replace(
        state,
        remaining_ms=remaining,
        extension_ms=state.extension_ms + EXTEND_MS,
        show_next_up_banner=_show_banner(remaining),
    )


def _on_exit(state: SessionState, event: Exit, clock: Clock) -> SessionState:
    if not state.is_active:
        return state
    return replace(
        state,
        state=TrainingState.EXITED,
        paused_at=None,
        show_next_up_banner=False,
        total_elapsed_ms=state.total_elapsed_ms + _active_ms(state, clock()),
    )


def _on_reset(state: SessionState, event: Reset, clock: Clock) -> SessionState:
    return initial_state()


def _on_set_preferences(
    state: SessionState, event: SetPreferences, clock: Clock
) -> SessionState:
    sounds = state.sounds_enabled if event.sounds_enabled is None else event.sounds_enabled
    vibrations = (
        state.vibrations_enabled
        if event.vibrations_enabled is None
        else event.vibrations_enabled
    )
    if sounds == state.sounds_enabled and vibrations == state.vibrations_enabled:
        return state
    return replace(state, sounds_enabled=sounds, vibrations_enabled=vibrations)


_HANDLERS: dict[type, Callable[[SessionState, Event, Clock], SessionState]] = {
    Start: _on_start,
    Tick: _on_tick,
    Pause: _on_pause,
    Resume: _on_resume,
    SkipRest: _on_skip_rest,
    NextStep: _on_next_step,
    AddTenSeconds: _on_add_ten_seconds,
    Exit: _on_exit,
    Reset: _on_reset,
    SetPreferences: _on_set_preferences,
}
