"""Derived values for renderers and the audio layer.

Pure functions of :class:`SessionState` (or of a millisecond value),
cheap enough to call after every reduction.

The cue predicates are tick-granularity dependent on purpose:
``should_play_countdown_sound`` matches the exact 3000/2000/1000 ms
boundaries, so the driver is responsible for delivering ticks that land
on them.
"""

from __future__ import annotations

import math

from ..program.models import step_duration_ms
from .state import SessionState, TrainingState

COUNTDOWN_CUE_MS = frozenset({3000, 2000, 1000})


def get_current_progress(state: SessionState) -> float:
    """Fraction (0-1) of the current step's planned duration elapsed."""
    if state.current_step is None:
        return 0.0
    duration = step_duration_ms(state.current_step)
    if duration <= 0:
        return 0.0
    elapsed = duration - state.remaining_ms
    return min(1.0, max(0.0, elapsed / duration))


def get_total_progress(state: SessionState) -> float:
    """Fraction (0-1) of the whole program completed."""
    if state.program is None or not state.program.steps:
        return 0.0
    if state.state is TrainingState.FINISHED:
        return 1.0
    done = state.current_step_index + get_current_progress(state)
    return min(1.0, done / len(state.program.steps))


def get_formatted_time(ms: float) -> str:
    """Render *ms* as ``MM:SS``.

    Minutes are unbounded (one hour reads ``60:00``) and partial seconds
    round up, so a countdown never shows ``00:00`` while time remains.
    """
    total_seconds = max(0, math.ceil(ms / 1000))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def should_play_countdown_sound(remaining_ms: float) -> bool:
    return remaining_ms in COUNTDOWN_CUE_MS


def should_play_step_complete_sound(remaining_ms: float) -> bool:
    return remaining_ms <= 0
