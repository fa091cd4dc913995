"""Session state shape for the training engine.

States
------
IDLE       No session yet (or START was given an empty program).
RUNNING    Current step counting down.
PAUSED     Countdown frozen; ``paused_at`` holds when the pause began.
FINISHED   Last step expired or was skipped.  Terminal.
EXITED     User left mid-program.  Terminal; results so far are kept.

Transitions
-----------
IDLE → RUNNING                    (start)
RUNNING ⇄ PAUSED                  (pause / resume)
RUNNING → FINISHED                (last step expires or is skipped)
RUNNING | PAUSED → EXITED         (exit)
Any → IDLE                        (reset)

``SessionState`` is frozen.  Every transition builds a new value with
``dataclasses.replace``; a no-op transition returns the same object so
callers can detect it with ``is``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..program.models import Program, Step, StepType


class TrainingState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"
    EXITED = "exited"


ACTIVE_STATES = frozenset({TrainingState.RUNNING, TrainingState.PAUSED})
TERMINAL_STATES = frozenset({TrainingState.FINISHED, TrainingState.EXITED})


@dataclass(frozen=True)
class StepResult:
    """How a single step ended.  Appended once per step, in order."""

    step_id: str
    step_index: int
    step_type: StepType
    planned_duration_sec: int
    actual_duration_ms: int
    was_skipped: bool = False
    extension_sec: int = 0

    @property
    def was_extended(self) -> bool:
        return self.extension_sec > 0


@dataclass(frozen=True)
class SessionState:
    state: TrainingState = TrainingState.IDLE
    program: Program | None = None
    current_step_index: int = 0
    current_step: Step | None = None
    remaining_ms: int = 0
    total_elapsed_ms: int = 0
    step_start_time: int | None = None     # clock ms
    paused_at: int | None = None           # clock ms, set only while PAUSED
    paused_duration_ms: int = 0
    extension_ms: int = 0                  # added to the current rest step
    show_next_up_banner: bool = False
    next_up_step: Step | None = None
    is_last_step: bool = False
    step_results: tuple[StepResult, ...] = ()
    sounds_enabled: bool = True
    vibrations_enabled: bool = True
    error: str | None = None

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


def initial_state() -> SessionState:
    """The pristine state a fresh session (or RESET) starts from."""
    return SessionState()
