"""End-of-session summary built from the recorded step results."""

from __future__ import annotations

from dataclasses import dataclass

from ..program.models import StepType
from .state import SessionState, TrainingState


@dataclass(frozen=True)
class SessionSummary:
    program_id: str | None
    program_title: str | None
    completed: bool                 # FINISHED (True) vs EXITED (False)
    total_elapsed_ms: int
    steps_completed: int
    total_steps: int
    skipped_steps: int
    extended_steps: int
    total_extension_sec: int
    active_time_ms: int
    rest_time_ms: int
    average_step_ms: float
    completion_rate: float          # 0-100, share of recorded steps not skipped
    estimated_calories: int

    @property
    def total_minutes(self) -> int:
        return round(self.total_elapsed_ms / 60_000)


def summarize(state: SessionState) -> SessionSummary:
    """Summarize *state*, normally once it is FINISHED or EXITED."""
    results = state.step_results
    program = state.program

    skipped = sum(1 for r in results if r.was_skipped)
    count = len(results)

    return SessionSummary(
        program_id=program.id if program else None,
        program_title=program.title if program else None,
        completed=state.state is TrainingState.FINISHED,
        total_elapsed_ms=state.total_elapsed_ms,
        steps_completed=count,
        total_steps=len(program.steps) if program else 0,
        skipped_steps=skipped,
        extended_steps=sum(1 for r in results if r.was_extended),
        total_extension_sec=sum(r.extension_sec for r in results),
        active_time_ms=sum(
            r.actual_duration_ms for r in results if r.step_type is StepType.EXERCISE
        ),
        rest_time_ms=sum(
            r.actual_duration_ms for r in results if r.step_type is StepType.REST
        ),
        average_step_ms=(
            sum(r.actual_duration_ms for r in results) / count if count else 0.0
        ),
        completion_rate=((count - skipped) / count * 100) if count else 0.0,
        estimated_calories=(program.estimated_calories or 0) if program else 0,
    )
