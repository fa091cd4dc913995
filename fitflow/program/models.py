"""Program and step definitions for FitFlow.

Step variants
-------------
A program is an ordered tuple of steps.  Each step is one of two
variants, tagged by :class:`StepType`:

    ExerciseStep   timed work interval (title, description, reps…)
    RestStep       timed recovery interval with an optional tip

Steps are referenced by index only.  Programs are frozen and the session
engine never mutates one.

Validation
----------
``validate_program`` checks durations and declared totals and returns a
list of human-readable errors (empty when the program is sound).  The
engine itself only checks for an empty step list; everything else is
the catalog's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# ── enums ─────────────────────────────────────────────────────────────────


class StepType(Enum):
    EXERCISE = "exercise"
    REST = "rest"


class ProgramLevel(Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


# ── steps ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ExerciseStep:
    id: str
    title: str
    duration_sec: int
    description: str | None = None
    icon: str | None = None
    animation_ref: str | None = None
    target_reps: int | None = None
    equipment: tuple[str, ...] = ()

    @property
    def type(self) -> StepType:
        return StepType.EXERCISE


@dataclass(frozen=True)
class RestStep:
    id: str
    duration_sec: int
    title: str = "Rest"
    tip: str | None = None  # e.g. "Shake out arms", "Hydrate"

    @property
    def type(self) -> StepType:
        return StepType.REST


Step = Union[ExerciseStep, RestStep]


def step_duration_ms(step: Step) -> int:
    """Planned duration of *step* in milliseconds."""
    return step.duration_sec * 1000


# ── program ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Program:
    """An immutable workout program as supplied by the catalog."""

    id: str
    title: str
    level: ProgramLevel
    steps: tuple[Step, ...]
    total_active_sec: int = 0    # sum of exercise durations
    total_rest_sec: int = 0      # sum of rest durations
    steps_count: int = 0
    description: str | None = None
    tags: tuple[str, ...] = ()
    estimated_calories: int | None = None
    thumbnail_url: str | None = None
    difficulty: int = 1          # 1-5 scale
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def exercise_steps(self) -> tuple[ExerciseStep, ...]:
        return tuple(s for s in self.steps if isinstance(s, ExerciseStep))

    @property
    def rest_steps(self) -> tuple[RestStep, ...]:
        return tuple(s for s in self.steps if isinstance(s, RestStep))


def total_duration_sec(program: Program) -> int:
    return program.total_active_sec + program.total_rest_sec


def format_duration(seconds: int) -> str:
    """Format *seconds* as ``MM:SS``, or ``H:MM:SS`` from one hour up."""
    seconds = max(0, int(seconds))
    if seconds >= 3600:
        hours, rest = divmod(seconds, 3600)
        minutes, secs = divmod(rest, 60)
        return f"{hours}:{minutes:02d}:{secs:02d}"
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


# ── validation ────────────────────────────────────────────────────────────


def validate_program(program: Program) -> list[str]:
    """Return a list of problems with *program* (empty when valid)."""
    errors: list[str] = []

    if not program.steps:
        errors.append("Program has no steps")

    for index, step in enumerate(program.steps):
        if step.duration_sec <= 0:
            errors.append(
                f"Step {index + 1} ({step.title}) has invalid duration: "
                f"{step.duration_sec}s"
            )

    if len(program.steps) != program.steps_count:
        errors.append(
            f"Steps count mismatch: declared {program.steps_count}, "
            f"actual {len(program.steps)}"
        )

    active = sum(s.duration_sec for s in program.exercise_steps)
    rest = sum(s.duration_sec for s in program.rest_steps)

    if active != program.total_active_sec:
        errors.append(
            f"Total active time mismatch: declared {program.total_active_sec}s, "
            f"actual {active}s"
        )
    if rest != program.total_rest_sec:
        errors.append(
            f"Total rest time mismatch: declared {program.total_rest_sec}s, "
            f"actual {rest}s"
        )

    return errors
