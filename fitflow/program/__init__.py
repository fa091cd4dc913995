"""Program package."""

from .models import (
    StepType,
    ProgramLevel,
    ExerciseStep,
    RestStep,
    Step,
    Program,
    step_duration_ms,
    total_duration_sec,
    format_duration,
    validate_program,
)
from .catalog import (
    FULL_BODY_EXPRESS,
    CORE_CARDIO_MIX,
    UPPER_BODY_STRENGTH,
    QUICK_MORNING_ROUTINE,
    HIIT_BLAST,
    SAMPLE_PROGRAMS,
    ProgramNotFoundError,
    find_program,
    get_program,
)

__all__ = [
    "StepType",
    "ProgramLevel",
    "ExerciseStep",
    "RestStep",
    "Step",
    "Program",
    "step_duration_ms",
    "total_duration_sec",
    "format_duration",
    "validate_program",
    "FULL_BODY_EXPRESS",
    "CORE_CARDIO_MIX",
    "UPPER_BODY_STRENGTH",
    "QUICK_MORNING_ROUTINE",
    "HIIT_BLAST",
    "SAMPLE_PROGRAMS",
    "ProgramNotFoundError",
    "find_program",
    "get_program",
]
