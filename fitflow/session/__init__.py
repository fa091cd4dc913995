"""Training session engine package."""

from .state import (
    TrainingState,
    StepResult,
    SessionState,
    initial_state,
)
from .events import (
    Event,
    Start,
    Tick,
    Pause,
    Resume,
    SkipRest,
    NextStep,
    AddTenSeconds,
    Exit,
    Reset,
    SetPreferences,
)
from .machine import (
    reduce,
    wall_clock_ms,
    Clock,
    NEXT_UP_THRESHOLD_MS,
    EXTEND_MS,
    NO_STEPS_ERROR,
)
from .selectors import (
    get_current_progress,
    get_total_progress,
    get_formatted_time,
    should_play_countdown_sound,
    should_play_step_complete_sound,
)
from .summary import SessionSummary, summarize

__all__ = [
    "TrainingState",
    "StepResult",
    "SessionState",
    "initial_state",
    "Event",
    "Start",
    "Tick",
    "Pause",
    "Resume",
    "SkipRest",
    "NextStep",
    "AddTenSeconds",
    "Exit",
    "Reset",
    "SetPreferences",
    "reduce",
    "wall_clock_ms",
    "Clock",
    "NEXT_UP_THRESHOLD_MS",
    "EXTEND_MS",
    "NO_STEPS_ERROR",
    "get_current_progress",
    "get_total_progress",
    "get_formatted_time",
    "should_play_countdown_sound",
    "should_play_step_complete_sound",
    "SessionSummary",
    "summarize",
]
