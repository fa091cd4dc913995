"""Shared test helpers for FitFlow."""

from fitflow.program import ExerciseStep, Program, ProgramLevel, RestStep
from fitflow.session.state import SessionState, TrainingState


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_640_995_200_000):  # 2022-01-01 00:00:00 UTC
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeSoundManager:
    """Records ``play`` calls instead of producing audio."""

    def __init__(self):
        self.played: list[str] = []

    def play(self, name: str) -> None:
        self.played.append(name)


def make_program(*steps, program_id: str = "prog_test") -> Program:
    """Build a consistent Program around *steps*."""
    return Program(
        id=program_id,
        title="Test Program",
        level=ProgramLevel.BEGINNER,
        steps=tuple(steps),
        total_active_sec=sum(s.duration_sec for s in steps if isinstance(s, ExerciseStep)),
        total_rest_sec=sum(s.duration_sec for s in steps if isinstance(s, RestStep)),
        steps_count=len(steps),
        estimated_calories=10,
    )


REST_30 = RestStep(id="rest", duration_sec=30)
SQUATS_20 = ExerciseStep(id="squats", title="Squats", duration_sec=20)


def assert_invariants(s: SessionState) -> None:
    assert (s.paused_at is not None) == (s.state is TrainingState.PAUSED)
    assert s.remaining_ms >= 0
    if s.program is not None and s.state is not TrainingState.IDLE:
        assert s.is_last_step == (s.current_step_index == len(s.program.steps) - 1)
    if s.state in (TrainingState.RUNNING, TrainingState.PAUSED):
        assert 0 <= s.current_step_index < len(s.program.steps)
        assert s.current_step is s.program.steps[s.current_step_index]
        assert len(s.step_results) == s.current_step_index
    if s.state is TrainingState.FINISHED:
        assert len(s.step_results) == len(s.program.steps)
