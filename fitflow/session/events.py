"""Events accepted by :func:`fitflow.session.machine.reduce`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..program.models import Program


@dataclass(frozen=True)
class Start:
    program: Program


@dataclass(frozen=True)
class Tick:
    remaining_ms: int


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class SkipRest:
    pass


@dataclass(frozen=True)
class NextStep:
    """Skip the current step whatever its type."""


@dataclass(frozen=True)
class AddTenSeconds:
    pass


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class SetPreferences:
    """Update preference flags.  ``None`` leaves a flag unchanged."""

    sounds_enabled: bool | None = None
    vibrations_enabled: bool | None = None


Event = Union[
    Start, Tick, Pause, Resume, SkipRest, NextStep,
    AddTenSeconds, Exit, Reset, SetPreferences,
]
