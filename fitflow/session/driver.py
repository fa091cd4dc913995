"""Qt driver that feeds wall-clock time into the session state machine.

The driver owns the only timer in the system.  On every timeout it
computes the remaining time of the current step from clock reads::

    remaining = planned + extension - (now - step_start_time - paused)

and dispatches ``Tick(remaining)``.  The reducer trusts that value, so a
late or missing timeout (app backgrounded, event loop busy) only delays
the next computation; nothing drifts.

A tick resolves at most one step boundary.  The next step's clock starts
at the moment of advancement, so time overshooting a boundary is not
carried into the following step.

Signals
-------
state_changed(state: SessionState)
    Emitted after every transition that changed the state.
tick(remaining_ms: int)
    Emitted after each timer-driven Tick with the displayed value.
countdown_cue(seconds_left: int)
    3, 2, 1 in the final seconds of a step.
step_completed(result: StepResult)
    Once per step, in order, when it expires or is skipped.
next_up(step: Step)
    When the lookahead banner turns on.
session_finished(summary: SessionSummary)
session_exited(summary: SessionSummary)
haptic_requested(pattern: str)
    ``"countdown"`` or ``"step_complete"``, when vibrations are enabled.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..program.models import Program, RestStep, step_duration_ms
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
from .machine import Clock, reduce, wall_clock_ms
from .selectors import (
    COUNTDOWN_CUE_MS,
    should_play_countdown_sound,
    should_play_step_complete_sound,
)
from .state import SessionState, TrainingState, initial_state
from .summary import SessionSummary, summarize

if TYPE_CHECKING:
    from ..audio.sounds import SoundManager
    from ..settings import Settings

log = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 250


class SessionDriver(QObject):
    """Runs one training session at a time on the Qt event loop."""

    state_changed = pyqtSignal(object)
    tick = pyqtSignal(int)
    countdown_cue = pyqtSignal(int)
    step_completed = pyqtSignal(object)
    next_up = pyqtSignal(object)
    session_finished = pyqtSignal(object)
    session_exited = pyqtSignal(object)
    haptic_requested = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock = wall_clock_ms,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        sound_manager: SoundManager | None = None,
        history_enabled: bool = True,
        auto_pause_on_background: bool = True,
    ) -> None:
        super().__init__(parent)

        self._clock = clock
        self._tick_interval_ms = tick_interval_ms
        self._sounds = sound_manager
        self._history_enabled = history_enabled
        self._auto_pause_on_background = auto_pause_on_background

        self._state: SessionState = initial_state()
        self._last_reported_ms: int = 0
        self._in_background = False
        self._history_id: int | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_timer)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        parent: QObject | None = None,
        **kwargs,
    ) -> SessionDriver:
        driver = cls(
            parent,
            tick_interval_ms=settings.tick_interval_ms,
            history_enabled=settings.history_enabled,
            auto_pause_on_background=settings.auto_pause_on_background,
            **kwargs,
        )
        driver.set_preferences(
            sounds_enabled=settings.sounds_enabled,
            vibrations_enabled=settings.vibrations_enabled,
        )
        return driver

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ticking(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def in_background(self) -> bool:
        return self._in_background

    @property
    def history_id(self) -> int | None:
        """Row id of the last session written to history, if any."""
        return self._history_id

    def compute_remaining_ms(self) -> int:
        """Remaining time in the current step, from the clock."""
        s = self._state
        if s.current_step is None or s.step_start_time is None:
            return s.remaining_ms
        now = self._clock()
        paused = s.paused_duration_ms
        if s.paused_at is not None:
            paused += now - s.paused_at
        elapsed = now - s.step_start_time - paused
        return step_duration_ms(s.current_step) + s.extension_ms - elapsed

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, program: Program) -> SessionState:
        return self.dispatch(Start(program))

    def pause(self) -> SessionState:
        return self.dispatch(Pause())

    def resume(self) -> SessionState:
        return self.dispatch(Resume())

    def skip_rest(self) -> SessionState:
        return self.dispatch(SkipRest())

    def next_step(self) -> SessionState:
        return self.dispatch(NextStep())

    def add_ten_seconds(self) -> SessionState:
        return self.dispatch(AddTenSeconds())

    def exit(self) -> SessionState:
        return self.dispatch(Exit())

    def reset(self) -> SessionState:
        return self.dispatch(Reset())

    def set_preferences(
        self,
        *,
        sounds_enabled: bool | None = None,
        vibrations_enabled: bool | None = None,
    ) -> SessionState:
        return self.dispatch(SetPreferences(sounds_enabled, vibrations_enabled))

    def enter_background(self) -> None:
        """The host app lost focus.  Auto-pauses a running session."""
        self._in_background = True
        if (
            self._auto_pause_on_background
            and self._state.state is TrainingState.RUNNING
        ):
            log.info("Auto-pausing session on background")
            self.pause()

    def enter_foreground(self) -> None:
        """The host app is active again.  The session stays paused."""
        self._in_background = False

    def dispatch(self, event: Event) -> SessionState:
        """Reduce *event* into the current state and fan out side effects."""
        previous = self._state
        current = reduce(previous, event, self._clock)
        if current is previous:
            return current

        self._state = current
        self._after_transition(previous, current, event)
        return current

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_timer(self) -> None:
        if self._state.state is not TrainingState.RUNNING:
            self._qt_timer.stop()
            return
        remaining = self._snap_to_cue(self.compute_remaining_ms())
        self._last_reported_ms = remaining
        self.dispatch(Tick(remaining))
        self.tick.emit(int(self._state.remaining_ms))

    def _snap_to_cue(self, remaining: int) -> int:
        """Report a 3/2/1 s boundary exactly if this tick just crossed it.

        Only boundaries crossed within the last timer interval are
        snapped, so a long gap does not replay a burst of cues.
        """
        if remaining <= 0:
            return remaining
        for boundary in sorted(COUNTDOWN_CUE_MS, reverse=True):
            if (
                self._last_reported_ms > boundary >= remaining
                and boundary - remaining < self._tick_interval_ms
            ):
                return boundary
        return remaining

    def _sync_timer(self) -> None:
        if self._state.state is TrainingState.RUNNING:
            if not self._qt_timer.isActive():
                self._qt_timer.start()
        else:
            self._qt_timer.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: side effects
    # ══════════════════════════════════════════════════════════════════

    def _after_transition(
        self, previous: SessionState, current: SessionState, event: Event
    ) -> None:
        started = isinstance(event, Start) and current.state is TrainingState.RUNNING
        step_changed = started or (
            current.current_step_index != previous.current_step_index
        )
        if step_changed or isinstance(event, AddTenSeconds):
            self._last_reported_ms = current.remaining_ms

        if started:
            self._history_id = None
            log.info(
                "Session started: %s (%d steps)",
                current.program.id, len(current.program.steps),
            )
            self._play(current, "session_start")

        new_results = () if started else current.step_results[len(previous.step_results):]
        for result in new_results:
            log.debug(
                "Step %s done (skipped=%s, %d ms)",
                result.step_id, result.was_skipped, result.actual_duration_ms,
            )
            self.step_completed.emit(result)

        if isinstance(event, Tick):
            if should_play_countdown_sound(event.remaining_ms):
                self.countdown_cue.emit(int(event.remaining_ms // 1000))
                self._play(current, "countdown")
                self._haptic(current, "countdown")
            if (
                should_play_step_complete_sound(event.remaining_ms)
                and current.state is TrainingState.RUNNING
            ):
                self._play(current, "step_complete")
                self._haptic(current, "step_complete")

        if (
            not started
            and step_changed
            and current.state is TrainingState.RUNNING
            and isinstance(current.current_step, RestStep)
        ):
            self._play(current, "rest_start")

        if (
            current.show_next_up_banner
            and not previous.show_next_up_banner
            and current.next_up_step is not None
        ):
            self.next_up.emit(current.next_up_step)

        self._sync_timer()
        self.state_changed.emit(current)

        if current.is_terminal and not previous.is_terminal:
            self._on_session_over(current)
        elif current.error and current.error != previous.error:
            log.warning("Session not started: %s", current.error)

    def _on_session_over(self, current: SessionState) -> None:
        if current.state is TrainingState.FINISHED:
            self._haptic(current, "step_complete")
            self._play(current, "session_finished")
            summary = self._record(current)
            log.info("Session finished: %s", current.program.id)
            self.session_finished.emit(summary)
        else:
            summary = self._record(current)
            log.info(
                "Session exited after %d of %d steps",
                len(current.step_results), len(current.program.steps),
            )
            self.session_exited.emit(summary)

    def _play(self, state: SessionState, name: str) -> None:
        if self._sounds is not None and state.sounds_enabled:
            self._sounds.play(name)

    def _haptic(self, state: SessionState, pattern: str) -> None:
        if state.vibrations_enabled:
            self.haptic_requested.emit(pattern)

    def _record(self, state: SessionState) -> SessionSummary:
        summary = summarize(state)
        if not self._history_enabled:
            return summary

        from sqlalchemy.exc import SQLAlchemyError

        from ..database.history import record_session

        try:
            self._history_id = record_session(summary, state.step_results)
        except SQLAlchemyError:
            log.exception("Could not record session history")
        return summary
