"""FitFlow command line: python -m fitflow.

Commands
--------
list                  bundled programs
show <program_id>     steps and validation report for one program
run <program_id>      run a session headless, printing the countdown
history               workout stats and recent sessions
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from .logging_utils import get_default_log_path, setup_logging
from .program import (
    SAMPLE_PROGRAMS,
    ProgramNotFoundError,
    RestStep,
    format_duration,
    get_program,
    total_duration_sec,
    validate_program,
)
from .session.selectors import get_formatted_time, get_total_progress
from .session.state import TrainingState
from .settings import load_settings

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitflow", description="Timed workout sessions")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level (default: from settings)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Also log to this file (e.g. {get_default_log_path()})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List bundled programs")

    show = sub.add_parser("show", help="Show a program's steps")
    show.add_argument("program_id")

    run = sub.add_parser("run", help="Run a training session")
    run.add_argument("program_id")
    run.add_argument("--tick-ms", type=int, default=None, help="Timer interval in ms")
    run.add_argument("--no-sound", action="store_true", help="Disable audio cues")
    run.add_argument("--no-history", action="store_true", help="Do not record the session")

    hist = sub.add_parser("history", help="Show workout stats and recent sessions")
    hist.add_argument("--limit", type=int, default=10)

    return parser


# ── commands ─────────────────────────────────────────────────────────────


def _cmd_list() -> int:
    for program in SAMPLE_PROGRAMS:
        print(
            f"{program.id:<28} {program.title:<24} {program.level.value:<13} "
            f"{len(program.steps):>2} steps  {format_duration(total_duration_sec(program))}"
        )
    return 0


def _cmd_show(program_id: str) -> int:
    program = get_program(program_id)
    print(f"{program.title} ({program.level.value}, difficulty {program.difficulty}/5)")
    if program.description:
        print(program.description)
    print()
    for index, step in enumerate(program.steps, start=1):
        kind = "rest" if isinstance(step, RestStep) else "exercise"
        extra = step.tip if isinstance(step, RestStep) else step.description
        print(f"{index:>2}. [{kind:<8}] {step.title:<22} {format_duration(step.duration_sec)}  {extra or ''}")

    errors = validate_program(program)
    if errors:
        print()
        for error in errors:
            print(f"! {error}")
        return 1
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    from PyQt6.QtCore import QCoreApplication

    from .database.db import init_db
    from .session.driver import SessionDriver

    settings = load_settings()
    if args.tick_ms:
        settings.tick_interval_ms = args.tick_ms
    if args.no_sound:
        settings.sounds_enabled = False
    if args.no_history:
        settings.history_enabled = False

    program = get_program(args.program_id)
    if settings.history_enabled:
        init_db()

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    sound_manager = None
    if settings.sounds_enabled:
        from .audio.sounds import SoundManager

        sound_manager = SoundManager()
        sound_manager.set_volume(settings.sound_volume)

    driver = SessionDriver.from_settings(settings, sound_manager=sound_manager)
    outcome: dict[str, object] = {}
    last_line = [""]

    def on_tick(remaining_ms: int) -> None:
        s = driver.state
        if s.current_step is None:
            return
        line = (
            f"[{s.current_step_index + 1:>2}/{len(s.program.steps)}] "
            f"{s.current_step.title:<22} {get_formatted_time(remaining_ms)}  "
            f"{get_total_progress(s) * 100:5.1f}%"
        )
        if s.show_next_up_banner and s.next_up_step is not None:
            line += f"  next: {s.next_up_step.title}"
        if line != last_line[0]:
            last_line[0] = line
            print("\r" + line.ljust(78), end="", flush=True)

    def on_done(summary) -> None:
        outcome["summary"] = summary
        print()
        app.quit()

    driver.tick.connect(on_tick)
    driver.session_finished.connect(on_done)
    driver.session_exited.connect(on_done)

    signal.signal(signal.SIGINT, lambda *_: driver.exit())

    state = driver.start(program)
    if state.state is not TrainingState.RUNNING:
        print(f"Cannot start {program.id}: {state.error}", file=sys.stderr)
        return 1

    app.exec()

    summary = outcome.get("summary")
    if summary is None:
        return 1
    status = "Finished" if summary.completed else "Exited"
    print(
        f"{status}: {summary.program_title}  "
        f"time {format_duration(round(summary.total_elapsed_ms / 1000))}  "
        f"steps {summary.steps_completed}/{summary.total_steps}  "
        f"skipped {summary.skipped_steps}  "
        f"completion {summary.completion_rate:.0f}%"
    )
    return 0 if summary.completed else 2


def _cmd_history(limit: int) -> int:
    from .database.db import init_db
    from .database.history import recent_sessions, workout_stats

    init_db()
    stats = workout_stats()
    print(
        f"This month: {stats.workouts_this_month} workouts  "
        f"Total: {stats.total_minutes} min, {stats.total_calories} kcal  "
        f"Streak: {stats.streak_days} days"
    )
    for row in recent_sessions(limit):
        mark = "✓" if row.completed else "✗"
        print(
            f"{mark} {row.completed_at:%Y-%m-%d %H:%M}  {row.program_title or row.program_id:<24} "
            f"{format_duration(round(row.total_elapsed_ms / 1000))}  "
            f"{row.steps_completed} steps ({row.skipped_steps} skipped)"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(args.log_level or settings.log_level, args.log_file)

    try:
        if args.command == "list":
            return _cmd_list()
        if args.command == "show":
            return _cmd_show(args.program_id)
        if args.command == "run":
            return _cmd_run(args)
        if args.command == "history":
            return _cmd_history(args.limit)
    except ProgramNotFoundError as exc:
        log.error("Unknown program: %s", exc.args[0])
        return 1
    return 1


if __name__ == "__main__":
    sys.exit(main())
