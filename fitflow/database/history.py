"""Workout history: recording sessions and aggregating stats.

Stats
-----
Only *completed* (FINISHED) sessions count toward stats.  Exited
sessions are stored so they can be listed, but they do not extend a
streak or add minutes.

    workouts_this_month   completed sessions since the 1st of the month
    total_minutes         sum of elapsed time, rounded to minutes
    total_calories        sum of the programs' estimated calories
    streak_days           consecutive days back from today with ≥1 workout
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from sqlalchemy.orm import selectinload

from ..session.state import StepResult
from ..session.summary import SessionSummary
from .db import get_session
from .models import StepRecord, WorkoutSession

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkoutStats:
    workouts_this_month: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    streak_days: int = 0


def record_session(
    summary: SessionSummary,
    step_results: Iterable[StepResult],
    completed_at: datetime | None = None,
) -> int:
    """Persist a session and its step results.  Returns the new row id."""
    with get_session() as db:
        record = WorkoutSession(
            program_id=summary.program_id,
            program_title=summary.program_title,
            completed_at=completed_at or datetime.now(),
            completed=summary.completed,
            total_elapsed_ms=summary.total_elapsed_ms,
            estimated_calories=summary.estimated_calories if summary.completed else 0,
            steps_completed=summary.steps_completed,
            skipped_steps=summary.skipped_steps,
        )
        for result in step_results:
            record.steps.append(StepRecord(
                step_index=result.step_index,
                step_id=result.step_id,
                step_type=result.step_type.value,
                planned_duration_sec=result.planned_duration_sec,
                actual_duration_ms=result.actual_duration_ms,
                was_skipped=result.was_skipped,
                extension_sec=result.extension_sec,
            ))
        db.add(record)
        db.flush()
        session_id = record.id

    log.info(
        "Recorded session %d (%s, completed=%s)",
        session_id, summary.program_id, summary.completed,
    )
    return session_id


def recent_sessions(limit: int = 10) -> list[WorkoutSession]:
    """Most recent sessions first, with their step records loaded."""
    with get_session() as db:
        rows = (
            db.query(WorkoutSession)
            .order_by(WorkoutSession.completed_at.desc(), WorkoutSession.id.desc())
            .options(selectinload(WorkoutSession.steps))
            .limit(limit)
            .all()
        )
        return rows


def _streak(days: set[date], today: date) -> int:
    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def workout_stats(today: date | None = None) -> WorkoutStats:
    today = today or date.today()
    month_start = datetime(today.year, today.month, 1)

    with get_session() as db:
        rows = (
            db.query(
                WorkoutSession.completed_at,
                WorkoutSession.total_elapsed_ms,
                WorkoutSession.estimated_calories,
            )
            .filter(WorkoutSession.completed.is_(True))
            .all()
        )

    if not rows:
        return WorkoutStats()

    return WorkoutStats(
        workouts_this_month=sum(1 for r in rows if r.completed_at >= month_start),
        total_minutes=round(sum(r.total_elapsed_ms for r in rows) / 60_000),
        total_calories=sum(r.estimated_calories for r in rows),
        streak_days=_streak({r.completed_at.date() for r in rows}, today),
    )
