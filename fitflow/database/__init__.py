"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import WorkoutSession, StepRecord

__all__ = ["get_session", "init_db", "configure_engine", "WorkoutSession", "StepRecord"]
