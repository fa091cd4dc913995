"""SQLAlchemy ORM models for FitFlow workout history."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class WorkoutSession(Base):
    """One finished or exited training session."""

    __tablename__ = "workout_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    program_id = Column(String(64), nullable=True)
    program_title = Column(String(255), nullable=True)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)
    completed = Column(Boolean, nullable=False, default=False)  # finished vs exited
    total_elapsed_ms = Column(Integer, nullable=False, default=0)
    estimated_calories = Column(Integer, nullable=False, default=0)
    steps_completed = Column(Integer, nullable=False, default=0)
    skipped_steps = Column(Integer, nullable=False, default=0)

    steps = relationship(
        "StepRecord",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="StepRecord.step_index",
    )

    def __repr__(self) -> str:
        return (
            f"<WorkoutSession id={self.id} program={self.program_id} "
            f"completed={self.completed}>"
        )


class StepRecord(Base):
    """Outcome of a single step within a recorded session."""

    __tablename__ = "step_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, ForeignKey("workout_sessions.id"), nullable=False)
    step_index = Column(Integer, nullable=False)
    step_id = Column(String(64), nullable=False)
    step_type = Column(String(20), nullable=False)   # exercise | rest
    planned_duration_sec = Column(Integer, nullable=False, default=0)
    actual_duration_ms = Column(Integer, nullable=False, default=0)
    was_skipped = Column(Boolean, nullable=False, default=False)
    extension_sec = Column(Integer, nullable=False, default=0)

    session = relationship("WorkoutSession", back_populates="steps")

    def __repr__(self) -> str:
        return (
            f"<StepRecord step={self.step_id} skipped={self.was_skipped} "
            f"ms={self.actual_duration_ms}>"
        )
