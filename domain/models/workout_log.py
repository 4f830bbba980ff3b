"""
Workout log: one record per completed session instance. Append-only.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.plan import DayOfWeek


class PerformedSet(BaseModel):
    """What the client actually did for one set."""

    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    completed: bool = True


class LoggedExercise(BaseModel):
    """Performance for one exercise of the session."""

    exercise_id: str
    sets: List[PerformedSet] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=500)


class WorkoutLog(BaseModel):
    id: str
    client_id: str
    trainer_id: str
    plan_id: str
    session_id: str
    week: int = Field(ge=1)
    day_of_week: Optional[DayOfWeek] = None
    completed_at: datetime
    actual_duration: Optional[int] = Field(default=None, ge=0, description="Minutes")
    exercises: List[LoggedExercise] = Field(default_factory=list)
    overall_notes: Optional[str] = Field(default=None, max_length=1000)
    difficulty: Optional[int] = Field(default=None, ge=1, le=10)
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    mood: Optional[int] = Field(default=None, ge=1, le=10)
    pain_level: Optional[int] = Field(default=None, ge=0, le=10)
    is_completed: bool = True
    created_at: Optional[datetime] = None
