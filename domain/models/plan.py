"""
Workout plan aggregate and its sessions.

A plan is authored by a trainer for one of their clients. It references an
ordered list of separately stored WorkoutSession records and tracks the
client's progress through a multi-week schedule.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from domain.models.exercise import Difficulty


class DayOfWeek(str, Enum):
    """Weekday a session is scheduled on."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day: date) -> "DayOfWeek":
        """Weekday of a calendar date (date.weekday() is 0 for Monday)."""
        return list(cls)[day.weekday()]


class SessionExercise(BaseModel):
    """Prescription for one exercise within a session."""

    exercise_id: str
    sets: Optional[int] = Field(default=None, ge=1, le=20)
    reps: Optional[Union[int, str]] = Field(
        default=None,
        description="Reps per set (int or scheme such as '8-12' or 'AMRAP')",
    )
    weight: Optional[float] = Field(default=None, ge=0)
    duration_seconds: Optional[int] = Field(default=None, ge=1)
    rest_seconds: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)


class WorkoutSession(BaseModel):
    """A day's workout inside a plan."""

    id: str
    name: Optional[str] = Field(default=None, max_length=100)
    day_of_week: DayOfWeek
    exercises: List[SessionExercise] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=1000)
    estimated_duration: Optional[int] = Field(default=None, ge=1, description="Minutes")
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def exercise_ids(self) -> List[str]:
        return [item.exercise_id for item in self.exercises]


class CompletedSession(BaseModel):
    """One (session, week) pair the client has logged."""

    session_id: str
    week: int = Field(ge=1)
    completed_at: datetime


class PlanProgress(BaseModel):
    """Progress of a client through a plan."""

    completed_sessions: List[CompletedSession] = Field(default_factory=list)
    completion_rate: float = Field(default=0, ge=0, le=100)
    last_completed_at: Optional[datetime] = None

    def has_completed(self, session_id: str, week: int) -> bool:
        return any(
            item.session_id == session_id and item.week == week
            for item in self.completed_sessions
        )


class WorkoutPlan(BaseModel):
    """
    A trainer-owned, client-specific multi-week plan.

    Invariants checked at construction:
    - 1 <= current_week <= total_weeks
    - end_date is not before start_date
    """

    id: str
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    client_id: str
    trainer_id: str
    session_ids: List[str] = Field(default_factory=list)
    frequency: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    goals: List[str] = Field(default_factory=list)
    level: Optional[Difficulty] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    is_active: bool = True
    is_template: bool = False
    template_name: Optional[str] = None
    current_week: int = Field(default=1, ge=1)
    total_weeks: int = Field(default=4, ge=1, le=52)
    progress: PlanProgress = Field(default_factory=PlanProgress)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_schedule(self) -> "WorkoutPlan":
        if self.current_week > self.total_weeks:
            raise ValueError(
                f"current_week ({self.current_week}) exceeds total_weeks ({self.total_weeks})"
            )
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self

    @property
    def expected_sessions(self) -> int:
        """Number of session instances the full schedule contains."""
        return len(self.session_ids) * self.total_weeks

    @property
    def is_completed(self) -> bool:
        return self.progress.completion_rate >= 100

    def mark_session_completed(
        self,
        session_id: str,
        week: int,
        now: Optional[datetime] = None,
    ) -> "WorkoutPlan":
        """
        Record a completed session instance and recompute progress.

        completion_rate is the share of unique (session, week) instances
        completed, capped at 100 and never lower than the stored rate.
        Completing a later week advances current_week.

        Returns:
            A new WorkoutPlan with updated progress
        """
        now = now or datetime.now(timezone.utc)
        completed = list(self.progress.completed_sessions)
        if not self.progress.has_completed(session_id, week):
            completed.append(
                CompletedSession(session_id=session_id, week=week, completed_at=now)
            )

        rate = self.progress.completion_rate
        if self.expected_sessions > 0:
            counted = {
                (item.session_id, item.week)
                for item in completed
                if item.session_id in self.session_ids and item.week <= self.total_weeks
            }
            computed = min(100.0, round(100 * len(counted) / self.expected_sessions, 2))
            rate = max(rate, computed)

        progress = PlanProgress(
            completed_sessions=completed,
            completion_rate=rate,
            last_completed_at=now,
        )
        current_week = min(max(self.current_week, week), self.total_weeks)
        return self.model_copy(update={"progress": progress, "current_week": current_week})
