"""
Domain models for the Gym Platform API.

These models represent the core business concepts:
- Account: Client, trainer or admin, including the trainer change request
- Exercise: Catalog entry referenced by sessions and logs
- WorkoutPlan: Trainer-authored multi-week plan for one client
- WorkoutSession: A day's workout referenced by a plan
- WorkoutLog: A completed session instance

Usage:
    >>> from domain.models import WorkoutPlan

    >>> plan = WorkoutPlan.model_validate(row)
    >>> plan = plan.mark_session_completed(session_id, week=1)
"""

from domain.models.account import (
    Account,
    ChangeRequestStatus,
    Role,
    TrainerChangeRequest,
)
from domain.models.exercise import Difficulty, Exercise
from domain.models.plan import (
    CompletedSession,
    DayOfWeek,
    PlanProgress,
    SessionExercise,
    WorkoutPlan,
    WorkoutSession,
)
from domain.models.workout_log import LoggedExercise, PerformedSet, WorkoutLog

__all__ = [
    # Accounts
    "Account",
    "Role",
    "TrainerChangeRequest",
    "ChangeRequestStatus",
    # Catalog
    "Exercise",
    "Difficulty",
    # Plans
    "WorkoutPlan",
    "WorkoutSession",
    "SessionExercise",
    "PlanProgress",
    "CompletedSession",
    "DayOfWeek",
    # Logs
    "WorkoutLog",
    "LoggedExercise",
    "PerformedSet",
]
