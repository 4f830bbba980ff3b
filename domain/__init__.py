"""
Domain layer for the Gym Platform API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Account,
    ChangeRequestStatus,
    DayOfWeek,
    Difficulty,
    Exercise,
    Role,
    TrainerChangeRequest,
    WorkoutLog,
    WorkoutPlan,
    WorkoutSession,
)
from domain.pagination import PageRequest, Pagination

__all__ = [
    "Account",
    "ChangeRequestStatus",
    "DayOfWeek",
    "Difficulty",
    "Exercise",
    "PageRequest",
    "Pagination",
    "Role",
    "TrainerChangeRequest",
    "WorkoutLog",
    "WorkoutPlan",
    "WorkoutSession",
]
