"""
Repository Interfaces (Ports) for the Gym Platform API.

This package defines abstract interfaces that decouple the use cases from
infrastructure (database). Implementations are provided in the
infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import AccountRepository, PlanRepository

    class PlanAuthoringService:
        def __init__(self, plan_repo: PlanRepository, account_repo: AccountRepository):
            self._plan_repo = plan_repo
            self._account_repo = account_repo
"""

from application.ports.account_repository import AccountRepository
from application.ports.exercise_repository import ExerciseRepository
from application.ports.log_repository import WorkoutLogRepository
from application.ports.plan_repository import PlanRepository

__all__ = [
    "AccountRepository",
    "ExerciseRepository",
    "PlanRepository",
    "WorkoutLogRepository",
]
