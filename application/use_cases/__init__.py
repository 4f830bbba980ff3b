"""
Application Use Cases for the Gym Platform API.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases raise application exceptions; the API layer shapes responses

Usage:
    from application.use_cases import AssignmentService, PlanService

    assignment = AssignmentService(account_repo=account_repo)
    client = assignment.assign_client(client_id="c-1", trainer_id="t-1")

    plans = PlanService(
        plan_repo=plan_repo,
        account_repo=account_repo,
        exercise_repo=exercise_repo,
    )
    plan = plans.create_plan(trainer_id="t-1", draft=PlanDraft(...))
"""

from application.use_cases.accounts import (
    AccountFilters,
    AccountService,
    ProfileChanges,
    TrainerProfileChanges,
    load_account,
)
from application.use_cases.assignment import AssignmentService
from application.use_cases.auth import AuthService, RegistrationData
from application.use_cases.exercises import (
    ExerciseCatalogService,
    ExerciseDraft,
    ExerciseFilters,
)
from application.use_cases.plans import (
    PlanChanges,
    PlanDraft,
    PlanFilters,
    PlanService,
    SessionDraft,
)
from application.use_cases.results import AuthResult, PageResult
from application.use_cases.workout_logs import LogEntry, LogFilters, WorkoutLogService

__all__ = [
    # Results
    "AuthResult",
    "PageResult",
    # Auth
    "AuthService",
    "RegistrationData",
    # Accounts
    "AccountService",
    "AccountFilters",
    "ProfileChanges",
    "TrainerProfileChanges",
    "load_account",
    # Assignment
    "AssignmentService",
    # Catalog
    "ExerciseCatalogService",
    "ExerciseDraft",
    "ExerciseFilters",
    # Plans
    "PlanService",
    "PlanDraft",
    "PlanChanges",
    "PlanFilters",
    "SessionDraft",
    # Logs
    "WorkoutLogService",
    "LogEntry",
    "LogFilters",
]
