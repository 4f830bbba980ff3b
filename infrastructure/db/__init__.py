"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseAccountRepository,
        SupabaseExerciseRepository,
        SupabasePlanRepository,
        SupabaseWorkoutLogRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    account_repo = SupabaseAccountRepository(client)
    plan_repo = SupabasePlanRepository(client)
"""

from infrastructure.db.account_repository import SupabaseAccountRepository
from infrastructure.db.exercise_repository import SupabaseExerciseRepository
from infrastructure.db.log_repository import SupabaseWorkoutLogRepository
from infrastructure.db.plan_repository import SupabasePlanRepository

__all__ = [
    # Accounts and assignment
    "SupabaseAccountRepository",

    # Exercise catalog
    "SupabaseExerciseRepository",

    # Plans and sessions
    "SupabasePlanRepository",

    # Workout logs
    "SupabaseWorkoutLogRepository",
]
