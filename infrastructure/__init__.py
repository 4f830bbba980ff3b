"""
Infrastructure Layer for the Gym Platform API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseAccountRepository,
    SupabaseExerciseRepository,
    SupabasePlanRepository,
    SupabaseWorkoutLogRepository,
)

__all__ = [
    "SupabaseAccountRepository",
    "SupabaseExerciseRepository",
    "SupabasePlanRepository",
    "SupabaseWorkoutLogRepository",
]
