"""
API package for the Gym Platform API.

This package contains:
- deps.py: FastAPI dependency providers for DI and role gates
- responses.py: Success envelope helpers
- schemas/: Request bodies not owned by a use case
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    RequestContext,
    get_account_repo,
    get_current_context,
    get_exercise_repo,
    get_log_repo,
    get_plan_repo,
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    require_admin,
    require_approved_trainer,
    require_client,
    require_trainer,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_account_repo",
    "get_exercise_repo",
    "get_plan_repo",
    "get_log_repo",
    # Authentication
    "RequestContext",
    "get_current_context",
    "require_admin",
    "require_trainer",
    "require_client",
    "require_approved_trainer",
]
