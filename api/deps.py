"""
FastAPI Dependency Providers for the Gym Platform API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and service providers create new instances per-request
- Auth providers resolve the bearer token to a RequestContext

Usage in routers:
    from api.deps import RequestContext, require_client, get_plan_service

    @router.get("/plans")
    def list_plans(
        ctx: RequestContext = Depends(require_client),
        plans: PlanService = Depends(get_plan_service),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_account_repo] = lambda: FakeAccountRepository()
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    AccountRepository,
    ExerciseRepository,
    PlanRepository,
    WorkoutLogRepository,
)

# Concrete implementations
from infrastructure import (
    SupabaseAccountRepository,
    SupabaseExerciseRepository,
    SupabasePlanRepository,
    SupabaseWorkoutLogRepository,
)

from application.exceptions import AuthenticationError, AuthorizationError
from application.use_cases import (
    AccountService,
    AssignmentService,
    AuthService,
    ExerciseCatalogService,
    PlanService,
    WorkoutLogService,
)
from backend.auth import decode_access_token, extract_bearer_token
from backend.settings import Settings, get_settings as _get_settings
from domain.models import Account, Role

logger = logging.getLogger(__name__)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_account_repo(
    client: Client = Depends(get_supabase_client_required),
) -> AccountRepository:
    """
    Get AccountRepository implementation.

    The return type is the Protocol to enable easy faking.
    """
    return SupabaseAccountRepository(client)


def get_exercise_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseRepository:
    return SupabaseExerciseRepository(client)


def get_plan_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PlanRepository:
    return SupabasePlanRepository(client)


def get_log_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutLogRepository:
    return SupabaseWorkoutLogRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_auth_service(
    account_repo: AccountRepository = Depends(get_account_repo),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(account_repo=account_repo, settings=settings)


def get_account_service(
    account_repo: AccountRepository = Depends(get_account_repo),
) -> AccountService:
    return AccountService(account_repo=account_repo)


def get_assignment_service(
    account_repo: AccountRepository = Depends(get_account_repo),
) -> AssignmentService:
    return AssignmentService(account_repo=account_repo)


def get_exercise_service(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
) -> ExerciseCatalogService:
    return ExerciseCatalogService(exercise_repo=exercise_repo)


def get_plan_service(
    plan_repo: PlanRepository = Depends(get_plan_repo),
    account_repo: AccountRepository = Depends(get_account_repo),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
) -> PlanService:
    return PlanService(
        plan_repo=plan_repo,
        account_repo=account_repo,
        exercise_repo=exercise_repo,
    )


def get_log_service(
    log_repo: WorkoutLogRepository = Depends(get_log_repo),
    plan_repo: PlanRepository = Depends(get_plan_repo),
    plan_service: PlanService = Depends(get_plan_service),
) -> WorkoutLogService:
    return WorkoutLogService(
        log_repo=log_repo,
        plan_repo=plan_repo,
        plan_service=plan_service,
    )


# =============================================================================
# Authentication Providers
# =============================================================================


@dataclass
class RequestContext:
    """The authenticated caller, handed explicitly to every protected handler."""

    account: Account

    @property
    def account_id(self) -> str:
        return self.account.id

    @property
    def role(self) -> Role:
        return self.account.role


def get_current_context(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    account_repo: AccountRepository = Depends(get_account_repo),
) -> RequestContext:
    """
    Resolve the bearer token to the calling account.

    Raises:
        AuthenticationError: Missing or invalid token, unknown or inactive account
    """
    token = extract_bearer_token(authorization)
    account_id = decode_access_token(token, settings)

    row = account_repo.get_by_id(account_id)
    if not row:
        raise AuthenticationError("Invalid token - user not found")
    account = Account.model_validate(row)
    if not account.is_active:
        raise AuthenticationError("Account is deactivated")
    return RequestContext(account=account)


def require_admin(ctx: RequestContext = Depends(get_current_context)) -> RequestContext:
    if ctx.role != Role.ADMIN:
        raise AuthorizationError("Access denied. Admin only.")
    return ctx


def require_trainer(ctx: RequestContext = Depends(get_current_context)) -> RequestContext:
    """Trainers and admins."""
    if ctx.role not in (Role.TRAINER, Role.ADMIN):
        raise AuthorizationError("Access denied. Trainers only.")
    return ctx


def require_client(ctx: RequestContext = Depends(get_current_context)) -> RequestContext:
    if ctx.role != Role.CLIENT:
        raise AuthorizationError("Access denied. Clients only.")
    return ctx


def require_approved_trainer(
    ctx: RequestContext = Depends(get_current_context),
) -> RequestContext:
    if ctx.role != Role.TRAINER:
        raise AuthorizationError("Access denied. Trainers only.")
    if not ctx.account.is_approved:
        raise AuthorizationError("Trainer account pending approval")
    return ctx


# =============================================================================
# Exports
# =============================================================================

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
    # Use cases
    "get_auth_service",
    "get_account_service",
    "get_assignment_service",
    "get_exercise_service",
    "get_plan_service",
    "get_log_service",
    # Authentication
    "RequestContext",
    "get_current_context",
    "require_admin",
    "require_trainer",
    "require_client",
    "require_approved_trainer",
]
