"""
Client workouts router.

This router provides, for clients:
- Their plans (list and detail)
- Today's scheduled session
- Workout logging and log history
- Personal statistics
"""

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.deps import (
    RequestContext,
    get_log_service,
    get_plan_service,
    require_client,
)
from api.responses import paginated, success
from api.routers.workouts import SortField, split_csv
from application.use_cases import (
    LogEntry,
    LogFilters,
    PlanFilters,
    PlanService,
    WorkoutLogService,
)
from domain.models import DayOfWeek, Difficulty
from domain.pagination import PageRequest

router = APIRouter(
    prefix="/client-workouts",
    tags=["Client Workouts"],
)


# =============================================================================
# Plans
# =============================================================================


@router.get("/plans")
def list_my_plans(
    is_active: Optional[bool] = Query(None),
    frequency: Optional[str] = Query(None),
    level: Optional[Difficulty] = Query(None),
    goals: Optional[List[str]] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    sort_by: SortField = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(require_client),
    plans: PlanService = Depends(get_plan_service),
):
    filters = PlanFilters(
        is_active=is_active,
        frequency=frequency,
        level=level,
        goals=split_csv(goals),
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = plans.list_client_plans(ctx.account_id, filters, PageRequest(page=page, limit=limit))
    return paginated("plans", result, "Workout plans retrieved successfully")


@router.get("/plans/{plan_id}")
def get_my_plan(
    plan_id: str,
    ctx: RequestContext = Depends(require_client),
    plans: PlanService = Depends(get_plan_service),
):
    plan = plans.get_plan_for_client(ctx.account_id, plan_id)
    return success({"plan": plan}, "Workout plan retrieved successfully")


@router.get("/today")
def today_workout(
    ctx: RequestContext = Depends(require_client),
    logs: WorkoutLogService = Depends(get_log_service),
):
    """The session scheduled for today in the active plan, if any."""
    workout = logs.today_workout(ctx.account_id)
    if workout is None:
        return success({"workout": None}, "No workout scheduled for today")
    return success({"workout": workout}, "Today's workout retrieved successfully")


# =============================================================================
# Logs
# =============================================================================


@router.post("/logs", status_code=201)
def log_workout(
    body: LogEntry,
    ctx: RequestContext = Depends(require_client),
    logs: WorkoutLogService = Depends(get_log_service),
):
    result = logs.record_log(ctx.account_id, body)
    return success(result, "Workout logged successfully")


@router.get("/logs")
def list_my_logs(
    week: Optional[int] = Query(None, ge=1),
    day_of_week: Optional[DayOfWeek] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(require_client),
    logs: WorkoutLogService = Depends(get_log_service),
):
    """Log history, newest first. The date range applies only when both ends are given."""
    filters = LogFilters(week=week, day_of_week=day_of_week, start_date=start_date, end_date=end_date)
    result = logs.list_logs(ctx.account_id, filters, PageRequest(page=page, limit=limit))
    return paginated("logs", result, "Workout logs retrieved successfully")


# =============================================================================
# Statistics
# =============================================================================


@router.get("/stats")
def client_stats(
    ctx: RequestContext = Depends(require_client),
    logs: WorkoutLogService = Depends(get_log_service),
):
    return success({"stats": logs.client_stats(ctx.account_id)}, "Statistics retrieved successfully")
