"""
Trainer workouts router.

This router provides, for approved trainers:
- Plan CRUD (create, list, detail, update, activate/deactivate)
- The exercise catalog (browse, add, retire own exercises)
- Statistics over the trainer's plans

Plans belonging to another trainer are reported as not found.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.deps import (
    RequestContext,
    get_exercise_service,
    get_plan_service,
    require_approved_trainer,
)
from api.responses import paginated, success
from api.schemas import TogglePlanRequest
from application.use_cases import (
    ExerciseCatalogService,
    ExerciseDraft,
    ExerciseFilters,
    PlanChanges,
    PlanDraft,
    PlanFilters,
    PlanService,
)
from domain.models import Difficulty
from domain.pagination import PageRequest

router = APIRouter(
    prefix="/workouts",
    tags=["Trainer Workouts"],
)

SortField = Literal["created_at", "updated_at", "name", "start_date"]


def split_csv(values: Optional[List[str]]) -> Optional[List[str]]:
    """Accept both ``?goals=a&goals=b`` and ``?goals=a,b``."""
    if not values:
        return None
    items = [item.strip() for value in values for item in value.split(",")]
    return [item for item in items if item] or None


# =============================================================================
# Plans
# =============================================================================


@router.post("/plans", status_code=201)
def create_plan(
    body: PlanDraft,
    ctx: RequestContext = Depends(require_approved_trainer),
    plans: PlanService = Depends(get_plan_service),
):
    """
    Create a plan for one of the trainer's assigned clients.

    Sessions are stored first, in order, then the plan referencing them.
    """
    plan = plans.create_plan(ctx.account_id, body)
    return success({"plan": plan}, "Workout plan created successfully")


@router.get("/plans")
def list_plans(
    client_id: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    frequency: Optional[str] = Query(None),
    level: Optional[Difficulty] = Query(None),
    goals: Optional[List[str]] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    sort_by: SortField = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(require_approved_trainer),
    plans: PlanService = Depends(get_plan_service),
):
    filters = PlanFilters(
        client_id=client_id,
        is_active=is_active,
        frequency=frequency,
        level=level,
        goals=split_csv(goals),
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = plans.list_trainer_plans(ctx.account_id, filters, PageRequest(page=page, limit=limit))
    return paginated("plans", result, "Workout plans retrieved successfully")


@router.get("/plans/{plan_id}")
def get_plan(
    plan_id: str,
    ctx: RequestContext = Depends(require_approved_trainer),
    plans: PlanService = Depends(get_plan_service),
):
    plan = plans.get_plan_for_trainer(ctx.account_id, plan_id)
    return success({"plan": plan}, "Workout plan retrieved successfully")


@router.put("/plans/{plan_id}")
def update_plan(
    plan_id: str,
    body: PlanChanges,
    ctx: RequestContext = Depends(require_approved_trainer),
    plans: PlanService = Depends(get_plan_service),
):
    """Update a plan. A ``sessions`` list replaces every existing session."""
    plan = plans.update_plan(ctx.account_id, plan_id, body)
    return success({"plan": plan}, "Workout plan updated successfully")


@router.put("/plans/{plan_id}/toggle")
def toggle_plan(
    plan_id: str,
    body: TogglePlanRequest,
    ctx: RequestContext = Depends(require_approved_trainer),
    plans: PlanService = Depends(get_plan_service),
):
    plan = plans.toggle_plan(ctx.account_id, plan_id, body.is_active)
    state = "activated" if plan.is_active else "deactivated"
    return success({"plan": plan.model_dump(mode="json")}, f"Workout plan {state} successfully")


# =============================================================================
# Exercise Catalog
# =============================================================================


@router.get("/exercises")
def list_exercises(
    muscle_groups: Optional[List[str]] = Query(None),
    equipment: Optional[List[str]] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    ctx: RequestContext = Depends(require_approved_trainer),
    catalog: ExerciseCatalogService = Depends(get_exercise_service),
):
    """Active exercises, sorted by name."""
    filters = ExerciseFilters(
        muscle_groups=split_csv(muscle_groups),
        equipment=split_csv(equipment),
        difficulty=difficulty,
        search=search,
    )
    result = catalog.list_exercises(filters, PageRequest(page=page, limit=limit))
    return paginated("exercises", result, "Exercises retrieved successfully")


@router.post("/exercises", status_code=201)
def create_exercise(
    body: ExerciseDraft,
    ctx: RequestContext = Depends(require_approved_trainer),
    catalog: ExerciseCatalogService = Depends(get_exercise_service),
):
    exercise = catalog.create_exercise(ctx.account_id, body)
    return success({"exercise": exercise.model_dump(mode="json")}, "Exercise created successfully")


@router.put("/exercises/{exercise_id}/deactivate")
def deactivate_exercise(
    exercise_id: str,
    ctx: RequestContext = Depends(require_approved_trainer),
    catalog: ExerciseCatalogService = Depends(get_exercise_service),
):
    exercise = catalog.deactivate_exercise(ctx.account_id, exercise_id)
    return success({"exercise": exercise.model_dump(mode="json")}, "Exercise deactivated successfully")


# =============================================================================
# Statistics
# =============================================================================


@router.get("/stats")
def trainer_stats(
    ctx: RequestContext = Depends(require_approved_trainer),
    plans: PlanService = Depends(get_plan_service),
):
    return success({"stats": plans.trainer_stats(ctx.account_id)}, "Statistics retrieved successfully")
