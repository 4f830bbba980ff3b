"""
Plan Authoring Use Case.

Trainers write multi-week workout plans for their assigned clients; clients
read the plans written for them.

Workflow for plan creation:
1. Verify the client exists and is assigned to the calling trainer
2. Verify every referenced exercise exists and is active
3. Persist each session, in order
4. Persist the plan referencing the session IDs
5. If step 3 or 4 fails, delete the sessions this call created

Sessions and plan are separate writes, so step 5 is a best-effort
compensation, not a transaction.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from application.exceptions import (
    AuthorizationError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from application.ports import AccountRepository, ExerciseRepository, PlanRepository
from application.use_cases.results import PageResult
from domain.models import (
    Account,
    DayOfWeek,
    Difficulty,
    Exercise,
    PlanProgress,
    Role,
    WorkoutPlan,
    WorkoutSession,
)
from domain.models.plan import SessionExercise
from domain.pagination import PageRequest, Pagination

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================

class SessionDraft(BaseModel):
    """A session as written by the trainer, before it is stored."""

    name: Optional[str] = Field(default=None, max_length=100)
    day_of_week: DayOfWeek
    exercises: List[SessionExercise] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=1000)
    estimated_duration: Optional[int] = Field(default=None, ge=1)


class PlanDraft(BaseModel):
    """Body of a plan creation request."""

    client_id: str
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    frequency: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    goals: List[str] = Field(default_factory=list)
    level: Optional[Difficulty] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    is_template: bool = False
    template_name: Optional[str] = None
    total_weeks: int = Field(default=4, ge=1, le=52)
    sessions: List[SessionDraft] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_dates(self) -> "PlanDraft":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class PlanChanges(BaseModel):
    """
    Body of a plan update request.

    client_id and trainer_id are not accepted; a plan never changes hands.
    When sessions is given it replaces every existing session.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    frequency: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    goals: Optional[List[str]] = None
    level: Optional[Difficulty] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    is_active: Optional[bool] = None
    is_template: Optional[bool] = None
    template_name: Optional[str] = None
    current_week: Optional[int] = Field(default=None, ge=1)
    total_weeks: Optional[int] = Field(default=None, ge=1, le=52)
    sessions: Optional[List[SessionDraft]] = None


class PlanFilters(BaseModel):
    client_id: Optional[str] = None
    is_active: Optional[bool] = None
    frequency: Optional[str] = None
    level: Optional[Difficulty] = None
    goals: Optional[List[str]] = None
    search: Optional[str] = None
    sort_by: Literal["created_at", "updated_at", "name", "start_date"] = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"


# =============================================================================
# Use Case
# =============================================================================

class PlanService:
    """
    Use case for authoring and reading workout plans.

    Dependencies are injected via constructor for testability.
    """

    def __init__(
        self,
        plan_repo: PlanRepository,
        account_repo: AccountRepository,
        exercise_repo: ExerciseRepository,
    ) -> None:
        self._plan_repo = plan_repo
        self._account_repo = account_repo
        self._exercise_repo = exercise_repo

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_plan(self, trainer_id: str, draft: PlanDraft) -> Dict[str, Any]:
        """
        Create a plan and its sessions for one of the trainer's clients.

        Args:
            trainer_id: The authoring trainer
            draft: Plan fields and sessions

        Returns:
            The stored plan with sessions, client and trainer expanded

        Raises:
            NotFoundError: If the client is missing or not a client
            AuthorizationError: If the client is not assigned to this trainer
            ValidationError: If a session references an unknown or inactive exercise
            InternalError: If storing the sessions or the plan fails
        """
        client_row = self._account_repo.get_by_id(draft.client_id)
        if not client_row or client_row.get("role") != Role.CLIENT.value:
            raise NotFoundError("Client not found")
        if client_row.get("assigned_trainer_id") != trainer_id:
            raise AuthorizationError("You can only create plans for your assigned clients")

        self._check_exercises(draft.sessions)

        created_ids: List[str] = []
        try:
            self._create_sessions(trainer_id, draft.sessions, created_ids)
            data = draft.model_dump(mode="json", exclude={"sessions"})
            data.update(
                {
                    "trainer_id": trainer_id,
                    "session_ids": created_ids,
                    "is_active": True,
                    "current_week": 1,
                    "progress": PlanProgress().model_dump(mode="json"),
                }
            )
            row = self._plan_repo.create(data)
        except Exception as e:
            self._discard_sessions(created_ids)
            logger.exception(f"Plan creation failed for trainer {trainer_id}: {e}")
            raise InternalError("Failed to create workout plan") from e

        plan = WorkoutPlan.model_validate(row)
        logger.info(
            f"Trainer {trainer_id} created plan {plan.id} for client {plan.client_id} "
            f"with {len(plan.session_ids)} sessions"
        )
        return self.expand_plan(plan)

    def update_plan(
        self, trainer_id: str, plan_id: str, changes: PlanChanges
    ) -> Dict[str, Any]:
        """
        Update a plan the trainer owns.

        Raises:
            NotFoundError: If the plan does not exist or belongs to another trainer
            ValidationError: If the result breaks the week or date invariants,
                or a new session references an unknown or inactive exercise
            InternalError: If storing replacement sessions or the plan fails
        """
        plan = self._get_owned_plan(trainer_id, plan_id)

        update = changes.model_dump(mode="json", exclude_unset=True, exclude={"sessions"})
        merged = {**plan.model_dump(mode="json"), **update}
        try:
            WorkoutPlan.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid plan update",
                errors=[{"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                        for err in e.errors()],
            )

        old_session_ids = list(plan.session_ids)
        new_session_ids: List[str] = []
        replacing = "sessions" in changes.model_fields_set and changes.sessions is not None
        if replacing:
            self._check_exercises(changes.sessions)
            try:
                self._create_sessions(trainer_id, changes.sessions, new_session_ids)
            except Exception as e:
                self._discard_sessions(new_session_ids)
                logger.exception(f"Session replacement failed for plan {plan_id}: {e}")
                raise InternalError("Failed to update workout sessions") from e
            update["session_ids"] = new_session_ids

        try:
            row = self._plan_repo.update(plan_id, update)
        except Exception as e:
            self._discard_sessions(new_session_ids)
            logger.exception(f"Plan update failed for plan {plan_id}: {e}")
            raise InternalError("Failed to update workout plan") from e
        if replacing and old_session_ids:
            deleted = self._plan_repo.delete_sessions(old_session_ids)
            logger.info(f"Replaced {deleted} sessions of plan {plan_id}")

        logger.info(f"Trainer {trainer_id} updated plan {plan_id}: {sorted(update)}")
        return self.expand_plan(WorkoutPlan.model_validate(row))

    def toggle_plan(self, trainer_id: str, plan_id: str, is_active: bool) -> WorkoutPlan:
        """
        Activate or deactivate a plan the trainer owns.

        Raises:
            NotFoundError: If the plan does not exist or belongs to another trainer
        """
        self._get_owned_plan(trainer_id, plan_id)
        row = self._plan_repo.update(plan_id, {"is_active": is_active})
        state = "activated" if is_active else "deactivated"
        logger.info(f"Trainer {trainer_id} {state} plan {plan_id}")
        return WorkoutPlan.model_validate(row)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_plan_for_trainer(self, trainer_id: str, plan_id: str) -> Dict[str, Any]:
        return self.expand_plan(self._get_owned_plan(trainer_id, plan_id))

    def get_plan_for_client(self, client_id: str, plan_id: str) -> Dict[str, Any]:
        """
        Get a plan written for the client.

        Raises:
            NotFoundError: If the plan does not exist or is for another client
        """
        row = self._plan_repo.get_by_id(plan_id)
        if not row or row.get("client_id") != client_id:
            raise NotFoundError("Workout plan not found")
        return self.expand_plan(WorkoutPlan.model_validate(row))

    def list_trainer_plans(
        self, trainer_id: str, filters: PlanFilters, page: PageRequest
    ) -> PageResult:
        return self._list_plans(filters, page, trainer_id=trainer_id, client_id=filters.client_id)

    def list_client_plans(
        self, client_id: str, filters: PlanFilters, page: PageRequest
    ) -> PageResult:
        return self._list_plans(filters, page, client_id=client_id)

    def trainer_stats(self, trainer_id: str) -> Dict[str, Any]:
        """
        Aggregate statistics over every plan the trainer wrote.

        Returns:
            Dictionary with total_plans, active_plans, completed_plans,
            total_clients and average_completion_rate
        """
        summaries = self._plan_repo.list_summaries(trainer_id=trainer_id)
        rates = [
            PlanProgress.model_validate(row.get("progress") or {}).completion_rate
            for row in summaries
        ]
        return {
            "total_plans": len(summaries),
            "active_plans": sum(1 for row in summaries if row.get("is_active")),
            "completed_plans": sum(1 for rate in rates if rate >= 100),
            "total_clients": len({row["client_id"] for row in summaries if row.get("client_id")}),
            "average_completion_rate": round(sum(rates) / len(rates), 2) if rates else 0,
        }

    # -------------------------------------------------------------------------
    # Expansion
    # -------------------------------------------------------------------------

    def expand_plan(self, plan: WorkoutPlan) -> Dict[str, Any]:
        """
        Serialize a plan with its references resolved.

        Sessions come back in plan order with each exercise entry carrying
        the catalog record; client and trainer become short summaries.
        """
        sessions = [
            WorkoutSession.model_validate(row)
            for row in self._plan_repo.get_sessions(plan.session_ids)
        ] if plan.session_ids else []

        result = plan.model_dump(mode="json")
        result["sessions"] = self.expand_sessions(sessions)
        people = self._summaries([plan.client_id, plan.trainer_id])
        result["client"] = people.get(plan.client_id)
        result["trainer"] = people.get(plan.trainer_id)
        return result

    def expand_sessions(self, sessions: List[WorkoutSession]) -> List[Dict[str, Any]]:
        exercise_ids = {eid for session in sessions for eid in session.exercise_ids}
        catalog: Dict[str, Exercise] = {}
        if exercise_ids:
            catalog = {
                row["id"]: Exercise.model_validate(row)
                for row in self._exercise_repo.get_many(sorted(exercise_ids))
            }

        expanded = []
        for session in sessions:
            item = session.model_dump(mode="json")
            for entry in item["exercises"]:
                exercise = catalog.get(entry["exercise_id"])
                entry["exercise"] = exercise.model_dump(mode="json") if exercise else None
            expanded.append(item)
        return expanded

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_owned_plan(self, trainer_id: str, plan_id: str) -> WorkoutPlan:
        row = self._plan_repo.get_by_id(plan_id)
        if not row or row.get("trainer_id") != trainer_id:
            raise NotFoundError("Workout plan not found")
        return WorkoutPlan.model_validate(row)

    def _list_plans(
        self,
        filters: PlanFilters,
        page: PageRequest,
        trainer_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> PageResult:
        rows, total = self._plan_repo.list(
            trainer_id=trainer_id,
            client_id=client_id,
            is_active=filters.is_active,
            frequency=filters.frequency,
            level=filters.level.value if filters.level else None,
            goals=filters.goals or None,
            search=filters.search,
            sort_by=filters.sort_by,
            descending=filters.sort_order == "desc",
            offset=page.offset,
            limit=page.limit,
        )
        plans = [WorkoutPlan.model_validate(row) for row in rows]
        people = self._summaries(
            [p.client_id for p in plans] + [p.trainer_id for p in plans]
        )

        items = []
        for plan in plans:
            item = plan.model_dump(mode="json")
            item["client"] = people.get(plan.client_id)
            item["trainer"] = people.get(plan.trainer_id)
            items.append(item)
        return PageResult(items=items, pagination=Pagination.for_request(page, total))

    def _summaries(self, account_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        unique_ids = sorted({aid for aid in account_ids if aid})
        if not unique_ids:
            return {}
        return {
            row["id"]: Account.model_validate(row).summary()
            for row in self._account_repo.get_many(unique_ids)
        }

    def _check_exercises(self, sessions: List[SessionDraft]) -> None:
        """Raise ValidationError unless every referenced exercise is active."""
        wanted = {item.exercise_id for session in sessions for item in session.exercises}
        if not wanted:
            return
        found = {
            row["id"]: row for row in self._exercise_repo.get_many(sorted(wanted))
        }
        invalid = sorted(
            eid for eid in wanted
            if eid not in found or not found[eid].get("is_active", True)
        )
        if invalid:
            raise ValidationError(
                "Some exercises are invalid or inactive",
                errors=[{"field": "exercise_id", "message": f"Unknown or inactive exercise: {eid}"}
                        for eid in invalid],
            )

    def _create_sessions(
        self, trainer_id: str, sessions: List[SessionDraft], created: List[str]
    ) -> None:
        """
        Store sessions one at a time, in order.

        IDs are appended to created as each write succeeds so the caller can
        clean up after a partial failure.
        """
        for draft in sessions:
            data = draft.model_dump(mode="json")
            data["created_by"] = trainer_id
            row = self._plan_repo.create_session(data)
            created.append(row["id"])

    def _discard_sessions(self, session_ids: List[str]) -> None:
        """Best-effort removal of sessions orphaned by a failed write."""
        if not session_ids:
            return
        try:
            deleted = self._plan_repo.delete_sessions(session_ids)
            logger.warning(f"Removed {deleted} orphaned sessions after failed plan write")
        except Exception as e:
            logger.error(f"Could not remove orphaned sessions {session_ids}: {e}")
