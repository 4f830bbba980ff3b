"""
Workout Logging Use Case.

Clients record completed sessions against their plans. Every log updates
the plan's progress; logs themselves are never edited or deleted.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from application.exceptions import NotFoundError, ValidationError
from application.ports import PlanRepository, WorkoutLogRepository
from application.use_cases.plans import PlanService
from application.use_cases.results import PageResult
from domain.models import DayOfWeek, WorkoutLog, WorkoutPlan, WorkoutSession
from domain.models.workout_log import LoggedExercise
from domain.pagination import PageRequest, Pagination

logger = logging.getLogger(__name__)


class LogEntry(BaseModel):
    """Body of a workout log submission."""

    plan_id: str
    session_id: str
    week: int = Field(..., ge=1)
    completed_at: Optional[datetime] = None
    actual_duration: Optional[int] = Field(default=None, ge=0)
    exercises: List[LoggedExercise] = Field(default_factory=list)
    overall_notes: Optional[str] = Field(default=None, max_length=1000)
    difficulty: Optional[int] = Field(default=None, ge=1, le=10)
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    mood: Optional[int] = Field(default=None, ge=1, le=10)
    pain_level: Optional[int] = Field(default=None, ge=0, le=10)


class LogFilters(BaseModel):
    week: Optional[int] = Field(default=None, ge=1)
    day_of_week: Optional[DayOfWeek] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class WorkoutLogService:
    """
    Use case for recording workouts and reporting a client's progress.

    Dependencies are injected via constructor for testability.
    """

    def __init__(
        self,
        log_repo: WorkoutLogRepository,
        plan_repo: PlanRepository,
        plan_service: PlanService,
    ) -> None:
        self._log_repo = log_repo
        self._plan_repo = plan_repo
        self._plan_service = plan_service

    def record_log(self, client_id: str, entry: LogEntry) -> Dict[str, Any]:
        """
        Record a completed session and advance the plan's progress.

        The log and the progress update are separate writes.

        Args:
            client_id: The logging client
            entry: Which session of which week, plus metrics

        Returns:
            Dictionary with the stored log and the plan's new progress

        Raises:
            NotFoundError: If the plan does not exist or is for another client
            ValidationError: If the session is not part of the plan or the
                week is past the end of the plan
        """
        row = self._plan_repo.get_by_id(entry.plan_id)
        if not row or row.get("client_id") != client_id:
            raise NotFoundError("Workout plan not found")
        plan = WorkoutPlan.model_validate(row)

        if entry.session_id not in plan.session_ids:
            raise ValidationError("Session is not part of this plan")
        if entry.week > plan.total_weeks:
            raise ValidationError(
                f"Week {entry.week} is beyond the plan's {plan.total_weeks} weeks"
            )

        sessions = self._plan_repo.get_sessions([entry.session_id])
        day_of_week = sessions[0].get("day_of_week") if sessions else None

        completed_at = entry.completed_at or datetime.now(timezone.utc)
        data = entry.model_dump(mode="json", exclude={"completed_at"})
        data.update(
            {
                "client_id": client_id,
                "trainer_id": plan.trainer_id,
                "day_of_week": day_of_week,
                "completed_at": completed_at.isoformat(),
                "is_completed": True,
            }
        )
        log = WorkoutLog.model_validate(self._log_repo.create(data))

        updated = plan.mark_session_completed(entry.session_id, entry.week, completed_at)
        self._plan_repo.update(
            plan.id,
            {
                "progress": updated.progress.model_dump(mode="json"),
                "current_week": updated.current_week,
            },
        )
        logger.info(
            f"Client {client_id} logged session {entry.session_id} week {entry.week} "
            f"of plan {plan.id} ({updated.progress.completion_rate}% complete)"
        )
        return {
            "log": log.model_dump(mode="json"),
            "progress": updated.progress.model_dump(mode="json"),
            "current_week": updated.current_week,
        }

    def list_logs(
        self, client_id: str, filters: LogFilters, page: PageRequest
    ) -> PageResult:
        """The client's logs, most recent first."""
        rows, total = self._log_repo.list(
            client_id,
            week=filters.week,
            day_of_week=filters.day_of_week.value if filters.day_of_week else None,
            start_date=filters.start_date,
            end_date=filters.end_date,
            offset=page.offset,
            limit=page.limit,
        )
        items = [WorkoutLog.model_validate(row).model_dump(mode="json") for row in rows]
        return PageResult(items=items, pagination=Pagination.for_request(page, total))

    def today_workout(
        self, client_id: str, today: Optional[date] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Find the session scheduled for today in the client's active plan.

        Returns:
            Dictionary with the plan summary, the expanded session and whether
            it is already logged for the current week, or None if nothing is
            scheduled today
        """
        today = today or datetime.now(timezone.utc).date()
        row = self._plan_repo.find_active_for_client(client_id)
        if not row:
            return None
        plan = WorkoutPlan.model_validate(row)

        weekday = DayOfWeek.from_date(today)
        sessions = [
            WorkoutSession.model_validate(s)
            for s in self._plan_repo.get_sessions(plan.session_ids)
        ] if plan.session_ids else []
        scheduled = next((s for s in sessions if s.day_of_week == weekday), None)
        if scheduled is None:
            return None

        return {
            "plan": {
                "id": plan.id,
                "name": plan.name,
                "current_week": plan.current_week,
                "total_weeks": plan.total_weeks,
                "completion_rate": plan.progress.completion_rate,
            },
            "session": self._plan_service.expand_sessions([scheduled])[0],
            "day_of_week": weekday.value,
            "is_completed": plan.progress.has_completed(scheduled.id, plan.current_week),
        }

    def client_stats(self, client_id: str) -> Dict[str, Any]:
        """
        Aggregate statistics over the client's plans and logs.

        completion_rate is the percentage of logs marked completed, rounded
        to a whole number, and 0 when there are no logs.
        """
        plans = self._plan_repo.list_summaries(client_id=client_id)
        logs = self._log_repo.list_summaries(client_id)

        completed = [log for log in logs if log.get("is_completed", True)]
        durations = [log["actual_duration"] for log in logs if log.get("actual_duration")]
        last_workout = max(
            (_as_datetime(log["completed_at"]) for log in logs if log.get("completed_at")),
            default=None,
        )

        return {
            "total_plans": len(plans),
            "active_plans": sum(1 for plan in plans if plan.get("is_active")),
            "total_workouts": len(logs),
            "completed_workouts": len(completed),
            "completion_rate": round(len(completed) / len(logs) * 100) if logs else 0,
            "average_duration": round(sum(durations) / len(durations)) if durations else 0,
            "last_workout": last_workout.isoformat() if last_workout else None,
        }


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
