"""
Unit tests for WorkoutLogService.

Tests cover:
- Recording a log and the resulting plan progress
- Rejected logs (foreign plan, unknown session, week past the plan)
- Today's workout lookup
- Client statistics
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from application.exceptions import NotFoundError, ValidationError
from application.use_cases import LogEntry, LogFilters, PlanService, WorkoutLogService
from domain.pagination import PageRequest
from tests.fakes import (
    CLIENT_ID,
    FREE_CLIENT_ID,
    TRAINER_ID,
    make_plan_row,
    make_session_row,
)

# 2024-03-04 is a Monday
MONDAY = date(2024, 3, 4)


@pytest.fixture
def service(log_repo, plan_repo, account_repo, exercise_repo):
    plan_service = PlanService(plan_repo=plan_repo, account_repo=account_repo, exercise_repo=exercise_repo)
    return WorkoutLogService(log_repo=log_repo, plan_repo=plan_repo, plan_service=plan_service)


@pytest.fixture
def plan(plan_repo):
    """A two-session, two-week plan for CLIENT_ID."""
    plan_repo.seed_sessions([
        make_session_row("s-mon", "monday", ["ex-squat"]),
        make_session_row("s-thu", "thursday", ["ex-bench"]),
    ])
    plan_repo.seed([
        make_plan_row("plan-1", client_id=CLIENT_ID, trainer_id=TRAINER_ID,
                      session_ids=["s-mon", "s-thu"], total_weeks=2),
    ])
    return plan_repo.get_by_id("plan-1")


def _entry(**overrides) -> LogEntry:
    data = {
        "plan_id": "plan-1",
        "session_id": "s-mon",
        "week": 1,
        "actual_duration": 45,
        "exercises": [{"exercise_id": "ex-squat", "sets": [{"reps": 5, "weight": 100}]}],
        "difficulty": 7,
    }
    data.update(overrides)
    return LogEntry(**data)


@pytest.mark.unit
class TestRecordLog:
    def test_records_log_and_progress(self, service, plan, plan_repo, log_repo):
        result = service.record_log(CLIENT_ID, _entry())

        log = result["log"]
        assert log["client_id"] == CLIENT_ID
        assert log["trainer_id"] == TRAINER_ID
        assert log["day_of_week"] == "monday"
        assert log["is_completed"] is True
        assert result["progress"]["completion_rate"] == 25  # 1 of 2 sessions x 2 weeks
        assert result["current_week"] == 1

        stored = plan_repo.get_by_id("plan-1")
        assert stored["progress"]["completion_rate"] == 25
        assert log_repo.count() == 1

    def test_repeat_log_does_not_inflate_progress(self, service, plan, log_repo):
        service.record_log(CLIENT_ID, _entry())
        result = service.record_log(CLIENT_ID, _entry())
        assert result["progress"]["completion_rate"] == 25
        assert log_repo.count() == 2

    def test_completing_every_session(self, service, plan):
        for week in (1, 2):
            for session_id in ("s-mon", "s-thu"):
                result = service.record_log(CLIENT_ID, _entry(session_id=session_id, week=week))
        assert result["progress"]["completion_rate"] == 100
        assert result["current_week"] == 2

    def test_week_two_advances_current_week(self, service, plan, plan_repo):
        service.record_log(CLIENT_ID, _entry(week=2))
        assert plan_repo.get_by_id("plan-1")["current_week"] == 2

    def test_explicit_completed_at_kept(self, service, plan):
        when = datetime(2024, 3, 4, 18, 30, tzinfo=timezone.utc)
        result = service.record_log(CLIENT_ID, _entry(completed_at=when))
        assert result["log"]["completed_at"].startswith("2024-03-04T18:30")

    def test_plan_of_other_client(self, service, plan):
        with pytest.raises(NotFoundError, match="Workout plan not found"):
            service.record_log(FREE_CLIENT_ID, _entry())

    def test_session_outside_plan(self, service, plan, log_repo):
        with pytest.raises(ValidationError, match="Session is not part of this plan"):
            service.record_log(CLIENT_ID, _entry(session_id="s-other"))
        assert log_repo.count() == 0

    def test_week_past_plan_end(self, service, plan, log_repo):
        with pytest.raises(ValidationError):
            service.record_log(CLIENT_ID, _entry(week=3))
        assert log_repo.count() == 0


@pytest.mark.unit
class TestListLogs:
    def test_most_recent_first_with_filters(self, service, plan):
        base = datetime(2024, 3, 4, 8, 0, tzinfo=timezone.utc)
        service.record_log(CLIENT_ID, _entry(completed_at=base))
        service.record_log(CLIENT_ID, _entry(session_id="s-thu", completed_at=base + timedelta(days=3)))
        service.record_log(CLIENT_ID, _entry(week=2, completed_at=base + timedelta(days=7)))

        result = service.list_logs(CLIENT_ID, LogFilters(), PageRequest())
        assert [item["week"] for item in result.items] == [2, 1, 1]
        assert result.items[1]["session_id"] == "s-thu"

        week_one = service.list_logs(CLIENT_ID, LogFilters(week=1), PageRequest())
        assert week_one.pagination.total == 2

        thursdays = service.list_logs(CLIENT_ID, LogFilters(day_of_week="thursday"), PageRequest())
        assert [item["session_id"] for item in thursdays.items] == ["s-thu"]

        ranged = service.list_logs(
            CLIENT_ID,
            LogFilters(start_date=base + timedelta(days=1), end_date=base + timedelta(days=6)),
            PageRequest(),
        )
        assert ranged.pagination.total == 1

    def test_other_clients_logs_hidden(self, service, plan):
        service.record_log(CLIENT_ID, _entry())
        assert service.list_logs(FREE_CLIENT_ID, LogFilters(), PageRequest()).items == []


@pytest.mark.unit
class TestTodayWorkout:
    def test_scheduled_session(self, service, plan):
        today = service.today_workout(CLIENT_ID, today=MONDAY)

        assert today["plan"]["id"] == "plan-1"
        assert today["day_of_week"] == "monday"
        assert today["session"]["id"] == "s-mon"
        assert today["session"]["exercises"][0]["exercise"]["id"] == "ex-squat"
        assert today["is_completed"] is False

    def test_completed_flag_after_logging(self, service, plan):
        service.record_log(CLIENT_ID, _entry())
        assert service.today_workout(CLIENT_ID, today=MONDAY)["is_completed"] is True

    def test_rest_day(self, service, plan):
        assert service.today_workout(CLIENT_ID, today=MONDAY + timedelta(days=1)) is None

    def test_no_active_plan(self, service, plan, plan_repo):
        plan_repo.update("plan-1", {"is_active": False})
        assert service.today_workout(CLIENT_ID, today=MONDAY) is None

    def test_client_without_plans(self, service):
        assert service.today_workout(FREE_CLIENT_ID, today=MONDAY) is None


@pytest.mark.unit
class TestClientStats:
    def test_empty(self, service):
        assert service.client_stats(FREE_CLIENT_ID) == {
            "total_plans": 0,
            "active_plans": 0,
            "total_workouts": 0,
            "completed_workouts": 0,
            "completion_rate": 0,
            "average_duration": 0,
            "last_workout": None,
        }

    def test_aggregates(self, service, plan, log_repo):
        base = datetime(2024, 3, 4, 8, 0, tzinfo=timezone.utc)
        service.record_log(CLIENT_ID, _entry(actual_duration=40, completed_at=base))
        service.record_log(CLIENT_ID, _entry(actual_duration=61, completed_at=base + timedelta(days=3)))
        log_repo.seed([{
            "client_id": CLIENT_ID,
            "trainer_id": TRAINER_ID,
            "plan_id": "plan-1",
            "session_id": "s-thu",
            "week": 1,
            "completed_at": (base + timedelta(days=1)).isoformat(),
            "is_completed": False,
        }])

        stats = service.client_stats(CLIENT_ID)

        assert stats["total_plans"] == 1
        assert stats["active_plans"] == 1
        assert stats["total_workouts"] == 3
        assert stats["completed_workouts"] == 2
        assert stats["completion_rate"] == 67
        assert stats["average_duration"] == 50
        assert stats["last_workout"].startswith("2024-03-07T08:00")
