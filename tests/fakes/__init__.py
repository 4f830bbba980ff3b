"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeAccountRepository, make_account_row

    repo = FakeAccountRepository()
    repo.seed([make_account_row("client1", role="client")])
"""
from typing import Optional, Dict, Any
from datetime import datetime, timezone

from tests.fakes.account_repository import FakeAccountRepository
from tests.fakes.exercise_repository import FakeExerciseRepository
from tests.fakes.log_repository import FakeWorkoutLogRepository
from tests.fakes.plan_repository import FakePlanRepository


# =============================================================================
# Seeded Cast
# =============================================================================

# Every seeded account shares this password
TEST_PASSWORD = "password123"

ADMIN_ID = "admin-id"
TRAINER_ID = "trainer-id"
PENDING_TRAINER_ID = "pending-trainer-id"
OTHER_TRAINER_ID = "other-trainer-id"
CLIENT_ID = "client-id"  # assigned to TRAINER_ID
FREE_CLIENT_ID = "free-client-id"  # no trainer


# =============================================================================
# Factory Functions
# =============================================================================


def make_account_row(
    username: str,
    *,
    role: str = "client",
    account_id: Optional[str] = None,
    password_hash: Optional[str] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """
    Build a users-table row for seeding.

    Args:
        username: Username; also used to derive the email and the default ID
        role: client, trainer or admin
        account_id: Explicit ID (defaults to "<username>-id")
        password_hash: bcrypt hash, if the test logs in with a password
        **overrides: Any other column

    Returns:
        Account row dictionary
    """
    row = {
        "id": account_id or f"{username}-id",
        "username": username,
        "email": f"{username}@example.com",
        "password_hash": password_hash,
        "first_name": username.capitalize(),
        "last_name": "Tester",
        "role": role,
        "is_active": True,
        "is_approved": role == "trainer",
        "login_attempts": 0,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    row.update(overrides)
    return row


def make_session_row(
    session_id: str,
    day_of_week: str = "monday",
    exercise_ids: Optional[list] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Build a workout_sessions row for seeding."""
    row = {
        "id": session_id,
        "name": f"Session {session_id}",
        "day_of_week": day_of_week,
        "exercises": [
            {"exercise_id": eid, "sets": 3, "reps": 10}
            for eid in (exercise_ids or ["ex-squat"])
        ],
    }
    row.update(overrides)
    return row


def make_plan_row(
    plan_id: str,
    *,
    client_id: str,
    trainer_id: str,
    session_ids: Optional[list] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Build a workout_plans row for seeding."""
    row = {
        "id": plan_id,
        "name": f"Plan {plan_id}",
        "client_id": client_id,
        "trainer_id": trainer_id,
        "session_ids": list(session_ids or []),
        "goals": [],
        "is_active": True,
        "current_week": 1,
        "total_weeks": 4,
        "progress": {"completed_sessions": [], "completion_rate": 0, "last_completed_at": None},
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    row.update(overrides)
    return row


__all__ = [
    # Fake implementations
    "FakeAccountRepository",
    "FakeExerciseRepository",
    "FakePlanRepository",
    "FakeWorkoutLogRepository",
    # Factory functions
    "make_account_row",
    "make_session_row",
    "make_plan_row",
    # Seeded cast
    "TEST_PASSWORD",
    "ADMIN_ID",
    "TRAINER_ID",
    "PENDING_TRAINER_ID",
    "OTHER_TRAINER_ID",
    "CLIENT_ID",
    "FREE_CLIENT_ID",
]
