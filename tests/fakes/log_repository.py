"""
Fake Workout Log Repository for testing.

This module provides an in-memory implementation of WorkoutLogRepository
for fast, isolated testing without database dependencies.
"""
from typing import Optional, List, Dict, Any, Tuple
from datetime import datetime, timezone
import uuid
import copy


def _parse(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class FakeWorkoutLogRepository:
    """In-memory fake implementation of WorkoutLogRepository for testing."""

    def __init__(self):
        """Initialize with empty storage."""
        self._logs: Dict[str, Dict[str, Any]] = {}

    def reset(self) -> None:
        """Clear all stored logs."""
        self._logs.clear()

    def seed(self, logs: List[Dict[str, Any]]) -> None:
        for log in logs:
            log_id = log.get("id") or str(uuid.uuid4())
            self._logs[log_id] = {**log, "id": log_id}

    def count(self) -> int:
        return len(self._logs)

    # =========================================================================
    # WorkoutLogRepository Protocol Methods
    # =========================================================================

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = {
            **copy.deepcopy(data),
            "id": str(uuid.uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._logs[row["id"]] = row
        return copy.deepcopy(row)

    def list(
        self,
        client_id: str,
        *,
        week: Optional[int] = None,
        day_of_week: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        rows = [r for r in self._logs.values() if r.get("client_id") == client_id]
        if week is not None:
            rows = [r for r in rows if r.get("week") == week]
        if day_of_week:
            rows = [r for r in rows if r.get("day_of_week") == day_of_week]
        if start_date and end_date:
            start, end = _parse(start_date), _parse(end_date)
            rows = [r for r in rows if start <= _parse(r["completed_at"]) <= end]

        rows.sort(key=lambda r: _parse(r["completed_at"]), reverse=True)
        page = rows[offset:offset + limit]
        return [copy.deepcopy(r) for r in page], len(rows)

    def list_summaries(self, client_id: str) -> List[Dict[str, Any]]:
        return [
            {
                "actual_duration": r.get("actual_duration"),
                "is_completed": r.get("is_completed", True),
                "completed_at": r.get("completed_at"),
            }
            for r in self._logs.values()
            if r.get("client_id") == client_id
        ]
