"""
Supabase implementation of WorkoutLogRepository.

Queries against the ``workout_logs`` table. Logs are only ever inserted.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client


class SupabaseWorkoutLogRepository:
    """Supabase-backed workout log repository implementation."""

    def __init__(self, client: Client):
        self._client = client

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.table("workout_logs").insert(data).execute()
        return response.data[0]

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
        query = (
            self._client.table("workout_logs")
            .select("*", count="exact")
            .eq("client_id", client_id)
        )
        if week is not None:
            query = query.eq("week", week)
        if day_of_week:
            query = query.eq("day_of_week", day_of_week)
        if start_date and end_date:
            query = query.gte("completed_at", start_date.isoformat()).lte(
                "completed_at", end_date.isoformat()
            )

        response = (
            query.order("completed_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return rows, response.count if response.count is not None else len(rows)

    def list_summaries(self, client_id: str) -> List[Dict[str, Any]]:
        response = (
            self._client.table("workout_logs")
            .select("actual_duration, is_completed, completed_at")
            .eq("client_id", client_id)
            .execute()
        )
        return response.data or []
