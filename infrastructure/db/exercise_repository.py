"""
Supabase implementation of ExerciseRepository.

Queries against the ``exercises`` table. muscle_groups and equipment are
text[] columns; list filters use array overlap.
"""

from typing import Any, Dict, List, Optional, Tuple

from supabase import Client

from infrastructure.db.filters import search_clause


class SupabaseExerciseRepository:
    """Supabase-backed exercise catalog."""

    def __init__(self, client: Client):
        self._client = client

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        response = (
            self._client.table("exercises")
            .select("*")
            .eq("id", exercise_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_many(self, exercise_ids: List[str]) -> List[Dict[str, Any]]:
        if not exercise_ids:
            return []
        response = (
            self._client.table("exercises")
            .select("*")
            .in_("id", list(exercise_ids))
            .execute()
        )
        return response.data or []

    def list(
        self,
        *,
        muscle_groups: Optional[List[str]] = None,
        equipment: Optional[List[str]] = None,
        difficulty: Optional[str] = None,
        search: Optional[str] = None,
        active_only: bool = True,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        List catalog exercises sorted by name.

        Returns:
            Tuple of (page of exercise dictionaries, total matching count)
        """
        query = self._client.table("exercises").select("*", count="exact")
        if active_only:
            query = query.eq("is_active", True)
        if muscle_groups:
            query = query.ov("muscle_groups", muscle_groups)
        if equipment:
            query = query.ov("equipment", equipment)
        if difficulty:
            query = query.eq("difficulty", difficulty)
        if search and search.strip():
            query = query.or_(search_clause(("name", "description"), search))

        response = (
            query.order("name")
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return rows, response.count if response.count is not None else len(rows)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.table("exercises").insert(data).execute()
        return response.data[0]

    def update(self, exercise_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        response = (
            self._client.table("exercises")
            .update(data)
            .eq("id", exercise_id)
            .execute()
        )
        return response.data[0]
