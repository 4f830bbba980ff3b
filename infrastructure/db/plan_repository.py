"""
Supabase implementation of PlanRepository.

Queries against:
- workout_plans: Plan metadata, ordered session_ids and JSONB progress
- workout_sessions: Sessions referenced by plans (exercises stored as JSONB)

There is no foreign key from sessions to plans; a plan owns its sessions only
through session_ids.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client

from infrastructure.db.filters import search_clause

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {"created_at", "updated_at", "name", "start_date"}


class SupabasePlanRepository:
    """
    Supabase-backed plan repository implementation.

    Queries against:
    - workout_plans: Plans authored by trainers for clients
    - workout_sessions: The day-by-day sessions of each plan
    """

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    def get_by_id(self, plan_id: str) -> Optional[Dict[str, Any]]:
        response = (
            self._client.table("workout_plans")
            .select("*")
            .eq("id", plan_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.table("workout_plans").insert(data).execute()
        return response.data[0]

    def update(self, plan_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        response = (
            self._client.table("workout_plans")
            .update(payload)
            .eq("id", plan_id)
            .execute()
        )
        return response.data[0]

    def list(
        self,
        *,
        trainer_id: Optional[str] = None,
        client_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        frequency: Optional[str] = None,
        level: Optional[str] = None,
        goals: Optional[List[str]] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        List plans matching the filters.

        Unknown sort columns fall back to created_at.

        Returns:
            Tuple of (page of plan dictionaries, total matching count)
        """
        query = self._client.table("workout_plans").select("*", count="exact")
        if trainer_id is not None:
            query = query.eq("trainer_id", trainer_id)
        if client_id is not None:
            query = query.eq("client_id", client_id)
        if is_active is not None:
            query = query.eq("is_active", is_active)
        if frequency:
            query = query.eq("frequency", frequency)
        if level:
            query = query.eq("level", level)
        if goals:
            query = query.ov("goals", goals)
        if search and search.strip():
            query = query.or_(search_clause(("name", "description"), search))

        column = sort_by if sort_by in SORTABLE_COLUMNS else "created_at"
        response = (
            query.order(column, desc=descending)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return rows, response.count if response.count is not None else len(rows)

    def find_active_for_client(self, client_id: str) -> Optional[Dict[str, Any]]:
        response = (
            self._client.table("workout_plans")
            .select("*")
            .eq("client_id", client_id)
            .eq("is_active", True)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def list_summaries(
        self,
        *,
        trainer_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query = self._client.table("workout_plans").select(
            "id, client_id, is_active, progress"
        )
        if trainer_id is not None:
            query = query.eq("trainer_id", trainer_id)
        if client_id is not None:
            query = query.eq("client_id", client_id)
        response = query.execute()
        return response.data or []

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.table("workout_sessions").insert(data).execute()
        return response.data[0]

    def get_sessions(self, session_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get sessions by ID, in the order the IDs are given.

        PostgREST returns ``in`` matches in table order, so rows are
        re-ordered here.
        """
        if not session_ids:
            return []
        response = (
            self._client.table("workout_sessions")
            .select("*")
            .in_("id", list(session_ids))
            .execute()
        )
        by_id = {row["id"]: row for row in response.data or []}
        return [by_id[sid] for sid in session_ids if sid in by_id]

    def delete_sessions(self, session_ids: List[str]) -> int:
        if not session_ids:
            return 0
        response = (
            self._client.table("workout_sessions")
            .delete()
            .in_("id", list(session_ids))
            .execute()
        )
        deleted = len(response.data or [])
        logger.info(f"Deleted {deleted} workout sessions")
        return deleted
