"""
Supabase implementation of AccountRepository.

Accounts live in the ``users`` table. The trainer change request is a JSONB
column on the client's row.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from postgrest.exceptions import APIError
from supabase import Client

from infrastructure.db.filters import raise_for_unique_violation, search_clause

logger = logging.getLogger(__name__)

ACCOUNT_SEARCH_COLUMNS = ("first_name", "last_name", "username", "email")


class SupabaseAccountRepository:
    """Supabase-backed account repository implementation."""

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_id(self, account_id: str) -> Optional[Dict[str, Any]]:
        response = (
            self._client.table("users")
            .select("*")
            .eq("id", account_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_many(self, account_ids: List[str]) -> List[Dict[str, Any]]:
        if not account_ids:
            return []
        response = (
            self._client.table("users")
            .select("*")
            .in_("id", list(account_ids))
            .execute()
        )
        return response.data or []

    def find_by_email_or_username(
        self,
        *,
        email: Optional[str] = None,
        username: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        # Emails are stored lowercased; identifiers are matched exactly
        if email:
            row = self._find_one("email", email.lower(), exclude_id)
            if row:
                return row
        if username:
            return self._find_one("username", username, exclude_id)
        return None

    def _find_one(
        self, column: str, value: str, exclude_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        query = self._client.table("users").select("*").eq(column, value)
        if exclude_id:
            query = query.neq("id", exclude_id)
        response = query.limit(1).execute()
        return response.data[0] if response.data else None

    def find_by_login(self, identifier: str) -> Optional[Dict[str, Any]]:
        column = "email" if "@" in identifier else "username"
        value = identifier.lower() if column == "email" else identifier
        response = (
            self._client.table("users")
            .select("*")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.table("users").insert(data).execute()
        except APIError as e:
            raise_for_unique_violation(e)
            raise
        logger.info(f"Inserted user {response.data[0]['id']}")
        return response.data[0]

    def update(self, account_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            response = (
                self._client.table("users")
                .update(payload)
                .eq("id", account_id)
                .execute()
            )
        except APIError as e:
            raise_for_unique_violation(e)
            raise
        return response.data[0]

    def list(
        self,
        *,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        is_approved: Optional[bool] = None,
        assigned_trainer_id: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        query = self._client.table("users").select("*", count="exact")
        if role is not None:
            query = query.eq("role", role)
        if is_active is not None:
            query = query.eq("is_active", is_active)
        if is_approved is not None:
            query = query.eq("is_approved", is_approved)
        if assigned_trainer_id is not None:
            query = query.eq("assigned_trainer_id", assigned_trainer_id)
        if search and search.strip():
            query = query.or_(search_clause(ACCOUNT_SEARCH_COLUMNS, search))

        response = (
            query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return rows, response.count if response.count is not None else len(rows)

    def list_pending_change_requests(
        self,
        *,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        response = (
            self._client.table("users")
            .select("*", count="exact")
            .eq("role", "client")
            .eq("trainer_change_request->>status", "pending")
            .order("trainer_change_request->>requested_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return rows, response.count if response.count is not None else len(rows)
