"""
Workout Plan Repository Interface (Port).

This Protocol defines the contract for plan and session persistence.
Sessions are stored as separate records and referenced from the plan by ID,
so they are created before the plan that points at them.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple


class PlanRepository(Protocol):
    """
    Repository interface for workout plans and their sessions.

    All methods work with dictionaries for flexibility.
    """

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    def get_by_id(self, plan_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a plan by its ID.

        Args:
            plan_id: The plan's ID

        Returns:
            Plan dictionary if found, None otherwise
        """
        ...

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new plan.

        Args:
            data: Plan data dictionary (session_ids already populated)

        Returns:
            Created plan dictionary with generated ID
        """
        ...

    def update(self, plan_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update an existing plan.

        Args:
            plan_id: The plan's ID
            data: Fields to update

        Returns:
            Updated plan dictionary
        """
        ...

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

        Args:
            goals: Match plans sharing any of these goals
            search: Case-insensitive match on name or description

        Returns:
            Tuple of (page of plan dictionaries, total matching count)
        """
        ...

    def find_active_for_client(self, client_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the client's most recently created active plan.

        Returns:
            Plan dictionary, or None if the client has no active plan
        """
        ...

    def list_summaries(
        self,
        *,
        trainer_id: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get the fields statistics are computed from, for every matching plan.

        Returns:
            List of dictionaries with id, client_id, is_active and progress
        """
        ...

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a workout session.

        Returns:
            Created session dictionary with generated ID
        """
        ...

    def get_sessions(self, session_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get sessions by ID, in the order the IDs are given.

        Unknown IDs are skipped.
        """
        ...

    def delete_sessions(self, session_ids: List[str]) -> int:
        """
        Delete sessions by ID.

        Returns:
            Number of sessions deleted
        """
        ...
