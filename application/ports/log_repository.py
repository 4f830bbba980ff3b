"""
Workout Log Repository Interface (Port).

Workout logs are append-only records of completed session instances.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Tuple


class WorkoutLogRepository(Protocol):
    """Repository interface for workout log persistence."""

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append a workout log.

        Returns:
            Created log dictionary with generated ID
        """
        ...

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
        """
        List a client's logs, most recently completed first.

        The completed_at range is applied only when both bounds are given.

        Returns:
            Tuple of (page of log dictionaries, total matching count)
        """
        ...

    def list_summaries(self, client_id: str) -> List[Dict[str, Any]]:
        """
        Get the fields statistics are computed from, for all of a client's logs.

        Returns:
            List of dictionaries with actual_duration, is_completed and completed_at
        """
        ...
