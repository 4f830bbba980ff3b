"""
Exercise Repository Interface (Port).

Catalog of exercise definitions referenced by workout sessions.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple


class ExerciseRepository(Protocol):
    """Repository interface for the exercise catalog."""

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an exercise by its ID.

        Returns:
            Exercise dictionary if found, None otherwise
        """
        ...

    def get_many(self, exercise_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get several exercises at once (reference expansion).

        Unknown IDs are skipped.
        """
        ...

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

        Args:
            muscle_groups: Match exercises targeting any of these groups
            equipment: Match exercises using any of this equipment
            difficulty: Exact difficulty
            search: Case-insensitive match on name or description
            active_only: Exclude deactivated exercises
            offset: Number of rows to skip
            limit: Maximum rows to return

        Returns:
            Tuple of (page of exercise dictionaries, total matching count)
        """
        ...

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new exercise and return it with its generated ID."""
        ...

    def update(self, exercise_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Update an exercise (only used for soft deactivation)."""
        ...
