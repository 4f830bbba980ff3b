"""
Exercise Catalog Use Case.

Trainers browse the shared catalog, add exercises to it and retire the
ones they created. Retired exercises stay in the catalog (sessions may
still reference them) but are hidden from listings and cannot be added to
new sessions.
"""

import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from application.exceptions import NotFoundError
from application.ports import ExerciseRepository
from application.use_cases.results import PageResult
from domain.models import Difficulty, Exercise
from domain.pagination import PageRequest, Pagination

logger = logging.getLogger(__name__)


class ExerciseDraft(BaseModel):
    """A new catalog entry as submitted by a trainer."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    muscle_groups: List[str] = Field(..., min_length=1)
    equipment: List[str] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.BEGINNER
    instructions: List[str] = Field(default_factory=list)


class ExerciseFilters(BaseModel):
    muscle_groups: Optional[List[str]] = None
    equipment: Optional[List[str]] = None
    difficulty: Optional[Difficulty] = None
    search: Optional[str] = None


class ExerciseCatalogService:
    """Use case for the exercise catalog."""

    def __init__(self, exercise_repo: ExerciseRepository) -> None:
        self._exercise_repo = exercise_repo

    def list_exercises(self, filters: ExerciseFilters, page: PageRequest) -> PageResult:
        """Active exercises matching the filters, sorted by name."""
        rows, total = self._exercise_repo.list(
            muscle_groups=[g.lower().strip() for g in filters.muscle_groups or []] or None,
            equipment=[e.lower().strip() for e in filters.equipment or []] or None,
            difficulty=filters.difficulty.value if filters.difficulty else None,
            search=filters.search,
            active_only=True,
            offset=page.offset,
            limit=page.limit,
        )
        items = [Exercise.model_validate(row).model_dump(mode="json") for row in rows]
        return PageResult(items=items, pagination=Pagination.for_request(page, total))

    def create_exercise(self, trainer_id: str, draft: ExerciseDraft) -> Exercise:
        # Validate through the domain model so tags are normalized before storage
        normalized = Exercise(id="new", created_by=trainer_id, **draft.model_dump())
        data = normalized.model_dump(mode="json", exclude={"id", "created_at"})
        row = self._exercise_repo.create(data)
        exercise = Exercise.model_validate(row)
        logger.info(f"Trainer {trainer_id} added exercise {exercise.id} ({exercise.name})")
        return exercise

    def deactivate_exercise(self, trainer_id: str, exercise_id: str) -> Exercise:
        """
        Soft-delete an exercise the trainer created.

        Raises:
            NotFoundError: If the exercise does not exist or was created by someone else
        """
        row = self._exercise_repo.get_by_id(exercise_id)
        if not row or row.get("created_by") != trainer_id:
            raise NotFoundError("Exercise not found or access denied")

        row = self._exercise_repo.update(exercise_id, {"is_active": False})
        logger.info(f"Trainer {trainer_id} deactivated exercise {exercise_id}")
        return Exercise.model_validate(row)

    def resolve(self, exercise_ids: Iterable[str]) -> Dict[str, Exercise]:
        """
        Look up exercises by ID for reference expansion.

        Returns:
            Mapping of exercise ID to Exercise; unknown IDs are absent
        """
        unique_ids = sorted(set(exercise_ids))
        if not unique_ids:
            return {}
        return {
            row["id"]: Exercise.model_validate(row)
            for row in self._exercise_repo.get_many(unique_ids)
        }
