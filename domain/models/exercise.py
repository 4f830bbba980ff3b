"""
Exercise catalog entry.

Exercises are referenced by workout sessions and logs. They are immutable
after creation apart from soft deactivation.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Difficulty(str, Enum):
    """Difficulty / experience level shared by exercises and plans."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Exercise(BaseModel):
    """
    Catalog exercise.

    Examples:
        >>> exercise = Exercise(
        ...     id="ex-1",
        ...     name="Back Squat",
        ...     muscle_groups=["quadriceps", "glutes"],
        ...     equipment=["barbell"],
        ...     difficulty="intermediate",
        ... )
        >>> exercise.targets("glutes")
        True
    """

    id: str
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    muscle_groups: List[str] = Field(..., min_length=1)
    equipment: List[str] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.BEGINNER
    instructions: List[str] = Field(default_factory=list)
    is_active: bool = True
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("muscle_groups", "equipment")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        """Lowercase, strip and deduplicate while keeping order."""
        seen = set()
        unique = []
        for item in (tag.lower().strip() for tag in v):
            if item and item not in seen:
                seen.add(item)
                unique.append(item)
        return unique

    def targets(self, muscle_group: str) -> bool:
        return muscle_group.lower().strip() in self.muscle_groups
