"""
Unit tests for ExerciseCatalogService.
"""

import pytest

from application.exceptions import NotFoundError
from application.use_cases import ExerciseCatalogService, ExerciseDraft, ExerciseFilters
from domain.pagination import PageRequest
from tests.fakes import OTHER_TRAINER_ID, TRAINER_ID


@pytest.fixture
def service(exercise_repo):
    return ExerciseCatalogService(exercise_repo=exercise_repo)


def _names(result):
    return [item["name"] for item in result.items]


@pytest.mark.unit
class TestListExercises:
    def test_hides_inactive_and_sorts_by_name(self, service):
        result = service.list_exercises(ExerciseFilters(), PageRequest(limit=20))
        assert _names(result) == ["Barbell Back Squat", "Bench Press", "Push-Up"]
        assert result.pagination.total == 3

    def test_muscle_group_filter_matches_any(self, service):
        result = service.list_exercises(
            ExerciseFilters(muscle_groups=["Glutes", "triceps"]), PageRequest()
        )
        assert _names(result) == ["Barbell Back Squat", "Bench Press"]

    def test_equipment_filter(self, service):
        result = service.list_exercises(ExerciseFilters(equipment=["bench"]), PageRequest())
        assert _names(result) == ["Bench Press"]

    def test_difficulty_filter(self, service):
        result = service.list_exercises(ExerciseFilters(difficulty="beginner"), PageRequest())
        assert _names(result) == ["Push-Up"]

    def test_search_name_and_description(self, service):
        assert _names(service.list_exercises(ExerciseFilters(search="press"), PageRequest())) == [
            "Bench Press",
            "Push-Up",
        ]

    def test_pagination(self, service):
        result = service.list_exercises(ExerciseFilters(), PageRequest(page=2, limit=2))
        assert _names(result) == ["Push-Up"]
        assert result.pagination.has_next is False
        assert result.pagination.has_prev is True


@pytest.mark.unit
class TestCreateAndDeactivate:
    def test_create_normalizes_tags(self, service, exercise_repo):
        exercise = service.create_exercise(
            TRAINER_ID,
            ExerciseDraft(name="Goblet Squat", muscle_groups=["Quadriceps ", "GLUTES"], equipment=["Kettlebell"]),
        )
        assert exercise.created_by == TRAINER_ID
        assert exercise.muscle_groups == ["quadriceps", "glutes"]
        assert exercise.equipment == ["kettlebell"]
        assert exercise.is_active is True
        assert exercise_repo.get_by_id(exercise.id)["name"] == "Goblet Squat"

    def test_creator_can_deactivate(self, service):
        exercise = service.create_exercise(
            TRAINER_ID, ExerciseDraft(name="Lunge", muscle_groups=["quadriceps"])
        )
        retired = service.deactivate_exercise(TRAINER_ID, exercise.id)
        assert retired.is_active is False
        assert "Lunge" not in _names(service.list_exercises(ExerciseFilters(), PageRequest()))

    def test_other_trainer_cannot_deactivate(self, service):
        exercise = service.create_exercise(
            TRAINER_ID, ExerciseDraft(name="Lunge", muscle_groups=["quadriceps"])
        )
        with pytest.raises(NotFoundError, match="Exercise not found or access denied"):
            service.deactivate_exercise(OTHER_TRAINER_ID, exercise.id)

    def test_seeded_exercise_has_no_creator(self, service):
        with pytest.raises(NotFoundError):
            service.deactivate_exercise(TRAINER_ID, "ex-squat")

    def test_resolve_skips_unknown(self, service):
        resolved = service.resolve(["ex-squat", "nope", "ex-squat"])
        assert list(resolved) == ["ex-squat"]
        assert service.resolve([]) == {}
