"""
Integration tests for the trainer /workouts endpoints.
"""

import pytest

from tests.fakes import (
    ADMIN_ID,
    CLIENT_ID,
    FREE_CLIENT_ID,
    OTHER_TRAINER_ID,
    PENDING_TRAINER_ID,
    TRAINER_ID,
)


def _plan_body(**overrides):
    body = {
        "client_id": CLIENT_ID,
        "name": "Base Building",
        "goals": ["endurance", "strength"],
        "level": "beginner",
        "total_weeks": 6,
        "sessions": [
            {
                "name": "Day A",
                "day_of_week": "monday",
                "exercises": [{"exercise_id": "ex-squat", "sets": 3, "reps": 8}],
            },
            {
                "name": "Day B",
                "day_of_week": "friday",
                "exercises": [{"exercise_id": "ex-pushup", "sets": 3, "reps": "AMRAP"}],
            },
        ],
    }
    body.update(overrides)
    return body


@pytest.fixture
def created_plan(client, auth_headers):
    response = client.post("/workouts/plans", headers=auth_headers(TRAINER_ID), json=_plan_body())
    assert response.status_code == 201
    return response.json()["data"]["plan"]


@pytest.mark.integration
class TestAccessGates:
    @pytest.mark.parametrize("account_id", [CLIENT_ID, ADMIN_ID, PENDING_TRAINER_ID])
    def test_only_approved_trainers(self, client, auth_headers, account_id):
        response = client.get("/workouts/plans", headers=auth_headers(account_id))
        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_requires_token(self, client):
        assert client.get("/workouts/stats").status_code == 401


@pytest.mark.integration
class TestPlanEndpoints:
    def test_create_plan(self, created_plan, plan_repo):
        assert created_plan["name"] == "Base Building"
        assert created_plan["total_weeks"] == 6
        assert [s["day_of_week"] for s in created_plan["sessions"]] == ["monday", "friday"]
        assert created_plan["sessions"][0]["exercises"][0]["exercise"]["name"] == "Barbell Back Squat"
        assert created_plan["client"]["id"] == CLIENT_ID
        assert plan_repo.session_count() == 2

    def test_create_for_unassigned_client(self, client, auth_headers, plan_repo):
        response = client.post(
            "/workouts/plans",
            headers=auth_headers(TRAINER_ID),
            json=_plan_body(client_id=FREE_CLIENT_ID),
        )
        assert response.status_code == 403
        assert plan_repo.session_count() == 0

    def test_create_with_retired_exercise(self, client, auth_headers):
        body = _plan_body(sessions=[
            {"day_of_week": "monday", "exercises": [{"exercise_id": "ex-retired"}]},
        ])
        response = client.post("/workouts/plans", headers=auth_headers(TRAINER_ID), json=body)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "exercise_id"

    def test_create_with_bad_day(self, client, auth_headers):
        body = _plan_body(sessions=[{"day_of_week": "someday", "exercises": []}])
        response = client.post("/workouts/plans", headers=auth_headers(TRAINER_ID), json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    def test_storage_failure_is_500_and_cleans_up(self, client, auth_headers, plan_repo):
        plan_repo.fail_plan_create = True
        response = client.post("/workouts/plans", headers=auth_headers(TRAINER_ID), json=_plan_body())
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to create workout plan"
        assert plan_repo.session_count() == 0

    def test_list_plans(self, client, auth_headers, created_plan):
        response = client.get(
            "/workouts/plans", headers=auth_headers(TRAINER_ID), params={"goals": "strength,mobility"}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert [p["id"] for p in data["plans"]] == [created_plan["id"]]
        assert data["pagination"]["total"] == 1

    def test_list_plans_bad_sort_field(self, client, auth_headers):
        response = client.get(
            "/workouts/plans", headers=auth_headers(TRAINER_ID), params={"sort_by": "password"}
        )
        assert response.status_code == 400

    def test_get_plan(self, client, auth_headers, created_plan):
        response = client.get(f"/workouts/plans/{created_plan['id']}", headers=auth_headers(TRAINER_ID))
        assert response.status_code == 200
        assert len(response.json()["data"]["plan"]["sessions"]) == 2

    def test_other_trainer_gets_404(self, client, auth_headers, created_plan):
        response = client.get(
            f"/workouts/plans/{created_plan['id']}", headers=auth_headers(OTHER_TRAINER_ID)
        )
        assert response.status_code == 404

    def test_update_plan_replaces_sessions(self, client, auth_headers, created_plan, plan_repo):
        response = client.put(
            f"/workouts/plans/{created_plan['id']}",
            headers=auth_headers(TRAINER_ID),
            json={
                "name": "Base Building v2",
                "sessions": [
                    {"day_of_week": "wednesday", "exercises": [{"exercise_id": "ex-bench", "sets": 5}]},
                ],
            },
        )
        assert response.status_code == 200
        plan = response.json()["data"]["plan"]
        assert plan["name"] == "Base Building v2"
        assert [s["day_of_week"] for s in plan["sessions"]] == ["wednesday"]
        assert plan_repo.session_count() == 1

    def test_update_rejects_week_past_end(self, client, auth_headers, created_plan):
        response = client.put(
            f"/workouts/plans/{created_plan['id']}",
            headers=auth_headers(TRAINER_ID),
            json={"current_week": 7},
        )
        assert response.status_code == 400

    def test_toggle(self, client, auth_headers, created_plan):
        response = client.put(
            f"/workouts/plans/{created_plan['id']}/toggle",
            headers=auth_headers(TRAINER_ID),
            json={"is_active": False},
        )
        assert response.status_code == 200
        assert response.json()["data"]["plan"]["is_active"] is False
        assert response.json()["message"] == "Workout plan deactivated successfully"


@pytest.mark.integration
class TestExerciseEndpoints:
    def test_list_default_limit(self, client, auth_headers):
        response = client.get("/workouts/exercises", headers=auth_headers(TRAINER_ID))
        data = response.json()["data"]
        assert len(data["exercises"]) == 3
        assert data["pagination"]["limit"] == 20

    def test_list_filters(self, client, auth_headers):
        response = client.get(
            "/workouts/exercises",
            headers=auth_headers(TRAINER_ID),
            params={"muscle_groups": "chest", "difficulty": "beginner"},
        )
        assert [e["id"] for e in response.json()["data"]["exercises"]] == ["ex-pushup"]

    def test_create_and_deactivate(self, client, auth_headers):
        created = client.post(
            "/workouts/exercises",
            headers=auth_headers(TRAINER_ID),
            json={"name": "Romanian Deadlift", "muscle_groups": ["Hamstrings"], "equipment": ["barbell"]},
        )
        assert created.status_code == 201
        exercise = created.json()["data"]["exercise"]
        assert exercise["muscle_groups"] == ["hamstrings"]

        denied = client.put(
            f"/workouts/exercises/{exercise['id']}/deactivate", headers=auth_headers(OTHER_TRAINER_ID)
        )
        assert denied.status_code == 404

        retired = client.put(
            f"/workouts/exercises/{exercise['id']}/deactivate", headers=auth_headers(TRAINER_ID)
        )
        assert retired.status_code == 200
        assert retired.json()["data"]["exercise"]["is_active"] is False

    def test_create_requires_muscle_group(self, client, auth_headers):
        response = client.post(
            "/workouts/exercises",
            headers=auth_headers(TRAINER_ID),
            json={"name": "Mystery", "muscle_groups": []},
        )
        assert response.status_code == 400


@pytest.mark.integration
class TestTrainerStatsEndpoint:
    def test_stats(self, client, auth_headers, created_plan):
        response = client.get("/workouts/stats", headers=auth_headers(TRAINER_ID))
        assert response.status_code == 200
        stats = response.json()["data"]["stats"]
        assert stats["total_plans"] == 1
        assert stats["active_plans"] == 1
        assert stats["total_clients"] == 1
        assert stats["average_completion_rate"] == 0
