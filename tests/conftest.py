"""
Shared fixtures for the Gym Platform API test suite.

Provides:
- Test settings (cheap bcrypt rounds, fixed JWT secret, no .env)
- Fresh fake repositories per test
- A seeded cast of accounts: admin, approved trainer, pending trainer,
  a client assigned to the trainer and an unassigned client
- An app built by create_app() with every repository dependency overridden
- Token and header helpers
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.auth import create_access_token, hash_password
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    ADMIN_ID,
    CLIENT_ID,
    FREE_CLIENT_ID,
    OTHER_TRAINER_ID,
    PENDING_TRAINER_ID,
    TEST_PASSWORD,
    TRAINER_ID,
    FakeAccountRepository,
    FakeExerciseRepository,
    FakePlanRepository,
    FakeWorkoutLogRepository,
    make_account_row,
)

# Hashed once per session; bcrypt is deliberately slow even at low cost
_PASSWORD_HASH = hash_password(TEST_PASSWORD, rounds=4)


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        jwt_secret="test-jwt-secret",
        bcrypt_rounds=4,
        _env_file=None,
    )


# =============================================================================
# Fake Repositories
# =============================================================================


@pytest.fixture
def account_repo() -> FakeAccountRepository:
    repo = FakeAccountRepository()
    repo.seed([
        make_account_row("admin", role="admin", account_id=ADMIN_ID, password_hash=_PASSWORD_HASH),
        make_account_row("trainer", role="trainer", account_id=TRAINER_ID, password_hash=_PASSWORD_HASH),
        make_account_row(
            "pendingtrainer",
            role="trainer",
            account_id=PENDING_TRAINER_ID,
            password_hash=_PASSWORD_HASH,
            is_approved=False,
        ),
        make_account_row("othertrainer", role="trainer", account_id=OTHER_TRAINER_ID, password_hash=_PASSWORD_HASH),
        make_account_row(
            "client",
            account_id=CLIENT_ID,
            password_hash=_PASSWORD_HASH,
            assigned_trainer_id=TRAINER_ID,
        ),
        make_account_row("freeclient", account_id=FREE_CLIENT_ID, password_hash=_PASSWORD_HASH),
    ])
    return repo


@pytest.fixture
def exercise_repo() -> FakeExerciseRepository:
    return FakeExerciseRepository()


@pytest.fixture
def plan_repo() -> FakePlanRepository:
    return FakePlanRepository()


@pytest.fixture
def log_repo() -> FakeWorkoutLogRepository:
    return FakeWorkoutLogRepository()


# =============================================================================
# App and Client
# =============================================================================


@pytest.fixture
def app(settings, account_repo, exercise_repo, plan_repo, log_repo):
    """App from the factory with every repository replaced by a fake."""
    test_app = create_app(settings=settings)
    test_app.dependency_overrides[deps.get_settings] = lambda: settings
    test_app.dependency_overrides[deps.get_account_repo] = lambda: account_repo
    test_app.dependency_overrides[deps.get_exercise_repo] = lambda: exercise_repo
    test_app.dependency_overrides[deps.get_plan_repo] = lambda: plan_repo
    test_app.dependency_overrides[deps.get_log_repo] = lambda: log_repo
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


# =============================================================================
# Auth Helpers
# =============================================================================


@pytest.fixture
def auth_headers(settings):
    """Return a function building an Authorization header for an account ID."""

    def _headers(account_id: str) -> Dict[str, str]:
        token, _ = create_access_token(account_id, settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers
