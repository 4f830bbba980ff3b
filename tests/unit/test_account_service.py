"""
Unit tests for AccountService.
"""

import pytest

from application.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from application.use_cases import (
    AccountFilters,
    AccountService,
    ProfileChanges,
    TrainerProfileChanges,
)
from domain.models import Account
from domain.pagination import PageRequest
from tests.fakes import (
    ADMIN_ID,
    CLIENT_ID,
    FREE_CLIENT_ID,
    OTHER_TRAINER_ID,
    PENDING_TRAINER_ID,
    TRAINER_ID,
)


@pytest.fixture
def service(account_repo):
    return AccountService(account_repo=account_repo)


@pytest.fixture
def load(account_repo):
    def _load(account_id: str) -> Account:
        return Account.model_validate(account_repo.get_by_id(account_id))

    return _load


@pytest.mark.unit
class TestUpdateProfile:
    def test_updates_given_fields_only(self, service, load):
        updated = service.update_profile(
            load(CLIENT_ID), ProfileChanges(first_name="Carla", phone="555-0100")
        )
        assert updated.first_name == "Carla"
        assert updated.phone == "555-0100"
        assert updated.last_name == "Tester"

    def test_email_lowercased(self, service, load):
        updated = service.update_profile(load(CLIENT_ID), ProfileChanges(email="New@Example.COM"))
        assert updated.email == "new@example.com"

    def test_email_taken_by_other_account(self, service, load):
        with pytest.raises(ConflictError, match="Email already registered"):
            service.update_profile(load(CLIENT_ID), ProfileChanges(email="trainer@example.com"))

    def test_username_taken_by_other_account(self, service, load):
        with pytest.raises(ConflictError, match="Username already exists"):
            service.update_profile(load(CLIENT_ID), ProfileChanges(username="trainer"))

    def test_keeping_own_email_is_not_a_conflict(self, service, load):
        updated = service.update_profile(load(CLIENT_ID), ProfileChanges(email="client@example.com"))
        assert updated.email == "client@example.com"

    def test_no_changes_returns_account(self, service, load):
        account = load(CLIENT_ID)
        assert service.update_profile(account, ProfileChanges()) == account

    def test_role_is_not_a_profile_field(self):
        changes = ProfileChanges.model_validate({"role": "admin", "first_name": "X"})
        assert "role" not in changes.model_dump(exclude_unset=True)


@pytest.mark.unit
class TestUpdateTrainerProfile:
    def test_trainer_updates_profile(self, service, load):
        updated = service.update_trainer_profile(
            load(TRAINER_ID),
            TrainerProfileChanges(specialization=["strength"], experience_years=6, hourly_rate=45.0),
        )
        assert updated.specialization == ["strength"]
        assert updated.experience_years == 6
        assert updated.hourly_rate == 45.0

    def test_client_rejected(self, service, load):
        with pytest.raises(AuthorizationError):
            service.update_trainer_profile(load(CLIENT_ID), TrainerProfileChanges(bio="hi"))


@pytest.mark.unit
class TestListings:
    def test_get_account_missing(self, service):
        with pytest.raises(NotFoundError, match="User not found"):
            service.get_account("missing")

    def test_list_accounts_paginates(self, service):
        result = service.list_accounts(AccountFilters(), PageRequest(page=1, limit=4))
        assert len(result.items) == 4
        assert result.pagination.total == 6
        assert result.pagination.total_pages == 2
        assert result.pagination.has_next is True

    def test_list_accounts_filters_by_role(self, service):
        result = service.list_accounts(AccountFilters(role="trainer"), PageRequest())
        assert {item["id"] for item in result.items} == {
            TRAINER_ID, PENDING_TRAINER_ID, OTHER_TRAINER_ID,
        }

    def test_list_accounts_search(self, service):
        result = service.list_accounts(AccountFilters(search="freecl"), PageRequest())
        assert [item["id"] for item in result.items] == [FREE_CLIENT_ID]

    def test_items_never_expose_secrets(self, service):
        result = service.list_accounts(AccountFilters(), PageRequest(limit=100))
        for item in result.items:
            assert "password_hash" not in item

    def test_list_trainers_only_approved_and_active(self, service, account_repo):
        account_repo.update(OTHER_TRAINER_ID, {"is_active": False})
        result = service.list_trainers(PageRequest())
        assert [item["id"] for item in result.items] == [TRAINER_ID]

    def test_list_trainer_clients(self, service):
        result = service.list_trainer_clients(TRAINER_ID, PageRequest())
        assert [item["id"] for item in result.items] == [CLIENT_ID]
        assert service.list_trainer_clients(OTHER_TRAINER_ID, PageRequest()).items == []


@pytest.mark.unit
class TestAdminActions:
    def test_approve_trainer(self, service, load):
        trainer = service.approve_trainer(load(ADMIN_ID), PENDING_TRAINER_ID, True, "Certified")
        assert trainer.is_approved is True
        assert trainer.approved_by == ADMIN_ID
        assert trainer.approved_at is not None

    def test_revoke_trainer(self, service, load):
        trainer = service.approve_trainer(load(ADMIN_ID), TRAINER_ID, False)
        assert trainer.is_approved is False

    def test_approve_non_trainer(self, service, load):
        with pytest.raises(NotFoundError, match="Trainer not found"):
            service.approve_trainer(load(ADMIN_ID), CLIENT_ID, True)

    def test_deactivate_account(self, service, load):
        account = service.set_active(load(ADMIN_ID), CLIENT_ID, False)
        assert account.is_active is False
        assert service.set_active(load(ADMIN_ID), CLIENT_ID, True).is_active is True

    def test_admin_cannot_deactivate_self(self, service, load):
        with pytest.raises(ValidationError, match="cannot deactivate your own account"):
            service.set_active(load(ADMIN_ID), ADMIN_ID, False)

    def test_toggle_missing_account(self, service, load):
        with pytest.raises(NotFoundError):
            service.set_active(load(ADMIN_ID), "missing", False)
