"""
Account Use Cases.

Profile maintenance, account listings and the admin actions that flip
account flags (trainer approval, activation).
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field

from application.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from application.ports import AccountRepository
from application.use_cases.results import PageResult
from domain.models import Account, Role
from domain.pagination import PageRequest, Pagination

logger = logging.getLogger(__name__)


class ProfileChanges(BaseModel):
    """Self-service profile fields. Anything else in the body is ignored."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.-]+$")
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone: Optional[str] = Field(default=None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(default=None, max_length=20)


class TrainerProfileChanges(BaseModel):
    """Fields a trainer maintains about their own practice."""

    specialization: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    experience_years: Optional[int] = Field(default=None, ge=0, le=80)
    bio: Optional[str] = Field(default=None, max_length=2000)
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class AccountFilters(BaseModel):
    """Filters accepted by the admin account listing."""

    role: Optional[Role] = None
    is_active: Optional[bool] = None
    is_approved: Optional[bool] = None
    search: Optional[str] = None


def load_account(account_repo: AccountRepository, account_id: str) -> Account:
    """
    Fetch an account or raise.

    Raises:
        NotFoundError: If no account has this ID
    """
    row = account_repo.get_by_id(account_id)
    if not row:
        raise NotFoundError("User not found")
    return Account.model_validate(row)


def _page_of_profiles(
    rows: List[Dict[str, Any]], total: int, page: PageRequest
) -> PageResult:
    return PageResult(
        items=[Account.model_validate(row).public_profile() for row in rows],
        pagination=Pagination.for_request(page, total),
    )


class AccountService:
    """
    Use case for reading and maintaining accounts.

    Dependencies are injected via constructor for testability.
    """

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    # -------------------------------------------------------------------------
    # Self-service
    # -------------------------------------------------------------------------

    def update_profile(self, account: Account, changes: ProfileChanges) -> Account:
        """
        Update the caller's own profile fields.

        Raises:
            ConflictError: If the new email or username belongs to another account
        """
        update = changes.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if "email" in update:
            update["email"] = update["email"].lower()
        if not update:
            return account

        if "email" in update or "username" in update:
            existing = self._account_repo.find_by_email_or_username(
                email=update.get("email"),
                username=update.get("username"),
                exclude_id=account.id,
            )
            if existing:
                if update.get("email") and (existing.get("email") or "").lower() == update["email"]:
                    raise ConflictError("Email already registered")
                raise ConflictError("Username already exists")

        row = self._account_repo.update(account.id, update)
        logger.info(f"Account {account.id} updated profile fields: {sorted(update)}")
        return Account.model_validate(row)

    def update_trainer_profile(
        self, account: Account, changes: TrainerProfileChanges
    ) -> Account:
        """
        Update the caller's trainer profile.

        Raises:
            AuthorizationError: If the caller is not a trainer
        """
        if account.role != Role.TRAINER:
            raise AuthorizationError("Only trainers have a trainer profile")

        update = changes.model_dump(mode="json", exclude_unset=True)
        if not update:
            return account
        row = self._account_repo.update(account.id, update)
        logger.info(f"Trainer {account.id} updated trainer profile")
        return Account.model_validate(row)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_account(self, account_id: str) -> Account:
        return load_account(self._account_repo, account_id)

    def list_accounts(self, filters: AccountFilters, page: PageRequest) -> PageResult:
        """Admin listing of every account, newest first."""
        rows, total = self._account_repo.list(
            role=filters.role.value if filters.role else None,
            is_active=filters.is_active,
            is_approved=filters.is_approved,
            search=filters.search,
            offset=page.offset,
            limit=page.limit,
        )
        return _page_of_profiles(rows, total, page)

    def list_trainers(
        self,
        page: PageRequest,
        search: Optional[str] = None,
        is_approved: Optional[bool] = True,
    ) -> PageResult:
        """Active trainers, approved ones only unless asked otherwise."""
        rows, total = self._account_repo.list(
            role=Role.TRAINER.value,
            is_active=True,
            is_approved=is_approved,
            search=search,
            offset=page.offset,
            limit=page.limit,
        )
        return _page_of_profiles(rows, total, page)

    def list_trainer_clients(
        self,
        trainer_id: str,
        page: PageRequest,
        search: Optional[str] = None,
    ) -> PageResult:
        """Clients currently assigned to a trainer."""
        rows, total = self._account_repo.list(
            role=Role.CLIENT.value,
            assigned_trainer_id=trainer_id,
            search=search,
            offset=page.offset,
            limit=page.limit,
        )
        return _page_of_profiles(rows, total, page)

    # -------------------------------------------------------------------------
    # Admin actions
    # -------------------------------------------------------------------------

    def approve_trainer(
        self,
        admin: Account,
        trainer_id: str,
        is_approved: bool,
        reason: Optional[str] = None,
    ) -> Account:
        """
        Approve or revoke a trainer.

        Raises:
            NotFoundError: If the account is missing or not a trainer
        """
        row = self._account_repo.get_by_id(trainer_id)
        if not row or row.get("role") != Role.TRAINER.value:
            raise NotFoundError("Trainer not found")

        now = datetime.now(timezone.utc)
        row = self._account_repo.update(
            trainer_id,
            {
                "is_approved": is_approved,
                "approved_by": admin.id,
                "approved_at": now.isoformat(),
            },
        )
        action = "approved" if is_approved else "revoked"
        suffix = f": {reason}" if reason else ""
        logger.info(f"Admin {admin.id} {action} trainer {trainer_id}{suffix}")
        return Account.model_validate(row)

    def set_active(self, admin: Account, account_id: str, is_active: bool) -> Account:
        """
        Activate or deactivate an account.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If an admin tries to deactivate themselves
        """
        load_account(self._account_repo, account_id)
        if account_id == admin.id and not is_active:
            raise ValidationError("You cannot deactivate your own account")

        row = self._account_repo.update(account_id, {"is_active": is_active})
        state = "activated" if is_active else "deactivated"
        logger.info(f"Admin {admin.id} {state} account {account_id}")
        return Account.model_validate(row)
