"""
Authentication Use Case.

Registration, password login with lockout, QR login and token refresh.

Workflow for password login:
1. Find the account by username or email
2. Refuse locked accounts (423) and deactivated accounts (401)
3. Verify the password; on failure count the attempt and lock when the
   configured maximum is reached
4. On success reset the counter, record last_login and issue a token
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field

from application.exceptions import (
    AccountLockedError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
)
from application.ports import AccountRepository
from application.use_cases.results import AuthResult
from backend.auth import (
    create_access_token,
    generate_qr_data,
    hash_password,
    parse_qr_data,
    verify_password,
)
from backend.settings import Settings
from domain.models import Account, Role

logger = logging.getLogger(__name__)


class RegistrationData(BaseModel):
    """Fields accepted when an account registers itself."""

    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    phone: Optional[str] = Field(default=None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(default=None, max_length=20)
    role: Role = Role.CLIENT


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """
    Use case for issuing access tokens.

    Dependencies are injected via constructor for testability.
    """

    def __init__(self, account_repo: AccountRepository, settings: Settings) -> None:
        self._account_repo = account_repo
        self._settings = settings

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, data: RegistrationData) -> AuthResult:
        """
        Register a client or trainer account.

        Trainers start unapproved. Admin accounts cannot self-register.

        Raises:
            AuthorizationError: If role is admin
            ConflictError: If the email or username is already taken
        """
        if data.role == Role.ADMIN:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        email = data.email.lower()
        existing = self._account_repo.find_by_email_or_username(
            email=email, username=data.username
        )
        if existing:
            if (existing.get("email") or "").lower() == email:
                raise ConflictError("Email already registered")
            raise ConflictError("Username already exists")

        now = _utcnow()
        row = self._account_repo.create(
            {
                "username": data.username,
                "email": email,
                "password_hash": hash_password(data.password, self._settings.bcrypt_rounds),
                "first_name": data.first_name,
                "last_name": data.last_name,
                "phone": data.phone,
                "date_of_birth": data.date_of_birth.isoformat() if data.date_of_birth else None,
                "gender": data.gender,
                "role": data.role.value,
                "is_active": True,
                "is_approved": False,
                "login_attempts": 0,
            }
        )
        account = Account.model_validate(row)

        qr_code = generate_qr_data(account.id, account.username, now)
        row = self._account_repo.update(
            account.id,
            {"qr_code": qr_code, "last_login": now.isoformat()},
        )
        account = Account.model_validate(row)
        token, _ = create_access_token(account.id, self._settings, now)

        logger.info(f"Registered {account.role.value} account {account.id} ({account.username})")
        return AuthResult(account=account, token=token, qr_code=qr_code)

    # -------------------------------------------------------------------------
    # Password Login
    # -------------------------------------------------------------------------

    def login(self, identifier: str, password: str) -> AuthResult:
        """
        Log in with username (or email) and password.

        Raises:
            AuthenticationError: Unknown account, wrong password or deactivated account
            AccountLockedError: Too many failed attempts
        """
        row = self._account_repo.find_by_login(identifier)
        if not row:
            logger.warning(f"Login failed: no account for '{identifier}'")
            raise AuthenticationError("Invalid credentials")

        account = Account.model_validate(row)
        now = _utcnow()

        if account.is_locked(now):
            logger.warning(f"Login refused: account {account.id} is locked")
            raise AccountLockedError()

        if not account.is_active:
            raise AuthenticationError("Account disabled")

        if not verify_password(password, account.password_hash):
            self._register_failed_attempt(account, now)
            raise AuthenticationError("Invalid credentials")

        row = self._account_repo.update(
            account.id,
            {"login_attempts": 0, "lock_until": None, "last_login": now.isoformat()},
        )
        account = Account.model_validate(row)
        token, _ = create_access_token(account.id, self._settings, now)
        logger.info(f"Account {account.id} logged in")
        return AuthResult(account=account, token=token)

    def _register_failed_attempt(self, account: Account, now: datetime) -> None:
        """Count a failed login, restarting the count once a previous lock expired."""
        update: Dict[str, Any] = {}
        if account.lock_until is not None and not account.is_locked(now):
            attempts = 1
            update["lock_until"] = None
        else:
            attempts = account.login_attempts + 1

        update["login_attempts"] = attempts
        if attempts >= self._settings.login_max_attempts:
            lock_until = now + timedelta(minutes=self._settings.login_lock_minutes)
            update["lock_until"] = lock_until.isoformat()
            logger.warning(f"Locking account {account.id} until {lock_until.isoformat()}")
        else:
            logger.warning(f"Failed login for account {account.id} (attempt {attempts})")

        self._account_repo.update(account.id, update)

    # -------------------------------------------------------------------------
    # QR Login
    # -------------------------------------------------------------------------

    def login_with_qr(self, qr_data: str) -> AuthResult:
        """
        Log in with a QR payload previously issued to the account.

        Raises:
            ValidationError: Malformed or expired payload
            AuthenticationError: Unknown account, payload not issued to it, or disabled
        """
        now = _utcnow()
        parsed = parse_qr_data(qr_data, self._settings.qr_login_max_age_seconds, now)

        row = self._account_repo.get_by_id(str(parsed["user_id"]))
        if not row:
            raise AuthenticationError("User not found")

        account = Account.model_validate(row)
        if account.qr_code != qr_data:
            logger.warning(f"QR login refused for account {account.id}: payload not issued")
            raise AuthenticationError("Invalid QR code")
        if not account.is_active:
            raise AuthenticationError("Account disabled")

        row = self._account_repo.update(account.id, {"last_login": now.isoformat()})
        account = Account.model_validate(row)
        token, _ = create_access_token(account.id, self._settings, now)
        logger.info(f"Account {account.id} logged in with QR code")
        return AuthResult(account=account, token=token)

    def regenerate_qr(self, account: Account) -> str:
        """Issue a new QR login payload, replacing the stored one."""
        qr_code = generate_qr_data(account.id, account.username)
        self._account_repo.update(account.id, {"qr_code": qr_code})
        return qr_code

    def refresh(self, account: Account) -> AuthResult:
        """Issue a fresh token for an already authenticated account."""
        token, _ = create_access_token(account.id, self._settings)
        return AuthResult(account=account, token=token)
