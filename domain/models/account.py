"""
Account aggregate: clients, trainers and admins.

An account is created at registration and afterwards only mutated (profile
edits, approval, assignment, change requests, activation toggles); it is
never hard-deleted.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class Role(str, Enum):
    """Account roles."""

    CLIENT = "client"
    TRAINER = "trainer"
    ADMIN = "admin"


class ChangeRequestStatus(str, Enum):
    """Lifecycle of a client-initiated trainer change request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TrainerChangeRequest(BaseModel):
    """
    A client's request to be moved to another trainer.

    Transitions are one-way: pending -> approved or pending -> rejected.
    A decided request is replaced (not reopened) when the client asks again.
    """

    requested_trainer_id: str
    reason: Optional[str] = Field(default=None, max_length=500)
    status: ChangeRequestStatus = ChangeRequestStatus.PENDING
    requested_at: datetime
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
    decision_reason: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == ChangeRequestStatus.PENDING

    def decide(
        self,
        approved: bool,
        admin_id: str,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "TrainerChangeRequest":
        """
        Record an admin decision on a pending request.

        Raises:
            ValueError: If the request has already been processed
        """
        if not self.is_pending:
            raise ValueError(f"Change request already {self.status.value}")
        return self.model_copy(
            update={
                "status": ChangeRequestStatus.APPROVED if approved else ChangeRequestStatus.REJECTED,
                "processed_at": now or datetime.now(timezone.utc),
                "processed_by": admin_id,
                "decision_reason": reason,
            }
        )


class Account(BaseModel):
    """A registered user of the platform."""

    id: str
    username: str = Field(..., min_length=3, max_length=30)
    email: str
    password_hash: Optional[str] = None

    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None

    role: Role = Role.CLIENT
    is_active: bool = True
    is_verified: bool = False
    is_approved: bool = False
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    # Client-only relationship fields
    assigned_trainer_id: Optional[str] = None
    trainer_change_request: Optional[TrainerChangeRequest] = None

    # Trainer profile
    specialization: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    experience_years: Optional[int] = Field(default=None, ge=0, le=80)
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)

    # Login security
    login_attempts: int = Field(default=0, ge=0)
    lock_until: Optional[datetime] = None
    last_login: Optional[datetime] = None
    qr_code: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_client_only_fields(self) -> "Account":
        """Only clients are bound to a trainer or file change requests."""
        if self.role != Role.CLIENT:
            if self.assigned_trainer_id is not None:
                raise ValueError("Only clients can have an assigned trainer")
            if self.trainer_change_request is not None:
                raise ValueError("Only clients can request a trainer change")
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_approved_trainer(self) -> bool:
        return self.role == Role.TRAINER and self.is_approved

    @property
    def has_pending_change_request(self) -> bool:
        return (
            self.trainer_change_request is not None
            and self.trainer_change_request.is_pending
        )

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        """Whether failed logins currently lock the account."""
        if self.lock_until is None:
            return False
        now = now or datetime.now(timezone.utc)
        lock_until = self.lock_until
        if lock_until.tzinfo is None:
            lock_until = lock_until.replace(tzinfo=timezone.utc)
        return lock_until > now

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def public_profile(self) -> Dict[str, Any]:
        """Profile safe to return to any authenticated caller."""
        return self.model_dump(
            mode="json",
            exclude={"password_hash", "login_attempts", "lock_until", "qr_code"},
        )

    def summary(self) -> Dict[str, Any]:
        """Short reference used when expanding plan and log relations."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "username": self.username,
            "email": self.email,
        }
