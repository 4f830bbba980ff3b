"""
Users API request bodies.

Profile updates use ProfileChanges and TrainerProfileChanges from the
accounts use case directly.
"""

from typing import Optional

from pydantic import BaseModel, Field


class AssignClientRequest(BaseModel):
    """Request body for POST /users/trainer/assign-client."""
    client_id: str = Field(..., min_length=1)
    trainer_id: Optional[str] = Field(
        default=None,
        description="Trainer to assign to. Trainers may omit it to assign to themselves.",
    )


class TrainerChangeRequestBody(BaseModel):
    """Request body for POST /users/client/request-trainer-change."""
    requested_trainer_id: str = Field(..., min_length=1)
    reason: Optional[str] = Field(default=None, max_length=500)


class ApproveTrainerRequest(BaseModel):
    """Request body for PUT /users/trainer/{id}/approve."""
    is_approved: bool
    reason: Optional[str] = Field(default=None, max_length=500)


class ProcessTrainerChangeRequest(BaseModel):
    """Request body for PUT /users/admin/trainer-change/{client_id}."""
    approved: bool
    reason: Optional[str] = Field(default=None, max_length=500)


class ToggleStatusRequest(BaseModel):
    """Request body for PUT /users/admin/user/{id}/toggle-status."""
    is_active: bool
