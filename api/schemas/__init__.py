"""
Request schemas for the Gym Platform API.
"""

from api.schemas.auth import LoginRequest, QRLoginRequest
from api.schemas.users import (
    ApproveTrainerRequest,
    AssignClientRequest,
    ProcessTrainerChangeRequest,
    ToggleStatusRequest,
    TrainerChangeRequestBody,
)
from api.schemas.workouts import TogglePlanRequest

__all__ = [
    "LoginRequest",
    "QRLoginRequest",
    "AssignClientRequest",
    "TrainerChangeRequestBody",
    "ApproveTrainerRequest",
    "ProcessTrainerChangeRequest",
    "ToggleStatusRequest",
    "TogglePlanRequest",
]
