"""
Authentication request bodies.

Registration uses RegistrationData from the auth use case directly.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""
    username: str = Field(
        ...,
        min_length=1,
        max_length=254,
        description="Username or email address",
    )
    password: str = Field(..., min_length=1, max_length=128)


class QRLoginRequest(BaseModel):
    """Request body for POST /auth/login/qr."""
    qr_data: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="JSON payload scanned from the account's QR code",
    )
