"""
Authentication router.

This router provides:
- Registration and password login (with lockout)
- QR code login and QR payload regeneration
- Token verification, refresh and logout
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import RequestContext, get_auth_service, get_current_context
from api.responses import success
from api.schemas import LoginRequest, QRLoginRequest
from application.use_cases import AuthService, RegistrationData

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


@router.post("/register", status_code=201)
def register(
    body: RegistrationData,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Register a client or trainer account.

    Trainers cannot use trainer features until an admin approves them.
    """
    result = auth.register(body)
    return success(
        {
            "token": result.token,
            "user": result.account.public_profile(),
            "qr_code": result.qr_code,
        },
        "User registered successfully",
    )


@router.post("/login")
def login(
    body: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """Log in with username or email and password."""
    result = auth.login(body.username, body.password)
    return success(
        {"token": result.token, "user": result.account.public_profile()},
        "Login successful",
    )


@router.post("/login/qr")
def login_with_qr(
    body: QRLoginRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """Log in with a QR payload issued to the account within the last few minutes."""
    result = auth.login_with_qr(body.qr_data)
    return success(
        {"token": result.token, "user": result.account.public_profile()},
        "QR login successful",
    )


@router.post("/qr/generate")
def generate_qr(
    ctx: RequestContext = Depends(get_current_context),
    auth: AuthService = Depends(get_auth_service),
):
    qr_code = auth.regenerate_qr(ctx.account)
    return success({"qr_code": qr_code}, "QR code generated successfully")


@router.get("/verify")
def verify(ctx: RequestContext = Depends(get_current_context)):
    return success({"user": ctx.account.public_profile()}, "Token is valid")


@router.post("/refresh")
def refresh(
    ctx: RequestContext = Depends(get_current_context),
    auth: AuthService = Depends(get_auth_service),
):
    result = auth.refresh(ctx.account)
    return success({"token": result.token}, "Token refreshed successfully")


@router.post("/logout")
def logout(ctx: RequestContext = Depends(get_current_context)):
    """
    Log out.

    Tokens are stateless; the client discards its copy.
    """
    logger.info(f"Account {ctx.account_id} logged out")
    return success(message="Logout successful")
