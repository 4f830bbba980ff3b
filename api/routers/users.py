"""
Users router.

This router provides:
- Profile read/update for the caller (and the trainer profile for trainers)
- Account listings (admin), trainer directory and a trainer's client list
- Client assignment and the trainer change request workflow
- Admin actions: trainer approval, change request decisions, activation

Fixed paths are registered before ``/{user_id}`` so they are not captured
by it.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import (
    RequestContext,
    get_account_service,
    get_assignment_service,
    get_current_context,
    require_admin,
    require_client,
    require_trainer,
)
from api.responses import paginated, success
from api.schemas import (
    ApproveTrainerRequest,
    AssignClientRequest,
    ProcessTrainerChangeRequest,
    ToggleStatusRequest,
    TrainerChangeRequestBody,
)
from application.exceptions import AuthorizationError, ValidationError
from application.use_cases import (
    AccountFilters,
    AccountService,
    AssignmentService,
    ProfileChanges,
    TrainerProfileChanges,
)
from domain.models import Role
from domain.pagination import PageRequest

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


# =============================================================================
# Profile
# =============================================================================


@router.get("/profile")
def get_profile(ctx: RequestContext = Depends(get_current_context)):
    return success({"user": ctx.account.public_profile()}, "Profile retrieved successfully")


@router.put("/profile")
def update_profile(
    body: ProfileChanges,
    ctx: RequestContext = Depends(get_current_context),
    accounts: AccountService = Depends(get_account_service),
):
    """Update the caller's own profile. Role and security fields are not accepted."""
    account = accounts.update_profile(ctx.account, body)
    return success({"user": account.public_profile()}, "Profile updated successfully")


@router.put("/profile/trainer")
def update_trainer_profile(
    body: TrainerProfileChanges,
    ctx: RequestContext = Depends(get_current_context),
    accounts: AccountService = Depends(get_account_service),
):
    account = accounts.update_trainer_profile(ctx.account, body)
    return success({"user": account.public_profile()}, "Trainer profile updated successfully")


# =============================================================================
# Listings
# =============================================================================


@router.get("")
def list_users(
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None),
    is_approved: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """List every account (admin only)."""
    filters = AccountFilters(role=role, is_active=is_active, is_approved=is_approved, search=search)
    result = accounts.list_accounts(filters, PageRequest(page=page, limit=limit))
    return paginated("users", result, "Users retrieved successfully")


@router.get("/trainers")
def list_trainers(
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(get_current_context),
    accounts: AccountService = Depends(get_account_service),
):
    """Directory of approved, active trainers."""
    result = accounts.list_trainers(PageRequest(page=page, limit=limit), search=search)
    return paginated("trainers", result, "Trainers retrieved successfully")


@router.get("/trainer/clients")
def list_trainer_clients(
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(require_trainer),
    accounts: AccountService = Depends(get_account_service),
):
    result = accounts.list_trainer_clients(
        ctx.account_id, PageRequest(page=page, limit=limit), search=search
    )
    return paginated("clients", result, "Clients retrieved successfully")


# =============================================================================
# Assignment & Change Requests
# =============================================================================


@router.post("/trainer/assign-client")
def assign_client(
    body: AssignClientRequest,
    ctx: RequestContext = Depends(require_trainer),
    assignment: AssignmentService = Depends(get_assignment_service),
):
    """
    Assign a client to a trainer.

    Trainers assign clients to themselves; admins name the trainer.
    """
    if ctx.role == Role.ADMIN:
        if not body.trainer_id:
            raise ValidationError("trainer_id is required")
        trainer_id = body.trainer_id
    else:
        if body.trainer_id and body.trainer_id != ctx.account_id:
            raise AuthorizationError("Trainers can only assign clients to themselves")
        trainer_id = ctx.account_id

    client = assignment.assign_client(body.client_id, trainer_id)
    return success({"client": client.public_profile()}, "Client assigned successfully")


@router.post("/client/request-trainer-change")
def request_trainer_change(
    body: TrainerChangeRequestBody,
    ctx: RequestContext = Depends(require_client),
    assignment: AssignmentService = Depends(get_assignment_service),
):
    client = assignment.request_trainer_change(
        ctx.account, body.requested_trainer_id, body.reason
    )
    return success(
        {"trainer_change_request": client.public_profile()["trainer_change_request"]},
        "Trainer change request submitted successfully",
    )


# =============================================================================
# Admin
# =============================================================================


@router.put("/trainer/{trainer_id}/approve")
def approve_trainer(
    trainer_id: str,
    body: ApproveTrainerRequest,
    ctx: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    trainer = accounts.approve_trainer(ctx.account, trainer_id, body.is_approved, body.reason)
    message = "Trainer approved successfully" if body.is_approved else "Trainer approval revoked"
    return success({"trainer": trainer.public_profile()}, message)


@router.get("/admin/trainer-change-requests")
def list_trainer_change_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    ctx: RequestContext = Depends(require_admin),
    assignment: AssignmentService = Depends(get_assignment_service),
):
    result = assignment.list_pending_change_requests(PageRequest(page=page, limit=limit))
    return paginated("requests", result, "Trainer change requests retrieved successfully")


@router.put("/admin/trainer-change/{client_id}")
def process_trainer_change(
    client_id: str,
    body: ProcessTrainerChangeRequest,
    ctx: RequestContext = Depends(require_admin),
    assignment: AssignmentService = Depends(get_assignment_service),
):
    client = assignment.process_trainer_change(ctx.account, client_id, body.approved, body.reason)
    message = (
        "Trainer change request approved" if body.approved
        else "Trainer change request rejected"
    )
    return success({"client": client.public_profile()}, message)


@router.put("/admin/user/{user_id}/toggle-status")
def toggle_user_status(
    user_id: str,
    body: ToggleStatusRequest,
    ctx: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    account = accounts.set_active(ctx.account, user_id, body.is_active)
    state = "activated" if body.is_active else "deactivated"
    return success({"user": account.public_profile()}, f"User {state} successfully")


# =============================================================================
# Single account (registered last)
# =============================================================================


@router.get("/{user_id}")
def get_user(
    user_id: str,
    ctx: RequestContext = Depends(get_current_context),
    accounts: AccountService = Depends(get_account_service),
):
    account = accounts.get_account(user_id)
    return success({"user": account.public_profile()}, "User retrieved successfully")
