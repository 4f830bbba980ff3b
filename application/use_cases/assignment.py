"""
Trainer Assignment Use Case.

Binds clients to trainers, either directly (trainer or admin assigns) or
through the client-initiated change request that an admin decides.

Change request lifecycle on the client account:
    none -> pending -> approved | rejected

A decided request is replaced by the next one; a pending request is never
replaced.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from application.exceptions import NotFoundError, ValidationError
from application.ports import AccountRepository
from application.use_cases.results import PageResult
from domain.models import Account, Role, TrainerChangeRequest
from domain.pagination import PageRequest, Pagination

logger = logging.getLogger(__name__)


class AssignmentService:
    """
    Use case for client-to-trainer assignment.

    The checks and the write are separate round trips; two concurrent
    requests for the same client can both pass the pending check.
    """

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def _load_approved_trainer(self, trainer_id: str) -> Account:
        row = self._account_repo.get_by_id(trainer_id)
        if not row:
            raise NotFoundError("Trainer not found or not approved")
        trainer = Account.model_validate(row)
        if not trainer.is_approved_trainer:
            raise NotFoundError("Trainer not found or not approved")
        return trainer

    def _load_client(self, client_id: str) -> Account:
        row = self._account_repo.get_by_id(client_id)
        if not row or row.get("role") != Role.CLIENT.value:
            raise NotFoundError("Client not found")
        return Account.model_validate(row)

    # -------------------------------------------------------------------------
    # Direct assignment
    # -------------------------------------------------------------------------

    def assign_client(self, client_id: str, trainer_id: str) -> Account:
        """
        Assign a client to a trainer, overwriting any current assignment.

        Args:
            client_id: Account to assign
            trainer_id: Approved trainer to assign them to

        Returns:
            The updated client account

        Raises:
            NotFoundError: If the client is missing or not a client, or the
                trainer is missing, not a trainer or not approved
        """
        client = self._load_client(client_id)
        trainer = self._load_approved_trainer(trainer_id)

        row = self._account_repo.update(client.id, {"assigned_trainer_id": trainer.id})
        logger.info(f"Assigned client {client.id} to trainer {trainer.id}")
        return Account.model_validate(row)

    # -------------------------------------------------------------------------
    # Change requests
    # -------------------------------------------------------------------------

    def request_trainer_change(
        self,
        client: Account,
        requested_trainer_id: str,
        reason: Optional[str] = None,
    ) -> Account:
        """
        File a trainer change request for the calling client.

        Raises:
            ValidationError: If a request is already pending, or the requested
                trainer is missing, not a trainer or not approved
        """
        if client.has_pending_change_request:
            raise ValidationError("You already have a pending trainer change request")

        row = self._account_repo.get_by_id(requested_trainer_id)
        trainer = Account.model_validate(row) if row else None
        if trainer is None or not trainer.is_approved_trainer:
            raise ValidationError(
                "Requested trainer not found or not approved",
                errors=[{"field": "requested_trainer_id", "message": "Must be an approved trainer"}],
            )

        request = TrainerChangeRequest(
            requested_trainer_id=trainer.id,
            reason=reason,
            requested_at=datetime.now(timezone.utc),
        )
        row = self._account_repo.update(
            client.id,
            {"trainer_change_request": request.model_dump(mode="json")},
        )
        logger.info(f"Client {client.id} requested a change to trainer {trainer.id}")
        return Account.model_validate(row)

    def process_trainer_change(
        self,
        admin: Account,
        client_id: str,
        approved: bool,
        reason: Optional[str] = None,
    ) -> Account:
        """
        Approve or reject a client's pending change request.

        Approval moves the client to the requested trainer.

        Raises:
            NotFoundError: If the client has no pending request
        """
        row = self._account_repo.get_by_id(client_id)
        client = Account.model_validate(row) if row else None
        if client is None or not client.has_pending_change_request:
            raise NotFoundError("No pending trainer change request found")

        decided = client.trainer_change_request.decide(approved, admin.id, reason)
        update = {"trainer_change_request": decided.model_dump(mode="json")}
        if approved:
            update["assigned_trainer_id"] = decided.requested_trainer_id

        row = self._account_repo.update(client.id, update)
        logger.info(
            f"Admin {admin.id} {decided.status.value} trainer change for client "
            f"{client.id} (requested trainer {decided.requested_trainer_id})"
        )
        return Account.model_validate(row)

    def list_pending_change_requests(self, page: PageRequest) -> PageResult:
        """
        Pending change requests, newest first.

        Each item is the client's profile with the current and requested
        trainers expanded to summaries.
        """
        rows, total = self._account_repo.list_pending_change_requests(
            offset=page.offset, limit=page.limit
        )
        clients = [Account.model_validate(row) for row in rows]

        trainer_ids = set()
        for client in clients:
            trainer_ids.add(client.trainer_change_request.requested_trainer_id)
            if client.assigned_trainer_id:
                trainer_ids.add(client.assigned_trainer_id)
        trainers = {
            row["id"]: Account.model_validate(row).summary()
            for row in self._account_repo.get_many(sorted(trainer_ids))
        } if trainer_ids else {}

        items = []
        for client in clients:
            item = client.public_profile()
            item["assigned_trainer"] = trainers.get(client.assigned_trainer_id)
            item["trainer_change_request"]["requested_trainer"] = trainers.get(
                client.trainer_change_request.requested_trainer_id
            )
            items.append(item)

        return PageResult(items=items, pagination=Pagination.for_request(page, total))

