"""
Account Repository Interface (Port).

This module defines the abstract interface for account persistence.
Accounts hold identity, role, approval flags and the client/trainer
assignment fields.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple


class AccountRepository(Protocol):
    """
    Repository interface for account persistence.

    All methods work with dictionaries for flexibility.
    The application layer converts rows to domain models.
    """

    def get_by_id(self, account_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an account by its ID.

        Args:
            account_id: The account's ID

        Returns:
            Account dictionary if found, None otherwise
        """
        ...

    def get_many(self, account_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get several accounts at once (reference expansion).

        Args:
            account_ids: Account IDs; unknown IDs are skipped

        Returns:
            List of account dictionaries in no particular order
        """
        ...

    def find_by_email_or_username(
        self,
        *,
        email: Optional[str] = None,
        username: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Find an account that already uses the given email or username.

        Args:
            email: Email to match (case-insensitive)
            username: Username to match
            exclude_id: Account to ignore (used when updating a profile)

        Returns:
            The first matching account dictionary, or None
        """
        ...

    def find_by_login(self, identifier: str) -> Optional[Dict[str, Any]]:
        """
        Find an account by username or email.

        Args:
            identifier: Username or email typed at login

        Returns:
            Account dictionary if found, None otherwise
        """
        ...

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new account.

        Raises:
            ConflictError: If email or username is already taken
        """
        ...

    def update(self, account_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update fields of an existing account.

        Raises:
            ConflictError: If the update violates a unique constraint
        """
        ...

    def list(
        self,
        *,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        is_approved: Optional[bool] = None,
        assigned_trainer_id: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        List accounts matching the filters, newest first.

        Search matches first name, last name, username or email.

        Returns:
            Tuple of (page of account dictionaries, total matching count)
        """
        ...

    def list_pending_change_requests(
        self,
        *,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        List client accounts with a pending trainer change request.

        Ordered by request time, newest first.

        Returns:
            Tuple of (page of account dictionaries, total matching count)
        """
        ...
