"""
Result objects shared by the use cases.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.models import Account
from domain.pagination import Pagination


@dataclass
class PageResult:
    """A page of serialized records plus its pagination block."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    pagination: Optional[Pagination] = None


@dataclass
class AuthResult:
    """Outcome of a successful registration or login."""

    account: Account
    token: str
    qr_code: Optional[str] = None
