"""
Page arithmetic shared by every listing endpoint.

Listings are requested with a 1-indexed ``page`` and a ``limit``; the
repositories receive the equivalent ``offset`` and report the total count.
"""

import math

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    """A requested page of results."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination block returned alongside every listing."""

    current_page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """
        Compute the pagination block for a page of results.

        Args:
            page: 1-indexed page number
            limit: Page size (must be positive)
            total: Total number of matching records

        Returns:
            Pagination with total_pages = ceil(total / limit)
        """
        if limit <= 0:
            raise ValueError("limit must be positive")
        total_pages = math.ceil(total / limit)
        return cls(
            current_page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    @classmethod
    def for_request(cls, request: PageRequest, total: int) -> "Pagination":
        return cls.build(request.page, request.limit, total)
