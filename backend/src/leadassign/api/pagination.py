"""Pagination utilities for API endpoints.

Provides standardized pagination across list endpoints.
"""

from typing import Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationParams:
    """Common pagination parameters for dependency injection."""

    def __init__(
        self,
        limit: int = Query(20, ge=1, le=100, description="Maximum results to return"),
        offset: int = Query(0, ge=0, description="Number of results to skip"),
    ):
        self.limit = limit
        self.offset = offset


class PaginatedResult(BaseModel, Generic[T]):
    """Generic paginated result model."""

    results: list[T]
    total: int = Field(..., description="Total number of results available")
    limit: int = Field(..., description="Maximum results requested")
    offset: int = Field(..., description="Number of results skipped")
    has_more: bool = Field(..., description="Whether more results are available")

    @classmethod
    def create(
        cls,
        results: list[T],
        total: int,
        limit: int,
        offset: int,
    ) -> "PaginatedResult[T]":
        """Create a paginated result.

        Args:
            results: Results for current page
            total: Total count of all results
            limit: Page size
            offset: Current offset

        Returns:
            Paginated result
        """
        return cls(
            results=results,
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + len(results) < total,
        )
