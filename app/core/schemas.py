"""Core schema definitions shared by list endpoints."""

from pydantic import BaseModel, Field


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""

    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total number of items")
    pages: int = Field(..., ge=0, description="Total number of pages")

    @classmethod
    def from_query(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        """Create pagination meta from query parameters.

        Args:
            total: Total number of items.
            page: Current page number (1-indexed).
            limit: Items per page.

        Returns:
            PaginationMeta instance.
        """
        pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(total=total, page=page, limit=limit, pages=pages)
