# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel


class Pagination(BaseModel):
    """Offset-based pagination metadata for list responses."""

    total: int
    offset: int
    limit: int
    has_more: bool

    @classmethod
    def window(cls, total: int, offset: int, limit: int) -> "Pagination":
        """Metadata for the ``[offset, offset + limit)`` slice of ``total`` items."""
        return cls(total=total, offset=offset, limit=limit, has_more=(offset + limit) < total)
