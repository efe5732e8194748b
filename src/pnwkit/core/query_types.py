"""
Pydantic models for the wire format and public result types.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Wire types ---

class GraphQLRequest(BaseModel):
    """POST body sent to the GraphQL endpoint."""
    query: str


class GraphQLErrorItem(BaseModel):
    """One entry of a GraphQL ``errors`` array."""
    model_config = ConfigDict(extra="allow")

    message: str = "Unknown error"


class GraphQLResponse(BaseModel):
    """
    Top-level response envelope.

    Either ``data`` or ``errors`` (or both) is present. Whether ``data`` was
    sent at all is read from ``model_fields_set``.
    """
    model_config = ConfigDict(extra="allow")

    data: Optional[dict[str, Any]] = None
    errors: Optional[list[GraphQLErrorItem]] = None

    @property
    def has_data(self) -> bool:
        return "data" in self.model_fields_set

    @property
    def error_messages(self) -> list[str]:
        return [e.message for e in self.errors or []]


# --- Result types ---

class PaginatorInfo(BaseModel):
    """
    Pagination metadata returned alongside paginated root queries.

    Keys keep the API's camelCase on the wire and are snake_case in Python.
    """
    model_config = ConfigDict(populate_by_name=True)

    count: int = 0
    current_page: int = Field(0, alias="currentPage")
    first_item: Optional[int] = Field(None, alias="firstItem")
    has_more_pages: bool = Field(False, alias="hasMorePages")
    last_item: Optional[int] = Field(None, alias="lastItem")
    last_page: int = Field(0, alias="lastPage")
    per_page: int = Field(0, alias="perPage")
    total: int = 0


class PaginatedResult(BaseModel):
    """Rows of a query together with their paginator info."""
    data: Any
    paginator_info: Optional[PaginatorInfo] = None


# --- Cache types ---

class CacheOptions(BaseModel):
    """
    Response cache configuration.

    ``ttl`` is in seconds.
    """
    enabled: bool = False
    ttl: float = Field(60.0, gt=0)
    max_size: int = Field(100, gt=0)


class CacheStats(BaseModel):
    """Current cache occupancy."""
    size: int
    max: int
