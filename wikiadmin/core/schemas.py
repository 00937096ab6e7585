"""Shared response schemas.

All JSON bodies use camelCase keys; Python code uses snake_case field names.
Successful responses are wrapped as ``{"data": ...}``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for request/response schemas exchanged with the admin frontend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(ApiModel, Generic[T]):
    """Success envelope."""

    data: T


class PaginateResult(ApiModel, Generic[T]):
    """Page of documents plus navigation metadata.

    Built from ``wikiadmin.core.pagination.Paginated`` via ``model_validate``.
    """

    docs: list[T]
    total_docs: int
    limit: int
    page: int
    total_pages: int
    paging_counter: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: int | None
    next_page: int | None
