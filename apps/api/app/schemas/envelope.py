"""Success envelopes shared by every resource."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    offset: int
    limit: int
    total_records: int
    total_pages: int


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class CollectionResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: list[T]


class PaginatedResponse(BaseModel):
    """List-query envelope; items may be projected so they stay untyped."""

    success: bool = True
    count: int
    pagination: Pagination
    data: list[dict[str, Any]]


class EmptyResponse(BaseModel):
    success: bool = True
    data: dict[str, Any] = {}
