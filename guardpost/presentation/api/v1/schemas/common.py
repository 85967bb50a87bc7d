from typing import Generic, TypeVar

from pydantic import BaseModel

from guardpost.application.pagination import Page

ItemT = TypeVar("ItemT")


class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class PaginatedResponse(BaseModel, Generic[ItemT]):
    """List response envelope: items plus pagination metadata"""

    items: list[ItemT]
    pagination: PaginationMeta


def paginated(page: Page, items: list) -> dict:
    """Build the envelope for a service Page whose items were already converted"""
    return {
        "items": items,
        "pagination": PaginationMeta(
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        ),
    }


class MessageResponse(BaseModel):
    message: str
