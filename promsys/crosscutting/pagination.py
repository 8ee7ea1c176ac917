"""
Name: Page-number Pagination

Responsibilities:
  - Slice in-memory result lists by (page, size)
  - Produce the paging block of the response envelope
    ({"current_page", "size", "total_page"})

Notes:
  - Pages are 1-based; an out-of-range page yields an empty item list
  - total_page is at least 1 so an empty list still reports one page
"""

from __future__ import annotations

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Paging(BaseModel):
    current_page: int = Field(description="1-based page number")
    size: int = Field(description="Requested page size")
    total_page: int = Field(description="Number of pages available")


class Page(BaseModel, Generic[T]):
    items: List[T]
    paging: Paging
    total: int = 0


def total_pages(total: int, size: int) -> int:
    return max(1, math.ceil(total / max(1, size)))


def paginate(items: List[T], page: int, size: int) -> Page[T]:
    page = max(1, int(page))
    size = max(1, int(size))
    start = (page - 1) * size
    return Page(
        items=items[start : start + size],
        paging=Paging(
            current_page=page, size=size, total_page=total_pages(len(items), size)
        ),
        total=len(items),
    )
