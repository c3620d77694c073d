from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: tuple[T, ...]
    total_items: int
    total_pages: int
    page: int


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice an already sorted sequence into a 1-based page."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    page = max(page, 1)
    total_items = len(items)
    total_pages = max(math.ceil(total_items / page_size), 1)
    start = (page - 1) * page_size
    return Page(
        items=tuple(items[start : start + page_size]),
        total_items=total_items,
        total_pages=total_pages,
        page=page,
    )


__all__ = ["Page", "paginate"]
