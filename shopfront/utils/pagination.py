"""Client-side paging over already-loaded lists."""
from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def total_pages(count: int, page_size: int, *, at_least_one: bool = False) -> int:
    pages = math.ceil(count / page_size) if page_size > 0 else 0
    return max(1, pages) if at_least_one else pages


def page_slice(rows: Sequence[T], page: int, page_size: int) -> list[T]:
    """Rows on 1-based `page`; out-of-range pages yield []."""
    if page < 1 or page_size <= 0:
        return []
    start = (page - 1) * page_size
    return list(rows[start:start + page_size])


def clamp_page(page: int, count: int, page_size: int) -> int:
    return min(max(1, page), total_pages(count, page_size, at_least_one=True))
