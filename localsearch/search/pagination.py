from __future__ import annotations

import math
from typing import Sequence, TypeVar

from .models import PageMeta

T = TypeVar("T")


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def paginate(items: Sequence[T], page: int, limit: int, total: int) -> tuple[list[T], PageMeta]:
    """
    Slice ``items`` to ``page`` and describe the page.

    ``total`` is supplied by the caller (the store-level count) and may be
    larger than ``len(items)`` once in-memory filters have run.
    """
    start = (page - 1) * limit
    page_items = list(items[start:start + limit])
    meta = PageMeta(total=total, page=page, limit=limit, total_pages=total_pages(total, limit))
    return page_items, meta
