"""Page math shared by every paginated listing."""

import math
from typing import Sequence, TypeVar

from .errors import ValidationFailedError
from .schemas.common import Paginated

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _check(page: int, page_size: int) -> None:
    if page_size < 1:
        raise ValidationFailedError("pageSize must be at least 1")
    if page < 1:
        raise ValidationFailedError("page must be at least 1")


def page_offset(page: int, page_size: int) -> int:
    """Row offset of the first item on ``page`` (1-based)."""
    _check(page, page_size)
    return (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValidationFailedError("pageSize must be at least 1")
    return math.ceil(total / page_size)


def create_paginated(
    items: Sequence[T], total: int, page: int, page_size: int
) -> Paginated[T]:
    """Wrap one page of items with its metadata.

    A page past the end is valid: it has no items but totalPages still
    reflects the full result.
    """
    _check(page, page_size)
    return Paginated(
        items=list(items),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages(total, page_size),
    )
