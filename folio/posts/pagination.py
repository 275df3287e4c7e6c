"""Pagination for the article list."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from folio.common.constants import DEFAULT_POSTS_PER_PAGE

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a listing.

    Attributes:
        items: Items on this page
        page: 1-based page number after clamping
        total_pages: Number of pages (at least 1, even for an empty listing)
        total_items: Number of items across all pages
    """

    items: list[T]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int = 1, per_page: int = DEFAULT_POSTS_PER_PAGE) -> Page[T]:
    """Slice a listing into pages.

    Out-of-range page numbers are clamped to the first or last page.

    Args:
        items: Full ordered listing
        page: Requested 1-based page number
        per_page: Items per page

    Returns:
        Page with the items for the (clamped) page

    Raises:
        ValueError: If per_page is not positive
    """
    if per_page < 1:
        raise ValueError("per_page must be positive")

    total_pages = max(1, math.ceil(len(items) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page

    return Page(
        items=list(items[start : start + per_page]),
        page=page,
        total_pages=total_pages,
        total_items=len(items),
    )
