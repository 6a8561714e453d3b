"""
Pagination primitives shared by every paginated listing.

Provides:
- PaginationDescriptor: immutable page metadata returned with each list page
- page_window(): ellipsis-compressed page numbers for pager controls
- skip_for(): MongoDB skip offset for a page

Usage:
    descriptor = PaginationDescriptor.build(page=2, limit=10, total=25)
    descriptor.to_dict()
    # {"page": 2, "limit": 10, "total": 25, "pages": 3, "hasNext": True, "hasPrev": True}

    page_window(page=3, pages=10)
    # [1, 2, 3, 4, 5, "...", 10]
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Union

# Sentinel entry for a compressed run of pages
ELLIPSIS = "..."

# Pages shown on each side of the current page
WINDOW_DELTA = 2

PageWindowEntry = Union[int, str]


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for `total` items at `limit` per page."""
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    if total < 0:
        raise ValueError(f"total must be non-negative, got {total}")
    return math.ceil(total / limit)


def skip_for(page: int, limit: int) -> int:
    """Number of documents to skip to reach `page`."""
    return max(0, (page - 1) * limit)


@dataclass(frozen=True)
class PaginationDescriptor:
    """
    Page metadata for a single list response.

    Attributes:
        page: Current 1-indexed page (not clamped)
        limit: Items requested per page
        total: Total matching items across all pages
        pages: ceil(total / limit)
        has_next: page < pages
        has_prev: page > 1
    """

    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationDescriptor":
        """Derive pages/has_next/has_prev from page, limit and total."""
        pages = total_pages(total, limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            pages=pages,
            has_next=page < pages,
            has_prev=page > 1,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginationDescriptor":
        """
        Parse a wire descriptor.

        Derived fields are recomputed from page/limit/total so a partial
        payload (as older endpoints sent) still yields a full descriptor.

        Raises:
            ValueError: If page/limit/total are missing or not integers
        """
        try:
            page = int(data["page"])
            limit = int(data["limit"])
            total = int(data["total"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed pagination payload: {data!r}") from e
        return cls.build(page=page, limit=limit, total=total)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation with camelCase flags."""
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "pages": self.pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }

    @property
    def skip(self) -> int:
        return skip_for(self.page, self.limit)

    def window(self) -> List[PageWindowEntry]:
        return page_window(self.page, self.pages)


def page_window(page: int, pages: int) -> List[PageWindowEntry]:
    """
    Page numbers to render as pager controls.

    Always includes the first and last page plus WINDOW_DELTA pages on each
    side of the current page. Any pages hidden between the band and either
    end collapse into a single ELLIPSIS.

    Args:
        page: Current page; values outside [1, pages] are clamped
        pages: Total number of pages

    Returns:
        Ordered list of ints and ELLIPSIS; empty when pages <= 1
    """
    if pages <= 1:
        return []

    page = min(max(page, 1), pages)

    band_start = max(2, page - WINDOW_DELTA)
    band_end = min(pages - 1, page + WINDOW_DELTA)

    window: List[PageWindowEntry] = [1]
    if band_start - 1 > 1:
        window.append(ELLIPSIS)
    window.extend(range(band_start, band_end + 1))
    if band_end + 1 < pages:
        window.append(ELLIPSIS)
    window.append(pages)
    return window
