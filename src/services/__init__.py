"""
Services module for paginated listings.

ListingService counts, skips, limits and populates references;
list_filters turns each endpoint's query parameters into a ListQuery.
"""

from src.services.listing_service import (
    DEFAULT_SORT,
    ListingService,
    ListPage,
    ListQuery,
    Populate,
)

__all__ = [
    "DEFAULT_SORT",
    "ListingService",
    "ListPage",
    "ListQuery",
    "Populate",
]
