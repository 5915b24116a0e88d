"""Listing query interface consumed by the presentation layer."""

from .listing_operations import (
    ListingExplorer,
    ListingQuery,
    QueryState,
    QueryStatus,
    get_listing,
)

__all__ = [
    "ListingExplorer",
    "ListingQuery",
    "QueryState",
    "QueryStatus",
    "get_listing",
]
