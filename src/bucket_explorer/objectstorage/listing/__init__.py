"""Prefix listing: gateway and projector."""

from .gateway import ObjectStoreGateway, RawEntry, RawListing, validate_prefix
from .projector import Folder, ListingObject, QueryResult, project, url_for

__all__ = [
    "ObjectStoreGateway",
    "RawEntry",
    "RawListing",
    "validate_prefix",
    "Folder",
    "ListingObject",
    "QueryResult",
    "project",
    "url_for",
]
