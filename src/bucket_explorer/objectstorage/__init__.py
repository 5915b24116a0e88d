"""Object storage listing for S3-compatible services."""

from .clients import S3ClientManager
from .listing import (
    Folder,
    ListingObject,
    ObjectStoreGateway,
    QueryResult,
    RawEntry,
    RawListing,
    project,
    url_for,
    validate_prefix,
)

__all__ = [
    "S3ClientManager",
    "Folder",
    "ListingObject",
    "ObjectStoreGateway",
    "QueryResult",
    "RawEntry",
    "RawListing",
    "project",
    "url_for",
    "validate_prefix",
]
