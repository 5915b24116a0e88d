"""Core utilities and shared components for bucket-explorer."""

from .config import settings
from .exceptions import (
    BucketExplorerError,
    ConfigurationError,
    ListingCancelledError,
    MalformedEntryError,
    UpstreamListingError,
    ValidationError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "BucketExplorerError",
    "ConfigurationError",
    "ListingCancelledError",
    "MalformedEntryError",
    "UpstreamListingError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
