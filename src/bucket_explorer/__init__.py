"""A browser-style explorer for S3-compatible buckets.

The package turns a "current prefix" into the folders and objects at that
level of a bucket's virtual hierarchy, following every page of the listing,
hiding keys that match an exclusion pattern and building download links.

Key Features:
    - Fully paginated, delimiter-grouped prefix listings
    - Pattern-based exclusion over full keys
    - Cancellable background queries with an explicit status
    - Breadcrumb and prefix helpers for the presentation layer
    - CLI interface

Recommended Usage:

    >>> from bucket_explorer import ListingExplorer, load_explorer_config
    >>> config = load_explorer_config()
    >>> explorer = ListingExplorer(config)
    >>> result = explorer.get_listing("data/2024/")
    >>> [folder.name for folder in result.folders]
    ['jan/', 'feb/']
"""

__version__ = "0.1.0"

from .explorer import (
    ListingExplorer,
    ListingQuery,
    QueryState,
    QueryStatus,
    get_listing,
)
from .navigation import Breadcrumb, breadcrumbs, heading, sanitize_prefix
from .objectstorage import Folder, ListingObject, QueryResult
from .schemas import ExplorerConfig, load_explorer_config

__all__ = [
    # Configuration
    "ExplorerConfig",
    "load_explorer_config",
    # Listing queries
    "ListingExplorer",
    "ListingQuery",
    "QueryState",
    "QueryStatus",
    "get_listing",
    # Listing entities
    "Folder",
    "ListingObject",
    "QueryResult",
    # Navigation
    "Breadcrumb",
    "breadcrumbs",
    "heading",
    "sanitize_prefix",
]
