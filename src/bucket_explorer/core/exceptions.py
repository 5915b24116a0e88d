"""Exception hierarchy for bucket-explorer."""

from typing import Optional


class BucketExplorerError(Exception):
    """Base exception for all bucket-explorer errors."""

    pass


class ConfigurationError(BucketExplorerError):
    """Raised at startup when required configuration is missing or invalid."""

    pass


class ValidationError(BucketExplorerError):
    """Raised when a caller-supplied value fails validation."""

    pass


class UpstreamListingError(BucketExplorerError):
    """Raised when the object store listing call fails.

    Attributes:
        prefix: The prefix whose listing failed
    """

    def __init__(self, prefix: str, message: str):
        super().__init__(message)
        self.prefix = prefix


class ListingCancelledError(BucketExplorerError):
    """Raised when the caller abandons a listing before it completes.

    Attributes:
        prefix: The prefix whose listing was cancelled
        pages_fetched: Pages received before the cancellation was observed
    """

    def __init__(self, prefix: str, pages_fetched: int = 0):
        super().__init__(
            f"Listing of '{prefix}' cancelled after {pages_fetched} page(s)"
        )
        self.prefix = prefix
        self.pages_fetched = pages_fetched


class MalformedEntryError(BucketExplorerError):
    """Raised for a listing entry without a usable key."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
