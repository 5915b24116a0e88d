"""Listing queries: gateway plus projector behind one call.

``ListingExplorer.get_listing`` is the query operation the presentation layer
consumes. ``ListingExplorer.submit`` runs the same query in the background and
returns a ``ListingQuery`` handle that can be cancelled between pages and
reports its progress as a ``QueryState``.
"""

import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from bucket_explorer.core import get_logger
from bucket_explorer.core.exceptions import ListingCancelledError
from bucket_explorer.objectstorage.clients import S3ClientManager
from bucket_explorer.objectstorage.listing import (
    ObjectStoreGateway,
    QueryResult,
    project,
    validate_prefix,
)
from bucket_explorer.schemas import ExplorerConfig

logger = get_logger(__name__)


class QueryStatus(str, Enum):
    """Lifecycle of a listing query as seen by the presentation layer."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class QueryState:
    """Snapshot of a listing query.

    ``result`` is set only for SUCCESS, ``error`` only for ERROR.
    """

    status: QueryStatus
    result: Optional[QueryResult] = None
    error: Optional[BaseException] = None


class ListingQuery:
    """Handle to a listing running in the background."""

    def __init__(self, prefix: str, future: Future, cancel_event: threading.Event):
        self.prefix = prefix
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Stop the listing before its next page request. Never blocks."""
        if self._future.done():
            return
        self._cancel_event.set()
        self._future.cancel()
        logger.info("Listing query cancel requested", prefix=self.prefix)

    def done(self) -> bool:
        return self._future.done()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set() or self._future.cancelled()

    @property
    def state(self) -> QueryState:
        """Current state of the query.

        Once cancel() has been called the state stays CANCELLED, even if the
        page in flight at that moment later completes the listing.
        """
        if self.cancelled:
            return QueryState(QueryStatus.CANCELLED)
        if not self._future.done():
            return QueryState(QueryStatus.LOADING)

        error = self._future.exception()
        if error is None:
            return QueryState(QueryStatus.SUCCESS, result=self._future.result())
        if isinstance(error, ListingCancelledError):
            return QueryState(QueryStatus.CANCELLED)
        return QueryState(QueryStatus.ERROR, error=error)

    def result(self, timeout: Optional[float] = None) -> QueryResult:
        """Wait for the listing.

        Raises:
            ListingCancelledError: If the query was cancelled
            UpstreamListingError: If the store call failed
        """
        if self.cancelled:
            raise ListingCancelledError(self.prefix)
        try:
            result = self._future.result(timeout)
        except CancelledError:
            raise ListingCancelledError(self.prefix) from None
        if self._cancel_event.is_set():
            raise ListingCancelledError(self.prefix)
        return result


class ListingExplorer:
    """Answers prefix queries for the configured bucket."""

    def __init__(
        self,
        config: ExplorerConfig,
        client: Any = None,
        max_workers: int = 4,
    ):
        """Initialize the explorer.

        Args:
            config: Explorer configuration
            client: S3 client to use; built from config when omitted
            max_workers: Threads available to background queries
        """
        self.config = config
        if client is None:
            client = S3ClientManager(config).client
        self.gateway = ObjectStoreGateway(
            client,
            config.bucket_name,
            page_size=config.page_size,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="bucket-explorer"
        )
        self._queries: set[ListingQuery] = set()
        logger.info("Listing explorer initialized", bucket=config.bucket_name)

    def get_listing(
        self,
        prefix: str,
        cancel_requested: Optional[Callable[[], bool]] = None,
    ) -> QueryResult:
        """List folders and objects at a prefix.

        Args:
            prefix: Empty string for the root, otherwise delimiter-terminated
            cancel_requested: Optional cancellation poll, see
                ObjectStoreGateway.list_prefix

        Returns:
            QueryResult in store order

        Raises:
            ValidationError: If the prefix is invalid
            ListingCancelledError: If the listing was cancelled
            UpstreamListingError: If the store call failed
        """
        raw = self.gateway.list_prefix(prefix, cancel_requested=cancel_requested)
        return project(
            prefix,
            raw,
            self.config.exclude_pattern,
            self.config.base_url,
        )

    def submit(self, prefix: str) -> ListingQuery:
        """Start a listing in the background.

        Raises:
            ValidationError: If the prefix is invalid
        """
        validate_prefix(prefix)
        cancel_event = threading.Event()
        future = self._executor.submit(self.get_listing, prefix, cancel_event.is_set)
        query = ListingQuery(prefix, future, cancel_event)
        self._queries.add(query)
        future.add_done_callback(lambda _: self._queries.discard(query))
        return query

    def close(self) -> None:
        """Release background threads.

        Queued queries are dropped and running ones stop before their next
        page request.
        """
        for query in list(self._queries):
            query.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "ListingExplorer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def get_listing(prefix: str, config: ExplorerConfig) -> QueryResult:
    """Convenience function to list one prefix with a fresh client."""
    with ListingExplorer(config, max_workers=1) as explorer:
        return explorer.get_listing(prefix)
