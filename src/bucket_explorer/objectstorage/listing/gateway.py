"""Object store gateway: fully paginated, delimiter-grouped listings.

The gateway lists one level of the virtual folder hierarchy. Given a prefix
such as ``data/2024/`` it asks the store for keys under that prefix grouped by
``/``, and returns:

- the common prefixes (virtual sub-folders, e.g. ``data/2024/jan/``)
- the entries (objects stored directly at this level)

A truncated response is followed with its continuation token until the store
reports the listing is complete, so callers always receive the whole level.
Pages are requested strictly in order since each token comes from the
previous response.

If the bucket changes while the pages are being read, the listing may mix
pre- and post-change pages. No retry is attempted here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from bucket_explorer.core import get_logger, get_tracer
from bucket_explorer.core.exceptions import (
    ListingCancelledError,
    UpstreamListingError,
    ValidationError,
)
from bucket_explorer.schemas import DELIMITER

logger = get_logger(__name__)
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class RawEntry:
    """A stored object as reported by the list call.

    Attributes:
        key: Full object key, None if the store omitted it
        last_modified: Modification time, None if omitted
        size: Size in bytes, None if omitted
    """

    key: Optional[str]
    last_modified: Optional[datetime] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class RawListing:
    """Common prefixes and entries for one prefix, merged across all pages."""

    common_prefixes: list[str] = field(default_factory=list)
    entries: list[RawEntry] = field(default_factory=list)
    page_count: int = 0


def validate_prefix(prefix: str, delimiter: str = DELIMITER) -> str:
    """Check that a prefix is empty or ends with the delimiter.

    Raises:
        ValidationError: If the prefix is not a valid hierarchy position
    """
    if not isinstance(prefix, str):
        raise ValidationError(f"Prefix must be a string, got: {type(prefix).__name__}")
    if prefix and not prefix.endswith(delimiter):
        raise ValidationError(
            f"Prefix must be empty or end with '{delimiter}': {prefix!r}"
        )
    return prefix


class ObjectStoreGateway:
    """Lists one hierarchy level of a bucket through ``list_objects_v2``."""

    def __init__(
        self,
        client: Any,
        bucket_name: str,
        delimiter: str = DELIMITER,
        page_size: Optional[int] = None,
    ):
        """Initialize the gateway.

        Args:
            client: boto3 S3 client (or anything with ``list_objects_v2``)
            bucket_name: Bucket to list
            delimiter: Hierarchy delimiter
            page_size: Optional MaxKeys for each request
        """
        self.client = client
        self.bucket_name = bucket_name
        self.delimiter = delimiter
        self.page_size = page_size

    def list_prefix(
        self,
        prefix: str,
        cancel_requested: Optional[Callable[[], bool]] = None,
    ) -> RawListing:
        """List common prefixes and entries directly under a prefix.

        Args:
            prefix: Empty string for the bucket root, otherwise a
                delimiter-terminated prefix
            cancel_requested: Polled before every page request and once more
                before returning; when it returns True the listing stops and
                partial pages are dropped

        Returns:
            RawListing with every page merged in the order received

        Raises:
            ValidationError: If the prefix is invalid
            ListingCancelledError: If cancel_requested returned True
            UpstreamListingError: If a list call fails or returns a malformed
                response
        """
        validate_prefix(prefix, self.delimiter)
        logger.info("Listing prefix", bucket=self.bucket_name, prefix=prefix)

        common_prefixes: list[str] = []
        entries: list[RawEntry] = []
        page_count = 0
        token: Optional[str] = None

        with tracer.start_as_current_span("list_prefix") as span:
            span.set_attribute("bucket", self.bucket_name)
            span.set_attribute("prefix", prefix)

            while True:
                self._raise_if_cancelled(prefix, page_count, cancel_requested)

                response = self._fetch_page(prefix, token)
                page_count += 1

                page_prefixes = self._page_prefixes(response, prefix)
                page_entries = [
                    RawEntry(
                        key=obj.get("Key"),
                        last_modified=obj.get("LastModified"),
                        size=obj.get("Size"),
                    )
                    for obj in response.get("Contents") or []
                ]
                common_prefixes.extend(page_prefixes)
                entries.extend(page_entries)

                logger.debug(
                    "Listing page received",
                    bucket=self.bucket_name,
                    prefix=prefix,
                    page=page_count,
                    prefix_count=len(page_prefixes),
                    entry_count=len(page_entries),
                )

                if not response.get("IsTruncated"):
                    break

                token = response.get("NextContinuationToken")
                if not token:
                    error_msg = (
                        f"Truncated listing for '{prefix}' on page {page_count} "
                        "has no continuation token"
                    )
                    logger.error(error_msg, bucket=self.bucket_name)
                    raise UpstreamListingError(prefix, error_msg)

            # A cancel that arrives during the last page still wins
            self._raise_if_cancelled(prefix, page_count, cancel_requested)
            span.set_attribute("page_count", page_count)

        logger.info(
            "Prefix listed",
            bucket=self.bucket_name,
            prefix=prefix,
            page_count=page_count,
            prefix_count=len(common_prefixes),
            entry_count=len(entries),
        )
        return RawListing(
            common_prefixes=common_prefixes,
            entries=entries,
            page_count=page_count,
        )

    def _raise_if_cancelled(
        self,
        prefix: str,
        page_count: int,
        cancel_requested: Optional[Callable[[], bool]],
    ) -> None:
        if cancel_requested is None or not cancel_requested():
            return
        logger.info(
            "Listing cancelled",
            bucket=self.bucket_name,
            prefix=prefix,
            pages_fetched=page_count,
        )
        raise ListingCancelledError(prefix, pages_fetched=page_count)

    def _fetch_page(self, prefix: str, token: Optional[str]) -> Dict[str, Any]:
        """Issue one list request; the first page carries no token."""
        params: Dict[str, Any] = {
            "Bucket": self.bucket_name,
            "Prefix": prefix,
            "Delimiter": self.delimiter,
        }
        if token:
            params["ContinuationToken"] = token
        if self.page_size:
            params["MaxKeys"] = self.page_size

        try:
            return self.client.list_objects_v2(**params)
        except Exception as e:
            error_msg = (
                f"Failed to list '{prefix}' in bucket '{self.bucket_name}': {e}"
            )
            logger.error(error_msg, error=str(e))
            raise UpstreamListingError(prefix, error_msg) from e

    def _page_prefixes(self, response: Dict[str, Any], prefix: str) -> list[str]:
        prefixes = []
        for common in response.get("CommonPrefixes") or []:
            value = common.get("Prefix")
            if value is None:
                logger.warning(
                    "Common prefix without a value skipped",
                    bucket=self.bucket_name,
                    prefix=prefix,
                )
                continue
            prefixes.append(value)
        return prefixes
