"""Listing projector: raw gateway output to folders and objects.

Projection is a pure function of the requesting prefix, the raw listing, the
exclusion pattern and the base URL. The exclusion pattern is matched against
the full remote path, before the prefix is stripped for display.

Order is preserved exactly as the store returned it; nothing is re-sorted.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from re import Pattern
from typing import Any, Optional
from urllib.parse import quote

from bucket_explorer.core import get_logger
from bucket_explorer.core.exceptions import MalformedEntryError
from bucket_explorer.objectstorage.listing.gateway import RawEntry, RawListing

logger = get_logger(__name__)


@dataclass(frozen=True)
class Folder:
    """A virtual folder synthesized from a common prefix.

    Attributes:
        name: Path relative to the query prefix, still ending in the delimiter
        path: Full remote prefix
        url: Link built from the path
    """

    name: str
    path: str
    url: str


@dataclass(frozen=True)
class ListingObject:
    """A stored object at the queried level.

    Attributes:
        name: Key relative to the query prefix
        last_modified: Modification time, None if the store omitted it
        size: Size in bytes, None if the store omitted it
        path: Full object key
        url: Download link built from the key
    """

    name: str
    last_modified: Optional[datetime]
    size: Optional[int]
    path: str
    url: str


@dataclass(frozen=True)
class QueryResult:
    """Folders and objects at one prefix, in store order."""

    folders: list[Folder] = field(default_factory=list)
    objects: list[ListingObject] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        data = asdict(self)
        for obj in data["objects"]:
            if obj["last_modified"] is not None:
                obj["last_modified"] = obj["last_modified"].isoformat()
        return data


def url_for(base_url: str, path: str) -> str:
    """Build a link for a storage path.

    Each path segment is percent-encoded; the ``/`` separators are kept.
    """
    return f"{base_url.rstrip('/')}/{quote(path, safe='/')}"


def _checked_path(prefix: str, path: Optional[str]) -> str:
    if path is None or path == "":
        raise MalformedEntryError("Listing entry has no key", key=path)
    if not path.startswith(prefix):
        raise MalformedEntryError(
            f"Listing entry '{path}' is outside prefix '{prefix}'", key=path
        )
    return path


def project_folders(
    prefix: str,
    common_prefixes: list[str],
    exclude_pattern: Pattern[str],
    base_url: str,
) -> list[Folder]:
    """Map common prefixes to folders, dropping excluded ones."""
    folders = []
    for common_prefix in common_prefixes:
        try:
            path = _checked_path(prefix, common_prefix)
        except MalformedEntryError as e:
            logger.warning("Skipping malformed folder", prefix=prefix, error=str(e))
            continue
        if exclude_pattern.search(path):
            continue
        folders.append(
            Folder(
                name=path[len(prefix):],
                path=path,
                url=url_for(base_url, path),
            )
        )
    return folders


def project_objects(
    prefix: str,
    entries: list[RawEntry],
    exclude_pattern: Pattern[str],
    base_url: str,
) -> list[ListingObject]:
    """Map raw entries to objects, dropping keyless and excluded ones."""
    objects = []
    for entry in entries:
        try:
            path = _checked_path(prefix, entry.key)
        except MalformedEntryError as e:
            logger.warning("Skipping malformed entry", prefix=prefix, error=str(e))
            continue
        if exclude_pattern.search(path):
            continue
        objects.append(
            ListingObject(
                name=path[len(prefix):],
                last_modified=entry.last_modified,
                size=entry.size,
                path=path,
                url=url_for(base_url, path),
            )
        )
    return objects


def project(
    prefix: str,
    raw: RawListing,
    exclude_pattern: Pattern[str],
    base_url: str,
) -> QueryResult:
    """Project a raw listing into the folders and objects shown to users.

    Args:
        prefix: The prefix the listing was requested for
        raw: Gateway output for that prefix
        exclude_pattern: Compiled pattern; any full path it matches is hidden
        base_url: Base address for generated links

    Returns:
        QueryResult with folders and objects in store order
    """
    result = QueryResult(
        folders=project_folders(prefix, raw.common_prefixes, exclude_pattern, base_url),
        objects=project_objects(prefix, raw.entries, exclude_pattern, base_url),
    )
    logger.debug(
        "Listing projected",
        prefix=prefix,
        folder_count=len(result.folders),
        object_count=len(result.objects),
        excluded=len(raw.common_prefixes)
        + len(raw.entries)
        - len(result.folders)
        - len(result.objects),
    )
    return result
