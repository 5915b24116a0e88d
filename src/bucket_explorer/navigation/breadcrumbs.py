"""Prefix handling for the presentation layer.

The current prefix arrives from navigation state (a ``?prefix=`` query
parameter or a command line argument) and is sanitized here before it reaches
the listing query. Breadcrumbs and headings are derived by splitting the
prefix on the delimiter.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from bucket_explorer.schemas import DELIMITER


@dataclass(frozen=True)
class Breadcrumb:
    """One step of the breadcrumb trail."""

    name: str
    url: str
    is_current: bool


def sanitize_prefix(raw: Optional[str], delimiter: str = DELIMITER) -> str:
    """Turn user-supplied navigation input into a valid prefix.

    Whitespace and leading delimiters are dropped and a trailing delimiter is
    added, so ``" data/2024 "`` becomes ``"data/2024/"``. None or blank input
    yields the root prefix ``""``.
    """
    if raw is None:
        return ""
    value = raw.strip().lstrip(delimiter)
    if value and not value.endswith(delimiter):
        value += delimiter
    return value


def navigation_url(prefix: str) -> str:
    """Link that opens the explorer at a prefix."""
    if not prefix:
        return "/"
    return f"/?prefix={quote(prefix, safe=DELIMITER)}"


def breadcrumbs(prefix: str, delimiter: str = DELIMITER) -> list[Breadcrumb]:
    """Breadcrumbs for every level of a prefix, root excluded.

    >>> [crumb.name for crumb in breadcrumbs("data/2024/")]
    ['data/', '2024/']
    """
    segments = prefix.split(delimiter)[:-1]
    return [
        Breadcrumb(
            name=f"{segment}{delimiter}",
            url=navigation_url(delimiter.join(segments[: index + 1]) + delimiter),
            is_current=index == len(segments) - 1,
        )
        for index, segment in enumerate(segments)
    ]


def heading(prefix: str, bucket_name: str, delimiter: str = DELIMITER) -> str:
    """Title for a listing: the bucket at the root, else the last folder."""
    if not prefix:
        return bucket_name
    return f"{prefix.split(delimiter)[-2]}{delimiter}"
