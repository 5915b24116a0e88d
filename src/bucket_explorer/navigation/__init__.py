from .breadcrumbs import (
    Breadcrumb,
    breadcrumbs,
    heading,
    navigation_url,
    sanitize_prefix,
)

__all__ = [
    "Breadcrumb",
    "breadcrumbs",
    "heading",
    "navigation_url",
    "sanitize_prefix",
]
