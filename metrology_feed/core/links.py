"""Link normalization for listing and detail hrefs."""

from typing import Optional
from urllib.parse import urljoin


def normalize_link(href: Optional[str], base: str) -> Optional[str]:
    """
    Turn a possibly-relative href into an absolute URL.

    Args:
        href: Raw href attribute value
        base: URL the href is resolved against

    Returns:
        Absolute URL, or None for empty input
    """
    if not href:
        return None

    href = href.strip()
    if not href:
        return None

    if href.lower().startswith(("http://", "https://")):
        return href

    return urljoin(base, href)
