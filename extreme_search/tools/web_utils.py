from __future__ import annotations

from urllib.parse import urlparse

FAVICON_SERVICE_URL = "https://www.google.com/s2/favicons?domain={host}&sz=128"
DEFAULT_TITLE = "Retrieved Content"


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def favicon_url(url: str) -> str:
    """Default favicon for a page, derived from its domain."""
    return FAVICON_SERVICE_URL.format(host=extract_domain(url))


def fallback_title(url: str) -> str:
    """Last path segment of the URL, or a generic title."""
    return url.split("/")[-1] or DEFAULT_TITLE


def truncate(text: str, max_chars: int, *, ellipsis: str = "") -> str:
    """Clip text to max_chars and append the ellipsis marker, if any."""
    clipped = text if max_chars <= 0 else text[:max_chars]
    return clipped + ellipsis
