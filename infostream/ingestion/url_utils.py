"""URL helpers for candidate collection and dedup."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlparse, urlunparse


def host_of(url: str) -> str:
    """Lowercased hostname of an absolute URL ('' when it has none)."""
    if not url:
        return ""
    try:
        return (urlparse(url.strip()).hostname or "").lower()
    except ValueError:
        return ""


def canonicalize_url(href: str, base_url: str) -> str:
    """Resolve an href against the page URL.

    - Relative hrefs are joined onto base_url
    - Lowercase scheme + hostname
    - Remove fragments
    - Non-http(s) targets (mailto:, javascript:, ...) resolve to ''
    """
    if not href:
        return ""
    try:
        p = urlparse(urljoin(base_url, href.strip()))
    except ValueError:
        return ""
    scheme = (p.scheme or "").lower()
    if scheme not in ("http", "https") or not p.netloc:
        return ""
    netloc = p.netloc.lower()
    path = p.path or "/"
    return urlunparse((scheme, netloc, path, p.params, p.query, ""))


def is_same_host(url: str, base_url: str) -> bool:
    host = host_of(url)
    return bool(host) and host == host_of(base_url)


def path_segments(url: str) -> List[str]:
    try:
        path = urlparse(url).path
    except ValueError:
        return []
    return [p for p in path.split("/") if p]


def path_prefix(url: str, depth: int = 2) -> str:
    """Leading path of a URL, e.g. '/news/2024' for '/news/2024/a.html'.

    Shorter paths are returned whole ('/about' stays '/about').
    """
    try:
        path = urlparse(url).path or "/"
    except ValueError:
        return ""
    return "/".join(path.split("/")[: depth + 1])


def path_pattern(url: str) -> Optional[str]:
    """Two-segment pattern ('/news/2024') or None for shallower paths."""
    parts = path_segments(url)
    if len(parts) < 2:
        return None
    return f"/{parts[0]}/{parts[1]}"
