"""Static page fetch + charset resolution.

Policy:
- One GET per call, no retries (callers own retry policy).
- Pages declaring a GBK/GB2312 charset are decoded with that codec, everything else as UTF-8.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from typing import Optional
from urllib.parse import urlparse

import requests


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_GBK_CHARSET = re.compile(r"charset\s*=\s*[\"']?(gbk|gb2312)", re.IGNORECASE)


class FetchError(Exception):
    """Page could not be fetched. Only error the segmentation engine surfaces."""

    def __init__(self, kind: str, url: str, status: Optional[int] = None, detail: Optional[str] = None):
        self.kind = kind
        self.url = url
        self.status = status
        self.detail = detail
        msg = f"{kind} fetching {url}"
        if status is not None:
            msg += f" (http {status})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


_PRIVATE_NETS = [
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]


def _is_private_ip(hostname: str) -> bool:
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return any(ip in net for net in _PRIVATE_NETS)


def validate_fetch_url(url: str) -> Optional[str]:
    """Return error string if URL should not be fetched (SSRF/abuse protections)."""
    try:
        p = urlparse(url or "")
    except ValueError:
        return "invalid_url"
    if p.scheme not in ("http", "https"):
        return "bad_scheme"
    host = (p.hostname or "").strip().lower()
    if not host:
        return "missing_host"
    if host in ("localhost", "localhost.localdomain"):
        return "blocked_host"
    if _is_private_ip(host):
        return "blocked_private_ip"
    return None


def decode_body(content: bytes, content_type: str) -> str:
    if _GBK_CHARSET.search(content_type or ""):
        return content.decode("gbk", errors="replace")
    return content.decode("utf-8", errors="replace")


def fetch_html(
    url: str,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    connect_timeout: float = 5.0,
    read_timeout: float = 20.0,
    max_bytes: int = 5_000_000,
) -> str:
    """GET a page and return its decoded markup.

    Raises FetchError on blocked URLs, transport failures, non-2xx responses
    and oversized bodies.
    """
    err = validate_fetch_url(url)
    if err:
        raise FetchError("blocked", url, detail=err)
    logger.info("fetching %s", url)
    try:
        resp = requests.get(
            url,
            headers={"User-Agent": user_agent},
            timeout=(connect_timeout, read_timeout),
            allow_redirects=True,
            stream=True,
        )
    except requests.RequestException as e:
        raise FetchError("transport", url, detail=str(e)) from e

    try:
        if not 200 <= resp.status_code < 300:
            raise FetchError("status", url, status=resp.status_code)
        # Size guardrail: read up to max_bytes
        content = b""
        for chunk in resp.iter_content(chunk_size=64 * 1024):
            if not chunk:
                continue
            content += chunk
            if len(content) > max_bytes:
                raise FetchError("too_large", url, detail=f"body exceeds {max_bytes} bytes")
    except requests.RequestException as e:
        raise FetchError("transport", url, detail=str(e)) from e
    finally:
        resp.close()

    return decode_body(content, resp.headers.get("Content-Type", ""))
