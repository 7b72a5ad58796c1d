"""Hand-off helpers between segmentation output and feed subscriptions.

Persistence is someone else's job; these only validate and select.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from infostream.ingestion.url_utils import canonicalize_url, host_of, is_same_host
from infostream.segmentation.types import Group


MAX_LABEL_LEN = 180
MAX_TITLE_LEN = 300
MAX_ITEMS = 50


@dataclass(frozen=True)
class SubscriptionItem:
    title: str
    link: str
    published_at: datetime


@dataclass(frozen=True)
class SubscriptionDraft:
    title: str
    url: str
    items: List[SubscriptionItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "items": [
                {"title": it.title, "link": it.link, "publishedAtIso": it.published_at.isoformat()}
                for it in self.items
            ],
        }


def _parse_iso(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    s = str(value).strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    # Normalize naive to UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_subscription_draft(page_url: str, label: str, articles: Sequence[Mapping[str, Any]]) -> SubscriptionDraft:
    """Sanitize a chosen group's articles (as serialized by Group.to_dict).

    Keeps absolute same-host links only, de-duplicated and capped.
    Raises ValueError when nothing usable remains.
    """
    safe_label = re.sub(r"[\n\r\t]+", " ", label or "").strip()[:MAX_LABEL_LEN] or host_of(page_url)
    now = datetime.now(timezone.utc)
    seen = set()
    items: List[SubscriptionItem] = []
    for a in articles:
        link = canonicalize_url(str(a.get("link") or ""), page_url)
        if not link or not is_same_host(link, page_url) or link in seen:
            continue
        seen.add(link)
        title = str(a.get("title") or "").strip()[:MAX_TITLE_LEN] or "Untitled"
        items.append(SubscriptionItem(title=title, link=link, published_at=_parse_iso(a.get("publishedAtIso")) or now))
        if len(items) >= MAX_ITEMS:
            break
    if not items:
        raise ValueError("no valid same-host article links")
    return SubscriptionDraft(title=safe_label, url=page_url, items=items)


def select_group_for_feed(groups: Sequence[Group], feed_title: str, feed_url: str) -> Optional[Group]:
    """Group to refresh a webpage feed from.

    Feeds created from a group are titled '<host>/<label>'; match that label,
    else fall back to the first group.
    """
    host = host_of(feed_url)
    prefix = host + "/"
    if feed_title and host and feed_title.startswith(prefix):
        wanted = feed_title[len(prefix):]
        for g in groups:
            if g.label == wanted:
                return g
    return groups[0] if groups else None
