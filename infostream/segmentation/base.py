"""Common shape of a segmentation strategy."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from bs4.element import Tag

from infostream.extraction.dom import DomAnalyzer
from infostream.ingestion.url_utils import canonicalize_url, is_same_host
from infostream.segmentation.config import SegmentationConfig
from infostream.segmentation.filters import is_breadcrumb, parse_date_hint
from infostream.segmentation.types import Article, CandidateLink, Group


class BaseSegmenter:
    """A pure (page_url, markup) -> groups function with a name.

    Subclasses implement segment_dom; segment parses the markup once.
    """

    name: str = "base"

    def __init__(self, config: Optional[SegmentationConfig] = None):
        self.config = config or SegmentationConfig()

    def segment(self, page_url: str, html: str) -> List[Group]:
        return self.segment_dom(page_url, DomAnalyzer(html))

    def segment_dom(self, page_url: str, dom: DomAnalyzer) -> List[Group]:
        raise NotImplementedError


def collect_candidate(dom: DomAnalyzer, a: Tag, page_url: str, *, min_len: int) -> Optional[CandidateLink]:
    """CandidateLink for an anchor, or None when it is too short, breadcrumb-shaped or off-host.

    Cross-host and breadcrumb links are dropped here so no strategy ever sees them.
    """
    text = dom.text(a)
    href = dom.attr(a, "href")
    if not text or not href or len(text) < min_len:
        return None
    if is_breadcrumb(text):
        return None
    url = canonicalize_url(href, page_url)
    if not url or not is_same_host(url, page_url):
        return None
    container = dom.closest(a, ("div", "section", "article", "ul", "ol"), include_self=False)
    return CandidateLink(
        text=text,
        url=url,
        container=dom.attr(container, "class"),
        dom_path=dom.dom_path(a),
        context_text=dom.text(a.parent) if isinstance(a.parent, Tag) else "",
    )


def unique_by_url(links: Iterable[CandidateLink]) -> List[CandidateLink]:
    seen = set()
    out = []
    for link in links:
        if link.url in seen:
            continue
        seen.add(link.url)
        out.append(link)
    return out


def to_articles(links: Iterable[CandidateLink], extracted_at: Optional[datetime] = None) -> List[Article]:
    """Articles dated from a date token near the link, else extracted_at."""
    now = extracted_at or datetime.now(timezone.utc)
    return [
        Article(
            title=link.text,
            url=link.url,
            published_at=parse_date_hint(link.text, link.context_text) or now,
        )
        for link in links
    ]
