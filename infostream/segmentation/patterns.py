"""URL path-pattern segmentation.

Same-host links are grouped by their first two path segments ('/news/2024').
A pattern is vetoed outright when any of its links sits inside navigation
chrome: a <nav> or <footer> ancestor, or a nearest classed element named like
nav/menu/footer/sidebar/breadcrumb/pagination.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List

from bs4.element import Tag

from infostream.extraction.dom import DomAnalyzer
from infostream.ingestion.url_utils import path_pattern
from infostream.segmentation.base import BaseSegmenter, collect_candidate, to_articles, unique_by_url
from infostream.segmentation.filters import NAV_CONTAINER_PATTERN, NAV_CONTAINER_TAGS, PAGE_LEVEL_TAGS
from infostream.segmentation.titles import path_to_label, select_best_title
from infostream.segmentation.types import CandidateLink, Group


logger = logging.getLogger(__name__)


def in_nav_container(dom: DomAnalyzer, anchor: Tag) -> bool:
    """True when the anchor sits in a <nav>/<footer> or its nearest classed element is nav chrome."""
    if dom.closest(anchor, NAV_CONTAINER_TAGS) is not None:
        return True
    for el in [anchor, *dom.ancestors(anchor)]:
        if el.name in PAGE_LEVEL_TAGS:
            return False
        if el.has_attr("class"):
            return bool(NAV_CONTAINER_PATTERN.search(dom.attr(el, "class")))
    return False


class PathPatternSegmenter(BaseSegmenter):
    name: str = "pattern"

    def segment_dom(self, page_url: str, dom: DomAnalyzer) -> List[Group]:
        cfg = self.config
        members: Dict[str, List[CandidateLink]] = {}
        vetoed = set()
        for a in dom.anchors():
            link = collect_candidate(dom, a, page_url, min_len=cfg.pattern_link_min_len)
            if link is None:
                continue
            pattern = path_pattern(link.url)
            if pattern is None:
                continue
            members.setdefault(pattern, []).append(link)
            if pattern not in vetoed and in_nav_container(dom, a):
                vetoed.add(pattern)

        ranked = []
        for pattern, links in members.items():
            if pattern in vetoed:
                continue
            unique = unique_by_url(links)
            if len(unique) >= cfg.pattern_min_size:
                ranked.append((pattern, unique))
        ranked.sort(key=lambda item: len(item[1]), reverse=True)

        extracted_at = datetime.now(timezone.utc)
        groups: List[Group] = []
        for pattern, links in ranked[: cfg.pattern_cap]:
            articles = to_articles(links[: cfg.pattern_member_cap], extracted_at)
            groups.append(
                Group(
                    label=select_best_title(path_to_label(pattern), [a.title for a in articles]),
                    articles=articles,
                    source_strategy=self.name,
                    score=float(len(links)),
                )
            )

        logger.debug("pattern: %d patterns kept (%d vetoed) on %s", len(groups), len(vetoed), page_url)
        return groups
