"""Heading-proximity segmentation.

Each h1-h3 owns the sibling elements that follow it, up to the next heading of
the same or a higher level (bounded walk). Links in that region form the
heading's group.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from bs4.element import Tag

from infostream.extraction.dom import HEADING_TAGS, DomAnalyzer
from infostream.segmentation.base import BaseSegmenter, collect_candidate, to_articles, unique_by_url
from infostream.segmentation.filters import is_boilerplate, is_nav_heading, is_nav_link, policies_for
from infostream.segmentation.titles import select_best_title
from infostream.segmentation.types import CandidateLink, Group


logger = logging.getLogger(__name__)


class HeadingSegmenter(BaseSegmenter):
    name: str = "headings"

    def owned_region(self, dom: DomAnalyzer, heading: Tag) -> List[Tag]:
        level = dom.heading_level(heading) or 3
        region: List[Tag] = []
        for steps, sib in enumerate(dom.next_siblings(heading)):
            if steps >= self.config.sibling_walk_limit:
                break
            sib_level = dom.heading_level(sib)
            if sib_level is not None and sib_level <= level:
                break
            region.append(sib)
        return region

    def admit(self, link: CandidateLink, policies) -> bool:
        cfg = self.config
        text = link.text
        if not cfg.heading_link_min_len <= len(text) <= cfg.heading_link_max_len:
            return False
        if is_nav_link(text) or is_boilerplate(text):
            return False
        return all(p.admits(text, link.context_text) for p in policies)

    def segment_dom(self, page_url: str, dom: DomAnalyzer) -> List[Group]:
        cfg = self.config
        policies = policies_for(page_url, cfg.site_policies)
        extracted_at = datetime.now(timezone.utc)
        groups: List[Group] = []

        for heading in dom.query(", ".join(HEADING_TAGS)):
            name = dom.text(heading)
            if not cfg.heading_min_len <= len(name) <= cfg.heading_max_len:
                continue
            if is_nav_heading(name):
                continue

            links: List[CandidateLink] = []
            for node in self.owned_region(dom, heading):
                for a in dom.anchors(node):
                    link = collect_candidate(dom, a, page_url, min_len=1)
                    if link is not None and self.admit(link, policies):
                        links.append(link)

            unique = unique_by_url(links)[: cfg.heading_link_cap]
            if len(unique) < cfg.min_group_size:
                continue
            articles = to_articles(unique, extracted_at)
            groups.append(
                Group(
                    label=select_best_title(name, [a.title for a in articles]),
                    articles=articles,
                    source_strategy=self.name,
                    score=float(len(articles)),
                )
            )

        logger.debug("headings: %d groups on %s", len(groups), page_url)
        return groups
