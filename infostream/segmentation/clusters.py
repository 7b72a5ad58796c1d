"""Link-cluster segmentation.

Links are keyed by (nearest block container class, first two path segments)
and each cluster is scored:

    score = 0.3 * link_density + 0.2 * same_host + 0.3 * date_hit + 0.2 * title_density

link_density   cluster size / all collected links
same_host      always 1 (cross-host links never reach this point)
date_hit       1 if any member text carries a year token
title_density  share of members whose text looks like a headline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from bs4.element import Tag

from infostream.extraction.dom import BLOCK_TAGS, HEADING_TAGS, DomAnalyzer
from infostream.ingestion.url_utils import path_prefix
from infostream.segmentation.base import BaseSegmenter, collect_candidate, to_articles
from infostream.segmentation.filters import YEAR_PATTERN
from infostream.segmentation.titles import select_best_title, truncate
from infostream.segmentation.types import CandidateLink, Group


logger = logging.getLogger(__name__)


@dataclass
class LinkCluster:
    key: str
    links: List[CandidateLink]
    anchors: List[Tag]
    score: float = 0.0


class ClusterSegmenter(BaseSegmenter):
    name: str = "cluster"

    def score(self, cluster: List[CandidateLink], total: int) -> float:
        cfg = self.config
        if not cluster:
            return 0.0
        link_density = len(cluster) / max(total, 1)
        same_host = 1.0
        date_hit = 1.0 if any(YEAR_PATTERN.search(link.text) for link in cluster) else 0.0
        title_like = sum(1 for link in cluster if cfg.title_like_min_len <= len(link.text) < cfg.title_like_max_len)
        title_density = title_like / len(cluster)
        return (
            cfg.cluster_weight_density * link_density
            + cfg.cluster_weight_same_host * same_host
            + cfg.cluster_weight_date * date_hit
            + cfg.cluster_weight_title * title_density
        )

    def container_heading(self, dom: DomAnalyzer, anchor: Tag) -> Optional[str]:
        container = dom.closest(anchor, BLOCK_TAGS[:3] + HEADING_TAGS, include_self=False)
        if container is None:
            return None
        if dom.heading_level(container) is not None:
            text = dom.text(container)
        else:
            text = dom.text(dom.first(", ".join(HEADING_TAGS), container))
        if text and 2 < len(text) < self.config.cluster_label_max_len:
            return text
        return None

    def raw_label(self, dom: DomAnalyzer, cluster: LinkCluster) -> str:
        heading = self.container_heading(dom, cluster.anchors[0])
        if heading:
            return heading
        return truncate(cluster.links[0].text, self.config.cluster_label_max_len)

    def segment_dom(self, page_url: str, dom: DomAnalyzer) -> List[Group]:
        cfg = self.config
        collected: List[Tuple[CandidateLink, Tag]] = []
        for a in dom.anchors():
            link = collect_candidate(dom, a, page_url, min_len=cfg.cluster_link_min_len)
            if link is not None:
                collected.append((link, a))

        by_key: Dict[str, LinkCluster] = {}
        seen: Dict[str, set] = {}
        for link, a in collected:
            key = f"{link.container}-{path_prefix(link.url)}"
            cluster = by_key.setdefault(key, LinkCluster(key=key, links=[], anchors=[]))
            if link.url in seen.setdefault(key, set()):
                continue
            seen[key].add(link.url)
            cluster.links.append(link)
            cluster.anchors.append(a)

        kept = []
        for cluster in by_key.values():
            cluster.score = self.score(cluster.links, len(collected))
            if cluster.score > cfg.cluster_min_score and len(cluster.links) >= cfg.cluster_min_size:
                kept.append(cluster)
        kept.sort(key=lambda c: c.score, reverse=True)

        extracted_at = datetime.now(timezone.utc)
        groups: List[Group] = []
        for cluster in kept[: cfg.cluster_cap]:
            articles = to_articles(cluster.links, extracted_at)
            groups.append(
                Group(
                    label=select_best_title(self.raw_label(dom, cluster), [a.title for a in articles]),
                    articles=articles,
                    source_strategy=self.name,
                    score=cluster.score,
                )
            )

        logger.debug("cluster: %d of %d clusters kept on %s", len(groups), len(by_key), page_url)
        return groups
