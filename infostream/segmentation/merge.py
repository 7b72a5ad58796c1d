"""Cross-strategy union of groups.

Groups with equal labels collapse into one; articles are unioned in first-seen
order and de-duplicated by URL.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence

from infostream.segmentation.base import BaseSegmenter
from infostream.segmentation.types import Group


logger = logging.getLogger(__name__)


def run_isolated(segmenter: BaseSegmenter, page_url: str, html: str) -> List[Group]:
    """Run one strategy; a failure costs only that strategy's groups."""
    try:
        return segmenter.segment(page_url, html)
    except Exception:
        logger.warning("segmenter %s failed on %s", segmenter.name, page_url, exc_info=True)
        return []


def run_segmenters(
    segmenters: Sequence[BaseSegmenter],
    page_url: str,
    html: str,
    *,
    max_workers: int = 3,
) -> List[List[Group]]:
    """Run strategies concurrently; results come back in segmenter order."""
    if len(segmenters) <= 1 or max_workers <= 1:
        return [run_isolated(s, page_url, html) for s in segmenters]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(segmenters))) as pool:
        futures = [pool.submit(run_isolated, s, page_url, html) for s in segmenters]
        return [f.result() for f in futures]


def merge_groups(groups: Sequence[Group], *, min_size: int = 2) -> List[Group]:
    merged: Dict[str, Group] = {}
    seen: Dict[str, set] = {}
    for group in groups:
        existing = merged.get(group.label)
        if existing is None:
            existing = Group(label=group.label, articles=[], source_strategy=group.source_strategy, score=group.score)
            merged[group.label] = existing
            seen[group.label] = set()
        else:
            strategies = set(existing.source_strategy.split("+")) | {group.source_strategy}
            existing.source_strategy = "+".join(sorted(strategies))
            existing.score = max(existing.score, group.score)
        urls = seen[group.label]
        for article in group.articles:
            if article.url in urls:
                continue
            urls.add(article.url)
            existing.articles.append(article)

    out = [g for g in merged.values() if len(g.articles) >= min_size]
    out.sort(key=lambda g: (-len(g.articles), g.label))
    return out
