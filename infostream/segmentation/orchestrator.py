"""Turns an arbitrary web page into labeled groups of article links.

Flow for one call:
- fetch static markup (FetchError is the only failure surfaced)
- run the strategy set for the mode; auto runs all three and merges
- if nothing came out, render the page headlessly once and re-run the same set
- cap the output and attach the page's suggested title
"""

from __future__ import annotations

import logging
from itertools import chain
from typing import Callable, List, Optional, Sequence

from infostream.extraction.dom import DomAnalyzer
from infostream.extraction.fetch import fetch_html
from infostream.extraction.render import HeadlessRenderer
from infostream.segmentation.base import BaseSegmenter
from infostream.segmentation.clusters import ClusterSegmenter
from infostream.segmentation.config import SegmentationConfig
from infostream.segmentation.headings import HeadingSegmenter
from infostream.segmentation.merge import merge_groups, run_segmenters
from infostream.segmentation.patterns import PathPatternSegmenter
from infostream.segmentation.titles import suggest_page_title
from infostream.segmentation.types import Group, PageResult


logger = logging.getLogger(__name__)

AUTO = "auto"
MODES = (AUTO, "headings", "cluster", "pattern")


def default_segmenters(config: SegmentationConfig) -> List[BaseSegmenter]:
    return [HeadingSegmenter(config), ClusterSegmenter(config), PathPatternSegmenter(config)]


class PageSegmenter:
    """Segmentation entry point with injectable fetch/render collaborators.

    fetcher:   callable(url) -> markup, raising FetchError
    renderer:  object with render(url) -> Optional[markup]; None disables the fallback
    """

    def __init__(
        self,
        config: Optional[SegmentationConfig] = None,
        *,
        fetcher: Optional[Callable[[str], str]] = None,
        renderer=None,
        render_fallback: bool = True,
        segmenters: Optional[Sequence[BaseSegmenter]] = None,
    ):
        self.config = config or SegmentationConfig()
        self.fetcher = fetcher or self._fetch
        if renderer is None and render_fallback:
            renderer = HeadlessRenderer(
                timeout_ms=self.config.render_timeout_ms,
                settle_ms=self.config.render_settle_ms,
                user_agent=self.config.user_agent,
            )
        self.renderer = renderer if render_fallback else None
        self.segmenters = list(segmenters) if segmenters is not None else default_segmenters(self.config)

    def _fetch(self, url: str) -> str:
        cfg = self.config
        return fetch_html(
            url,
            user_agent=cfg.user_agent,
            connect_timeout=cfg.fetch_connect_timeout,
            read_timeout=cfg.fetch_read_timeout,
            max_bytes=cfg.fetch_max_bytes,
        )

    def strategies_for(self, mode: str) -> List[BaseSegmenter]:
        if mode == AUTO:
            return list(self.segmenters)
        chosen = [s for s in self.segmenters if s.name == mode]
        if not chosen:
            raise ValueError(f"unknown segmentation mode: {mode!r} (expected one of {', '.join(MODES)})")
        return chosen[:1]

    def extract(self, page_url: str, html: str, mode: str = AUTO) -> List[Group]:
        """Groups from one markup snapshot, without fallback or caps."""
        strategies = self.strategies_for(mode)
        results = run_segmenters(strategies, page_url, html, max_workers=self.config.max_workers)
        if mode == AUTO:
            return merge_groups(list(chain.from_iterable(results)), min_size=self.config.min_group_size)
        return results[0]

    def segment(self, page_url: str, mode: str = AUTO) -> PageResult:
        """Fetch page_url and segment it. Raises FetchError / ValueError only."""
        self.strategies_for(mode)
        html = self.fetcher(page_url)
        return self.segment_html(page_url, html, mode)

    def segment_html(self, page_url: str, html: str, mode: str = AUTO) -> PageResult:
        strategies = self.strategies_for(mode)
        try:
            groups = self.extract(page_url, html, mode)
            logger.info("static extraction: %d groups for %s (mode=%s)", len(groups), page_url, mode)

            used_fallback = False
            title_html = html
            if not groups and self.renderer is not None:
                logger.info("no groups from static markup, rendering %s", page_url)
                rendered = self.renderer.render(page_url)
                used_fallback = True
                if rendered:
                    groups = self.extract(page_url, rendered, mode)
                    title_html = rendered
                    logger.info("rendered extraction: %d groups for %s", len(groups), page_url)

            return self.format(page_url, groups, title_html, mode, used_fallback=used_fallback)
        except Exception:
            logger.exception("segmentation failed for %s (strategies=%s)", page_url, [s.name for s in strategies])
            return PageResult(
                groups=[],
                suggested_title=suggest_title_safely(html, page_url),
                mode=mode,
                total_groups_before_cap=0,
                source_url=page_url,
            )

    def format(self, page_url: str, groups: List[Group], html: str, mode: str, *, used_fallback: bool = False) -> PageResult:
        cfg = self.config
        capped = [
            Group(
                label=g.label,
                articles=g.articles[: cfg.max_articles],
                source_strategy=g.source_strategy,
                score=g.score,
            )
            for g in groups[: cfg.max_groups]
        ]
        return PageResult(
            groups=capped,
            suggested_title=suggest_page_title(DomAnalyzer(html), page_url),
            mode=mode,
            total_groups_before_cap=len(groups),
            used_fallback=used_fallback,
            source_url=page_url,
        )


def suggest_title_safely(html: str, page_url: str) -> str:
    try:
        return suggest_page_title(DomAnalyzer(html), page_url)
    except Exception:
        logger.warning("suggested title failed for %s", page_url, exc_info=True)
        return page_url
