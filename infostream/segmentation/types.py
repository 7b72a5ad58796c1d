"""Data types produced by page segmentation.

Nothing here is persisted; every object lives for a single segmentation call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CandidateLink:
    """An anchor considered for group membership before filtering.

    container (the enclosing block's class) keys clusters; dom_path is a
    diagnostic signature only and takes part in no grouping decision.
    """

    text: str
    url: str
    container: str = ""
    dom_path: str = ""
    context_text: str = ""


@dataclass(frozen=True)
class Article:
    title: str
    url: str
    published_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.url,
            "publishedAtIso": self.published_at.isoformat(),
        }


@dataclass
class Group:
    label: str
    articles: List[Article]
    source_strategy: str
    score: float = 0.0

    @property
    def urls(self) -> List[str]:
        return [a.url for a in self.articles]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "preview": self.articles[0].title if self.articles else "",
            "source": self.source_strategy,
            "score": round(self.score, 4),
            "articles": [a.to_dict() for a in self.articles],
        }


@dataclass
class PageResult:
    groups: List[Group]
    suggested_title: str
    mode: str
    total_groups_before_cap: int
    used_fallback: bool = False
    source_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "suggestedTitle": self.suggested_title,
            "mode": self.mode,
            "totalGroupsBeforeCap": self.total_groups_before_cap,
            "usedFallback": self.used_fallback,
        }
