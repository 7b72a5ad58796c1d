"""Shared text filters for link/heading admission and label cleanup.

Keyword lists cover both English and Chinese portal boilerplate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse


# -----------------------------
# Headings
# -----------------------------
HEADING_NAV_PATTERN = re.compile(
    r"^(home|首页)$|\babout\b|关于|\blog\s?in\b|\bsign\s?in\b|登录|\bcontact\b|联系我们",
    re.IGNORECASE,
)

# Sections that list other websites rather than articles
HEADING_BLACKLIST_PATTERN = re.compile(
    r"(上级政府网站|各省市人社部门网站|各地市人社部门网站|业务网站|友情链接|网站地图|联系我们"
    r"|friendly\s+links|related\s+(sites|links|websites)|site\s?map|partner\s+(sites|links)|follow\s+us)",
    re.IGNORECASE,
)


def is_nav_heading(text: str) -> bool:
    return bool(HEADING_NAV_PATTERN.search(text) or HEADING_BLACKLIST_PATTERN.search(text))


# -----------------------------
# Links
# -----------------------------
LINK_NAV_PATTERN = re.compile(
    r"首页|上一页|下一页|更多|返回"
    r"|^(home|next|next\s+page|previous|prev|previous\s+page|more|read\s+more|view\s+more|back|back\s+to\s+top)\W*$",
    re.IGNORECASE,
)


def is_nav_link(text: str) -> bool:
    return bool(LINK_NAV_PATTERN.search(text))


def is_breadcrumb(text: str, max_len: int = 50) -> bool:
    """'Home > Disclosure > Notices' style chains shorter than max_len."""
    if not text or len(text) >= max_len or ">" not in text:
        return False
    parts = text.split(">")
    return len(parts) >= 2 and all(p.strip() for p in parts)


def breadcrumb_tail(text: str) -> str:
    return text.split(">")[-1].strip()


# Containers whose links are chrome, not content. Keywords must be a whole
# class token or a hyphen/underscore-delimited part of one ("main-nav", "menu_item").
NAV_CONTAINER_PATTERN = re.compile(
    r"(?:^|[\s_-])(?:nav|navbar|menu|footer|sidebar|breadcrumbs?|pagination)(?:$|[\s_-])",
    re.IGNORECASE,
)
NAV_CONTAINER_TAGS = ("nav", "footer")
# Classes on these describe page state, not the container around a link
PAGE_LEVEL_TAGS = ("body", "html")


# -----------------------------
# Labels
# -----------------------------
# Low-information labels (whole-string match)
BOILERPLATE_PATTERN = re.compile(
    r"^(zwgk|gsgg|zwgk\s+gsgg|年度|部门|网站|首页|导航|菜单|链接|更多|返回|上一页|下一页|第.*页|共.*页"
    r"|home|index|menu|navigation|nav|links|more|back|next|previous|prev|website|site|untitled"
    r"|page\s*\d+|\d+\s*(of|/)\s*\d+)$",
    re.IGNORECASE,
)

# Bare category words: fine as section names, poor as a member-derived label
CATEGORY_WORD_PATTERN = re.compile(
    r"^(通知|公告|公示|招聘|拟聘|集中公开招聘|高校毕业生"
    r"|news|notice|notices|announcement|announcements|update|updates|press\s+releases?)$",
    re.IGNORECASE,
)


def is_boilerplate(text: str) -> bool:
    return bool(BOILERPLATE_PATTERN.match((text or "").strip()))


def is_category_word(text: str) -> bool:
    return bool(CATEGORY_WORD_PATTERN.match((text or "").strip()))


# -----------------------------
# Dates
# -----------------------------
DATE_PATTERN = re.compile(
    r"(20\d{2}\s*[-./年]\s*\d{1,2}(\s*[-./月]\s*\d{1,2})?|20\d{2}\s*年\s*\d{1,2}\s*月)"
)
YEAR_PATTERN = re.compile(r"20\d{2}[-./年]")
_DATE_PARTS = re.compile(r"(20\d{2})\s*[-./年]\s*(\d{1,2})(?:\s*[-./月]\s*(\d{1,2}))?")


def has_date(*texts: str) -> bool:
    return any(t and DATE_PATTERN.search(t) for t in texts)


def parse_date_hint(*texts: str) -> Optional[datetime]:
    """First parseable year-month[-day] token across texts, as a UTC datetime."""
    for t in texts:
        if not t:
            continue
        for m in _DATE_PARTS.finditer(t):
            year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3) or 1)
            try:
                return datetime(year, month, day, tzinfo=timezone.utc)
            except ValueError:
                continue
    return None


# -----------------------------
# Per-site admission policy
# -----------------------------
@dataclass(frozen=True)
class SitePolicy:
    """Extra admission rule for heading-section links on matching pages.

    host_pattern / path_pattern are regexes searched against the page URL's
    host and path. A matching page only admits links whose text matches
    keyword_pattern (case-insensitive) and, with require_date, that carry a date token in the
    link text or its parent's text.
    """

    host_pattern: str
    path_pattern: str = ""
    keyword_pattern: Optional[str] = None
    require_date: bool = False

    def __post_init__(self):
        # bad regexes raise re.error here, at construction
        for pattern in (self.host_pattern, self.path_pattern, self.keyword_pattern):
            if pattern:
                re.compile(pattern)

    def applies_to(self, page_url: str) -> bool:
        p = urlparse(page_url)
        host = (p.hostname or "").lower()
        if not re.search(self.host_pattern, host):
            return False
        return not self.path_pattern or bool(re.search(self.path_pattern, p.path or "/"))

    def admits(self, text: str, context_text: str = "") -> bool:
        if self.keyword_pattern and not re.search(self.keyword_pattern, text, re.IGNORECASE):
            return False
        if self.require_date and not has_date(text, context_text):
            return False
        return True

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SitePolicy":
        return cls(
            host_pattern=str(raw["host_pattern"]),
            path_pattern=str(raw.get("path_pattern") or ""),
            keyword_pattern=raw.get("keyword_pattern") or None,
            require_date=bool(raw.get("require_date", False)),
        )


def policies_for(page_url: str, policies: Iterable[SitePolicy]) -> List[SitePolicy]:
    return [p for p in policies if p.applies_to(page_url)]
