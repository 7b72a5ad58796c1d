"""Label inference for groups and pages.

A raw label (heading text, container heading, path rendering) is kept when it
reads like a section name; otherwise a label is derived from member titles:
1. a short title repeated across members
2. the most frequent shared keyword
3. a medium-length member title that is not a bare category word
4. the first member title, truncated
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

from infostream.extraction.dom import DomAnalyzer, collapse_ws
from infostream.ingestion.url_utils import host_of
from infostream.segmentation.filters import (
    breadcrumb_tail,
    is_boilerplate,
    is_breadcrumb,
    is_category_word,
)


UNTITLED = "Untitled group"

LABEL_MIN_LEN = 2
LABEL_MAX_LEN = 50

STOPWORDS = {
    "the","a","an","and","or","but","of","to","in","on","for","with","by","at","as","is","are","was","were","be",
    "this","that","these","those","it","its","from","about","into","over","after","before","new","how","what","why",
    "的","和","与","及","关于",
}

PATH_LABELS: Dict[str, str] = {
    "/news": "News",
    "/article": "Articles",
    "/articles": "Articles",
    "/notice": "Announcements",
    "/notices": "Announcements",
    "/policy": "Policies",
    "/press": "Press Releases",
    "/blog": "Blog",
    "/events": "Events",
    "/zwgk": "Government Affairs",
    "/gsgg": "Public Notices",
    "/sydwzp": "Public Institution Recruitment",
    "/content": "Content",
    "/list": "Listings",
}


def truncate(text: str, limit: int) -> str:
    """Cut to limit chars total, ellipsis included."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def tokenize_title(title: str) -> List[str]:
    cleaned = re.sub(r"[^\u4e00-\u9fa5A-Za-z0-9]", " ", title or "")
    out = []
    for tok in cleaned.split():
        if not 2 <= len(tok) <= 10:
            continue
        # drop pure numbers
        if tok.isdigit():
            continue
        if tok.lower() in STOPWORDS:
            continue
        out.append(tok)
    return out


def find_common_keywords(titles: Sequence[str], *, min_count: int = 2, top_k: int = 3) -> List[str]:
    """Most frequent keywords (case-insensitive) appearing at least min_count times."""
    counts: Counter = Counter()
    first_form: Dict[str, str] = {}
    for title in titles:
        for tok in tokenize_title(title):
            key = tok.lower()
            counts[key] += 1
            first_form.setdefault(key, tok)
    ranked = [k for k, c in counts.most_common() if c >= min_count]
    return [first_form[k] for k in ranked[:top_k]]


def label_from_titles(titles: Sequence[str]) -> str:
    titles = [t for t in (collapse_ws(t) for t in titles) if t]
    if not titles:
        return UNTITLED

    short = [t for t in titles if 2 <= len(t) <= 10 and not is_boilerplate(t)]
    if short:
        title, count = Counter(short).most_common(1)[0]
        if count >= 2:
            return title

    keywords = find_common_keywords(titles)
    if keywords:
        return keywords[0]

    for t in titles:
        if 4 <= len(t) < 20 and not is_category_word(t) and not is_boilerplate(t):
            return t

    return truncate(titles[0], 30)


def select_best_title(label: str, titles: Sequence[str]) -> str:
    """Keep a plausible label, reduce a breadcrumb to its tail, else derive one."""
    label = collapse_ws(label)
    if not titles:
        return label or UNTITLED
    if not LABEL_MIN_LEN <= len(label) <= LABEL_MAX_LEN or is_boilerplate(label):
        return label_from_titles(titles)
    if is_breadcrumb(label):
        tail = breadcrumb_tail(label)
        if 2 < len(tail) < 30:
            return tail
    return label


def path_to_label(pattern: str) -> str:
    """'/news/2024' -> 'News'; unknown patterns render as 'foo bar'."""
    if pattern in PATH_LABELS:
        return PATH_LABELS[pattern]
    parts = [p for p in pattern.split("/") if p]
    if parts and f"/{parts[0]}" in PATH_LABELS:
        return PATH_LABELS[f"/{parts[0]}"]
    return " ".join(parts) or "Articles"


# -----------------------------
# Page-level suggested title
# -----------------------------
BREADCRUMB_SELECTORS = [
    ".breadcrumb a:last-child",
    '[class*="breadcrumb"] a:last-child',
    '[class*="breadcrumb"] span:last-child',
    '[class*="当前位置"] a:last-child',
    '[class*="当前位置"] span:last-child',
    '[class*="位置"] a:last-child',
    '[class*="路径"] a:last-child',
    '[class*="location"] a:last-child',
]

_LOCATION_PREFIX = re.compile(
    r"^(当前位置|您的位置|你的位置|所在位置|you are here|current location|location)\s*[：:]\s*",
    re.IGNORECASE,
)
_HOME_PREFIX = re.compile(r"^(首页|home)\s*>", re.IGNORECASE)
_TITLE_SUFFIX = re.compile(r"\s+[-–—_|]\s+|\s*\|\s*")


def _plausible(text: str) -> bool:
    return 2 < len(text) < 50 and not is_boilerplate(text)


def _breadcrumb_from_text(dom: DomAnalyzer) -> Optional[str]:
    for el in dom.query("div, p, span, nav, ol, ul, li, td"):
        text = dom.text(el)
        if not text or len(text) > 120 or ">" not in text:
            continue
        m = _LOCATION_PREFIX.match(text)
        if m:
            text = text[m.end():]
        elif not _HOME_PREFIX.match(text):
            continue
        tail = breadcrumb_tail(text)
        if _plausible(tail):
            return tail
    return None


def suggest_page_title(dom: DomAnalyzer, page_url: str) -> str:
    for selector in BREADCRUMB_SELECTORS:
        matches = dom.query(selector)
        if matches:
            text = dom.text(matches[-1])
            if _plausible(text):
                return text

    crumb = _breadcrumb_from_text(dom)
    if crumb:
        return crumb

    title = dom.text(dom.first("title"))
    if title:
        clean = _TITLE_SUFFIX.split(title, maxsplit=1)[0].strip()
        if _plausible(clean):
            return clean

    h1 = dom.text(dom.first("h1"))
    if _plausible(h1):
        return h1

    return host_of(page_url) or page_url
