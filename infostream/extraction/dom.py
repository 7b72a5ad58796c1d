"""Thin query layer over parsed markup.

Strategies only talk to DomAnalyzer (query / text / attr / ancestors), never to
BeautifulSoup directly, so the parser can be swapped without touching them.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag


logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3")
BLOCK_TAGS = ("div", "section", "article", "ul", "ol")


def collapse_ws(text: str) -> str:
    return " ".join((text or "").split())


class DomAnalyzer:
    def __init__(self, html: str, parser: str = "html.parser"):
        self.soup = BeautifulSoup(html or "", parser)

    def query(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        """CSS selection below root (whole document by default)."""
        return list((root or self.soup).select(selector))

    def first(self, selector: str, root: Optional[Tag] = None) -> Optional[Tag]:
        return (root or self.soup).select_one(selector)

    def text(self, el: Optional[Tag]) -> str:
        if el is None:
            return ""
        return collapse_ws(el.get_text(" "))

    def attr(self, el: Optional[Tag], name: str) -> str:
        """Attribute value as a string; multi-valued attributes (class) are space-joined."""
        if el is None:
            return ""
        value = el.get(name)
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value).strip()

    def ancestors(self, el: Tag) -> Iterator[Tag]:
        """Enclosing elements from the parent up (the document object excluded)."""
        for parent in el.parents:
            if isinstance(parent, Tag) and parent is not self.soup:
                yield parent

    def closest(self, el: Tag, tags: Sequence[str], include_self: bool = True) -> Optional[Tag]:
        if include_self and el.name in tags:
            return el
        for parent in self.ancestors(el):
            if parent.name in tags:
                return parent
        return None

    def next_siblings(self, el: Tag) -> Iterator[Tag]:
        """Element siblings after el (text nodes skipped)."""
        for sib in el.next_siblings:
            if isinstance(sib, Tag):
                yield sib

    def anchors(self, root: Optional[Tag] = None) -> List[Tag]:
        """Links with an href, including root itself when it is one."""
        if root is not None and root.name == "a" and root.get("href"):
            return [root]
        return self.query("a[href]", root)

    def heading_level(self, el: Tag) -> Optional[int]:
        if el.name in HEADING_TAGS:
            return int(el.name[1])
        return None

    def dom_path(self, el: Tag, depth: int = 3) -> str:
        """Coarse signature: a few ancestor tag names plus the element's first class."""
        names = [p.name for p in self.ancestors(el)][:depth]
        names.reverse()
        cls = self.attr(el, "class").split()
        leaf = el.name + (f".{cls[0]}" if cls else "")
        return "/".join(names + [leaf])
