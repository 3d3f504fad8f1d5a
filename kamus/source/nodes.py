"""Document node capability used by the sense extractor.

Extraction only talks to ``DocumentNode``; ``SoupNode`` is the BeautifulSoup
backend. Another HTML backend only has to provide the same six methods.
"""

import copy
from typing import List, Optional, Protocol

from bs4 import BeautifulSoup, Tag


class DocumentNode(Protocol):
    """Read-only view of one element in a parsed page."""

    def text(self) -> str:
        """Concatenated text of the element and its descendants."""
        ...

    def attr(self, name: str) -> Optional[str]:
        """Attribute value, or None if absent."""
        ...

    def select(self, selector: str) -> List["DocumentNode"]:
        """Descendants matching a CSS selector, in document order."""
        ...

    def select_one(self, selector: str) -> Optional["DocumentNode"]:
        ...

    def next_sibling(self, selector: str, stop: Optional[str] = None) -> Optional["DocumentNode"]:
        """First following sibling matching ``selector``.

        Returns None if a sibling matching ``stop`` comes first.
        """
        ...

    def without(self, selector: str) -> "DocumentNode":
        """Detached copy of this element with matching descendants removed."""
        ...


class SoupNode:
    """DocumentNode backed by a BeautifulSoup tag."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def __repr__(self) -> str:
        return f"SoupNode(<{self._tag.name}>)"

    def text(self) -> str:
        return self._tag.get_text()

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def select(self, selector: str) -> List["SoupNode"]:
        return [SoupNode(t) for t in self._tag.select(selector)]

    def select_one(self, selector: str) -> Optional["SoupNode"]:
        found = self._tag.select_one(selector)
        return SoupNode(found) if found is not None else None

    def next_sibling(self, selector: str, stop: Optional[str] = None) -> Optional["SoupNode"]:
        for sibling in self._tag.find_next_siblings():
            if stop and sibling.css.match(stop):
                return None
            if sibling.css.match(selector):
                return SoupNode(sibling)
        return None

    def without(self, selector: str) -> "SoupNode":
        clone = copy.copy(self._tag)
        for found in clone.select(selector):
            if not found.decomposed:
                found.decompose()
        return SoupNode(clone)


def parse_document(html: str) -> SoupNode:
    """Parse an entry page into its root node."""
    return SoupNode(BeautifulSoup(html, "html.parser"))
