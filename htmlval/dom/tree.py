"""
Document Tree — Read-only element view over a BeautifulSoup parse.

The tree is built by a conforming, error-tolerant HTML5 parser
(BeautifulSoup with the ``html5lib`` backend). It repairs the markup the
way a browser does: implied <html>, <head> and <body> are created,
implied end tags are applied and misnested formatting is reparented.
The checker only reads the repaired tree through ElementNode.

html5lib does not report source positions, so ``line`` and ``column``
are None for trees it builds.
"""

from __future__ import annotations

from typing import Iterator, Optional

from bs4 import BeautifulSoup, Doctype, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import Comment, Declaration, ProcessingInstruction

PARSER_FEATURES = "html5lib"

# Non-content nodes that do not count as children of an element
_NON_CONTENT = (Comment, Declaration, Doctype, ProcessingInstruction)


class DocumentParseError(ValueError):
    """The markup could not be turned into a document tree."""


class ElementNode:
    """
    A single element of the parsed document.

    Attribute names are lowercase. Attribute values are plain strings;
    boolean attributes (``<input disabled>``) read as the empty string.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"ElementNode(<{self.tag_name}> line={self.line})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ElementNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    @property
    def tag_name(self) -> str:
        return self._tag.name.lower()

    @property
    def attributes(self) -> list[tuple[str, str]]:
        """Attributes in source order as (name, value) pairs."""
        return [(name.lower(), _attr_text(value)) for name, value in self._tag.attrs.items()]

    def has_attribute(self, name: str) -> bool:
        name = name.lower()
        return any(attr == name for attr, _ in self.attributes)

    def get_attribute(self, name: str) -> Optional[str]:
        name = name.lower()
        for attr, value in self.attributes:
            if attr == name:
                return value
        return None

    @property
    def parent(self) -> Optional[ElementNode]:
        """The parent element, or None at the top of the document."""
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return ElementNode(parent)

    @property
    def children(self) -> list[ElementNode]:
        """Immediate element children in document order."""
        return [ElementNode(child) for child in self._tag.children if isinstance(child, Tag)]

    def has_child_nodes(self) -> bool:
        """True if the element holds any element or text node."""
        for child in self._tag.children:
            if isinstance(child, Tag):
                return True
            if isinstance(child, NavigableString) and not isinstance(child, _NON_CONTENT):
                return True
        return False

    @property
    def text(self) -> str:
        """Concatenated text content of the element and its descendants."""
        return self._tag.get_text()

    def fragment(self, limit: int = 200) -> str:
        """The element's own markup, truncated to ``limit`` characters."""
        return str(self._tag)[:limit]

    @property
    def line(self) -> Optional[int]:
        """1-based source line of the opening tag, if the parser recorded it."""
        return self._tag.sourceline

    @property
    def column(self) -> Optional[int]:
        """1-based source column of the opening tag, if the parser recorded it."""
        if self._tag.sourcepos is None:
            return None
        return self._tag.sourcepos + 1

    def iter(self) -> Iterator[ElementNode]:
        """Pre-order walk over this element and all descendant elements."""
        yield self
        for descendant in self._tag.descendants:
            if isinstance(descendant, Tag):
                yield ElementNode(descendant)

    def find(self, name: str) -> Optional[ElementNode]:
        """First descendant element with this name, in document order."""
        found = self._tag.find(name.lower())
        return ElementNode(found) if isinstance(found, Tag) else None

    def find_all(self, name: str) -> list[ElementNode]:
        return [ElementNode(tag) for tag in self._tag.find_all(name.lower())]

    def find_with_attribute(self, name: str, attribute: str, value: Optional[str] = None) -> Optional[ElementNode]:
        """Like DocumentTree.find_with_attribute, scoped to descendants."""
        return _first_with_attribute(self.find_all(name), attribute, value)


class DocumentTree:
    """A parsed document: top-level nodes plus whole-document queries."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    @property
    def root(self) -> Optional[ElementNode]:
        """The first top-level element, or None for a document without one."""
        for child in self._soup.children:
            if isinstance(child, Tag):
                return ElementNode(child)
        return None

    @property
    def doctype(self) -> Optional[str]:
        for child in self._soup.children:
            if isinstance(child, Doctype):
                return str(child)
        return None

    def iter_elements(self) -> Iterator[ElementNode]:
        """Every element of the document, pre-order, each exactly once."""
        for descendant in self._soup.descendants:
            if isinstance(descendant, Tag):
                yield ElementNode(descendant)

    def find(self, name: str) -> Optional[ElementNode]:
        found = self._soup.find(name.lower())
        return ElementNode(found) if isinstance(found, Tag) else None

    def find_all(self, name: str) -> list[ElementNode]:
        return [ElementNode(tag) for tag in self._soup.find_all(name.lower())]

    def find_with_attribute(self, name: str, attribute: str, value: Optional[str] = None) -> Optional[ElementNode]:
        return _first_with_attribute(self.find_all(name), attribute, value)


def _first_with_attribute(
    elements: list[ElementNode], attribute: str, value: Optional[str]
) -> Optional[ElementNode]:
    """
    First element carrying ``attribute``.

    When ``value`` is given the attribute value must match it, ignoring
    case (``meta[http-equiv="Content-Type"]``).
    """
    for element in elements:
        actual = element.get_attribute(attribute)
        if actual is None:
            continue
        if value is None or actual.lower() == value.lower():
            return element
    return None


def _attr_text(value) -> str:
    # Multi-valued attributes are disabled at parse time; this covers trees
    # built elsewhere with bs4 defaults.
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    if value is None:
        return ""
    return str(value)


def parse_document(markup: str) -> DocumentTree:
    """
    Parse markup into a DocumentTree.

    Raises:
        DocumentParseError: If the parser rejects the input
    """
    if markup is None:
        raise DocumentParseError("no markup to parse")
    try:
        soup = BeautifulSoup(markup, PARSER_FEATURES, multi_valued_attributes=None)
    except ParserRejectedMarkup as e:
        raise DocumentParseError(str(e)) from e
    return DocumentTree(soup)
