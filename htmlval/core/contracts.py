"""
Contracts — Type definitions and interfaces for pipeline components.
"""

from typing import Iterator, Optional, Protocol

from htmlval.core.context import ValidationContext


class Pass(Protocol):
    """Protocol for pipeline passes."""

    __name__: str

    def __call__(self, ctx: ValidationContext) -> ValidationContext:
        """Apply the pass to the context."""
        ...


class ElementView(Protocol):
    """
    What the structural checks need from a parsed element.

    ``htmlval.dom.ElementNode`` implements this over BeautifulSoup; any
    other parser can be plugged in by providing the same read interface.
    """

    @property
    def tag_name(self) -> str: ...

    @property
    def attributes(self) -> list[tuple[str, str]]: ...

    def has_attribute(self, name: str) -> bool: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    @property
    def parent(self) -> Optional["ElementView"]: ...

    @property
    def children(self) -> list["ElementView"]: ...

    def has_child_nodes(self) -> bool: ...

    @property
    def text(self) -> str: ...

    def fragment(self, limit: int = 200) -> str: ...

    @property
    def line(self) -> Optional[int]: ...

    @property
    def column(self) -> Optional[int]: ...

    def iter(self) -> Iterator["ElementView"]: ...
