"""
DOM — Read interface over the externally parsed document tree.
"""

from htmlval.dom.tree import DocumentParseError, DocumentTree, ElementNode, parse_document

__all__ = [
    "DocumentParseError",
    "DocumentTree",
    "ElementNode",
    "parse_document",
]
