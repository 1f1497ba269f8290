"""Passes — Pipeline stages for HTML validation."""

from htmlval.core.engine import Pipeline
from htmlval.passes.p00_doctype import check_doctype
from htmlval.passes.p10_tag_balance import check_tag_balance
from htmlval.passes.p20_parse_tree import parse_tree
from htmlval.passes.p30_document import check_document
from htmlval.passes.p40_elements import check_elements
from htmlval.passes.p50_charset import check_charset

__all__ = [
    "check_doctype",
    "check_tag_balance",
    "parse_tree",
    "check_document",
    "check_elements",
    "check_charset",
    "default_pipeline",
]


def default_pipeline():
    """The full check sequence, in the order diagnostics are reported."""
    return Pipeline(
        id="default",
        name="HTML5 structural validation",
        passes=[
            check_doctype,
            check_tag_balance,
            parse_tree,
            check_document,
            check_elements,
            check_charset,
        ],
    )
