"""
Pass 20 — Parse Tree

Builds the document tree with the error-tolerant external parser.
Everything after this pass reads the tree, never the raw text.
"""

from htmlval.core.context import ValidationContext
from htmlval.core.logging import get_pass_logger
from htmlval.dom.tree import parse_document

PASS_NAME = "p20_parse_tree"
log = get_pass_logger(PASS_NAME)


def parse_tree(ctx: ValidationContext) -> ValidationContext:
    """
    Parse the raw text into ctx.tree.

    Raises:
        DocumentParseError: If the parser rejects the input; the engine
            turns this into the terminal parse-error diagnostic.
    """
    tree = parse_document(ctx.raw_text)
    ctx.tree = tree

    elements = sum(1 for _ in tree.iter_elements())
    root = tree.root
    log.verbose(
        "tree_built",
        elements=elements,
        doctype=tree.doctype,
        root=root.tag_name if root else None,
    )

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="built_tree",
        before=f"{len(ctx.raw_text)} chars",
        after=f"{elements} elements",
    )

    return ctx
