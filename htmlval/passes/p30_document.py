"""
Pass 30 — Document Skeleton

Checks the required outline of an HTML5 document on the parsed tree:
- Root element is <html>, with a lang attribute
- A <head> with a non-empty <title> and a <meta charset>
- A <body>
"""

from htmlval.core.context import ValidationContext
from htmlval.core.logging import get_pass_logger
from htmlval.dom.tree import DocumentTree
from htmlval.ir.enums import RuleId

PASS_NAME = "p30_document"
log = get_pass_logger(PASS_NAME)


def check_document(ctx: ValidationContext) -> ValidationContext:
    """Check root, head and body, in that order."""
    tree = ctx.require_tree()

    _check_root(ctx, tree)
    _check_head(ctx, tree)
    _check_body(ctx, tree)

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="checked_document",
        after=f"{len(ctx.errors)} errors, {len(ctx.warnings)} warnings",
    )

    return ctx


def _check_root(ctx: ValidationContext, tree: DocumentTree) -> None:
    root = tree.root
    if root is None or root.tag_name != "html":
        log.verbose("root_mismatch", root=root.tag_name if root else None)
        ctx.add_diagnostic(RuleId.ROOT_ELEMENT, "Root element <html> is required.")
        return

    if not root.has_attribute("lang"):
        ctx.add_diagnostic(
            RuleId.HTML_LANG,
            '<html> element must have "lang" attribute (e.g. lang="en").',
        )


def _check_head(ctx: ValidationContext, tree: DocumentTree) -> None:
    head = tree.find("head")
    if head is None:
        ctx.add_diagnostic(RuleId.HEAD_REQUIRED, "<head> element is missing.")
        return

    title = head.find("title")
    if title is None:
        ctx.add_diagnostic(RuleId.TITLE_REQUIRED, "<head> must contain <title> element.")
    elif not title.text.strip():
        ctx.add_diagnostic(
            RuleId.TITLE_EMPTY,
            "<title> element cannot be empty.",
            line=title.line,
            column=title.column,
        )

    if head.find_with_attribute("meta", "charset") is None:
        ctx.add_diagnostic(
            RuleId.CHARSET_RECOMMENDED,
            '<head> must contain character encoding (e.g. <meta charset="UTF-8">).',
        )


def _check_body(ctx: ValidationContext, tree: DocumentTree) -> None:
    if tree.find("body") is None:
        ctx.add_diagnostic(RuleId.BODY_REQUIRED, "<body> element is missing.")
