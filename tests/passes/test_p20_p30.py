"""
Unit tests for tree building and the document skeleton (p20, p30).
"""

import pytest
from bs4 import BeautifulSoup

from htmlval.dom.tree import DocumentParseError, DocumentTree
from htmlval.ir.enums import RuleId
from htmlval.passes.p20_parse_tree import parse_tree
from htmlval.passes.p30_document import check_document


def run_document(ctx):
    parse_tree(ctx)
    check_document(ctx)
    return ctx


def unrepaired_tree(markup):
    """A tree built without HTML5 repair, so no skeleton is implied."""
    return DocumentTree(BeautifulSoup(markup, "html.parser"))


def rules_of(diagnostics):
    return [d.rule for d in diagnostics]


class TestP20ParseTree:
    """Tests for p20_parse_tree pass."""

    def test_builds_tree(self, make_context, well_formed):
        ctx = make_context(well_formed)

        parse_tree(ctx)

        assert ctx.tree is not None
        assert ctx.tree.root.tag_name == "html"

    def test_adds_trace(self, make_context):
        ctx = make_context("<p>x</p>")

        parse_tree(ctx)

        assert ctx.trace[-1].pass_name == "p20_parse_tree"
        # html, head and body are implied around the paragraph
        assert ctx.trace[-1].after == "4 elements"

    def test_malformed_markup_still_parses(self, make_context):
        """The parser is error tolerant; broken nesting still yields a tree."""
        ctx = make_context("<div><span></div></p><b>")

        parse_tree(ctx)

        assert ctx.tree is not None
        assert ctx.errors == []


class TestP30Document:
    """Tests for p30_document pass."""

    def test_well_formed_document(self, make_context, well_formed):
        ctx = run_document(make_context(well_formed))

        assert ctx.errors == []
        assert ctx.warnings == []

    def test_implied_head_and_body(self, make_context):
        """Omitting the optional <head> and <body> tags is valid HTML5."""
        ctx = run_document(
            make_context(
                '<!DOCTYPE html>\n<html lang="en">\n<meta charset="utf-8">\n'
                "<title>T</title>\n<p>Hi</p>\n</html>\n"
            )
        )

        assert ctx.errors == []
        assert ctx.warnings == []

    def test_requires_tree(self, make_context):
        """Without a tree the pass raises instead of guessing."""
        ctx = make_context("<html></html>")

        with pytest.raises(DocumentParseError):
            check_document(ctx)

    def test_root_not_html(self, make_context):
        """A tree whose first element is not <html> fails the root check."""
        ctx = make_context("")
        ctx.tree = unrepaired_tree("<head><title>T</title></head><body></body>")

        check_document(ctx)

        assert RuleId.ROOT_ELEMENT in rules_of(ctx.errors)
        # The lang check is skipped when there is no root
        assert RuleId.HTML_LANG not in rules_of(ctx.warnings)

    def test_order_root_head_body(self, make_context):
        """Skeleton diagnostics come out root first, then head, then body."""
        ctx = make_context("")
        ctx.tree = unrepaired_tree("<div></div>")

        check_document(ctx)

        assert rules_of(ctx.errors) == [
            RuleId.ROOT_ELEMENT,
            RuleId.HEAD_REQUIRED,
            RuleId.BODY_REQUIRED,
        ]

    def test_missing_head_short_circuits(self, make_context):
        """Without <head> the title and charset checks are skipped."""
        ctx = make_context("")
        ctx.tree = unrepaired_tree('<html lang="en"><body></body></html>')

        check_document(ctx)

        assert rules_of(ctx.errors) == [RuleId.HEAD_REQUIRED]
        assert ctx.warnings == []

    def test_empty_document(self, make_context):
        """Empty input still parses to a skeleton, which lacks a title and lang."""
        ctx = run_document(make_context(""))

        assert rules_of(ctx.errors) == [RuleId.TITLE_REQUIRED]
        assert rules_of(ctx.warnings) == [RuleId.HTML_LANG, RuleId.CHARSET_RECOMMENDED]

    def test_missing_lang(self, make_context):
        ctx = run_document(
            make_context('<html><head><meta charset="utf-8"><title>T</title></head><body></body></html>')
        )

        assert ctx.errors == []
        assert rules_of(ctx.warnings) == [RuleId.HTML_LANG]

    def test_missing_title(self, make_context):
        ctx = run_document(
            make_context('<html lang="en"><head><meta charset="utf-8"></head><body></body></html>')
        )

        assert rules_of(ctx.errors) == [RuleId.TITLE_REQUIRED]

    def test_whitespace_title(self, make_context):
        """A title holding only whitespace is empty; the two title rules never both fire."""
        ctx = run_document(
            make_context(
                '<html lang="en"><head><meta charset="utf-8"><title>  \n </title></head>'
                "<body></body></html>"
            )
        )

        assert rules_of(ctx.errors) == [RuleId.TITLE_EMPTY]
        assert ctx.errors[0].line is None

    def test_charset_outside_head(self, make_context):
        """The recommendation only looks inside <head>."""
        ctx = run_document(
            make_context(
                '<html lang="en"><head><title>T</title></head>'
                '<body><meta charset="utf-8"></body></html>'
            )
        )

        assert rules_of(ctx.warnings) == [RuleId.CHARSET_RECOMMENDED]

    def test_frameset_has_no_body(self, make_context):
        """A frameset document replaces <body>, so the body check fires."""
        ctx = run_document(
            make_context(
                '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"><title>T</title></head>'
                '<frameset><frame src="a.html"></frameset></html>'
            )
        )

        assert rules_of(ctx.errors) == [RuleId.BODY_REQUIRED]
