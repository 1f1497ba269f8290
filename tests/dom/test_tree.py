"""
Unit tests for the document tree adapter.
"""

import pytest

from htmlval.dom.tree import DocumentParseError, ElementNode, parse_document


class TestParseDocument:
    def test_root_is_first_element(self):
        tree = parse_document("<!DOCTYPE html>\n<html><body></body></html>")

        assert tree.root.tag_name == "html"
        assert tree.doctype == "html"

    def test_implied_skeleton(self):
        """Bare text still gets the <html>, <head> and <body> a browser would create."""
        tree = parse_document("just text")

        assert tree.root.tag_name == "html"
        assert tree.doctype is None
        assert [e.tag_name for e in tree.iter_elements()] == ["html", "head", "body"]
        assert tree.find("body").text == "just text"

    def test_implied_head_and_body(self):
        """Metadata before the content goes to <head>, the rest to <body>."""
        tree = parse_document(
            '<!DOCTYPE html>\n<html lang="en">\n<meta charset="utf-8">\n'
            "<title>T</title>\n<p>Hi</p>\n</html>\n"
        )

        head, body = tree.root.children
        assert [c.tag_name for c in head.children] == ["meta", "title"]
        assert [c.tag_name for c in body.children] == ["p"]

    def test_none_rejected(self):
        with pytest.raises(DocumentParseError):
            parse_document(None)

    def test_block_closes_paragraph(self):
        """A <div> start tag ends the open <p>; the two become siblings."""
        tree = parse_document("<p><div>x</div></p>")

        assert tree.find("p").children == []
        assert tree.find("div").parent.tag_name == "body"

    def test_implied_list_item_end(self):
        tree = parse_document("<ul><li>a<li>b</ul>")

        items = tree.find_all("li")
        assert [li.text for li in items] == ["a", "b"]
        assert all(li.parent.tag_name == "ul" for li in items)

    def test_implied_table_sections(self):
        tree = parse_document("<table><tr><td>1</td></tr></table>")

        assert tree.find("tr").parent.tag_name == "tbody"

class TestElementNode:
    def test_attributes_in_order(self):
        tree = parse_document('<div ID="a" class="b c" data-x="1" hidden></div>')
        div = tree.find("div")

        assert div.attributes == [("id", "a"), ("class", "b c"), ("data-x", "1"), ("hidden", "")]

    def test_get_attribute(self):
        div = parse_document('<div title="t"></div>').find("div")

        assert div.get_attribute("TITLE") == "t"
        assert div.get_attribute("lang") is None
        assert div.has_attribute("title")
        assert not div.has_attribute("lang")

    def test_parent(self):
        tree = parse_document("<ul><li>x</li></ul>")

        li = tree.find("li")
        assert li.parent.tag_name == "ul"
        assert tree.find("ul").parent.tag_name == "body"
        assert tree.root.parent is None

    def test_children_elements_only(self):
        ul = parse_document("<ul>\n  <li>a</li>\n  <!-- c -->\n  <li>b</li>\n</ul>").find("ul")

        assert [c.tag_name for c in ul.children] == ["li", "li"]

    def test_has_child_nodes(self):
        tree = parse_document("<div></div><p>text</p><span><!-- c --></span><b><i></i></b>")

        assert not tree.find("div").has_child_nodes()
        assert tree.find("p").has_child_nodes()
        # A comment alone is not content
        assert not tree.find("span").has_child_nodes()
        assert tree.find("b").has_child_nodes()

    def test_text(self):
        p = parse_document("<p> Hello <b>World</b></p>").find("p")

        assert p.text.strip() == "Hello World"

    def test_fragment(self):
        p = parse_document("<p>" + "a" * 300 + "</p>").find("p")

        assert p.fragment(10) == "<p>aaaaaaa"
        assert len(p.fragment()) == 200

    def test_no_source_positions(self):
        """html5lib records no positions; both read as None."""
        tree = parse_document("<div>\n\n    <span>x</span></div>")

        span = tree.find("span")
        assert span.line is None
        assert span.column is None

    def test_iter_preorder(self):
        tree = parse_document(
            "<section><div><span></span></div><p></p></section><aside></aside>"
        )

        assert [e.tag_name for e in tree.iter_elements()] == [
            "html", "head", "body", "section", "div", "span", "p", "aside",
        ]
        assert [e.tag_name for e in tree.find("section").iter()] == ["section", "div", "span", "p"]

    def test_equality_by_element(self):
        tree = parse_document("<p></p><p></p>")
        first, second = tree.find_all("p")

        assert first == tree.find("p")
        assert first != second
        assert len({first, tree.find("p"), second}) == 2

    def test_find_with_attribute(self):
        tree = parse_document(
            '<head><meta name="a"><meta http-equiv="Content-Type" content="x"></head>'
        )
        head = tree.find("head")

        assert head.find_with_attribute("meta", "charset") is None
        found = head.find_with_attribute("meta", "http-equiv", "content-type")
        assert isinstance(found, ElementNode)
        assert found.get_attribute("content") == "x"
        assert tree.find_with_attribute("meta", "name").get_attribute("name") == "a"
