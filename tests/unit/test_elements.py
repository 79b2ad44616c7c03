#!/usr/bin/env python3
"""
Test element HTML: lists, tables, code and the simple block types.
"""

from bs4 import BeautifulSoup

from slide_renderer.elements import indent_level, parse_list_items, render_element, render_list, render_table
from slide_renderer.models import SlideElement


def _soup(html):
    return BeautifulSoup(html, "html.parser")


class TestLists:
    def test_indent_level(self):
        assert indent_level("- a") == 0
        assert indent_level("  - a") == 1
        assert indent_level("\t- a") == 1
        assert indent_level("\t  - a") == 2
        assert indent_level("   - a") == 1

    def test_continuation_lines(self):
        items = parse_list_items("- first\n  still first\n- second")
        assert [text for _, _, text in items] == ["first\nstill first", "second"]

    def test_nested_list(self):
        soup = _soup(render_list("- a\n  - a1\n  - a2\n- b"))
        top = soup.find("ul")
        assert [li.find(string=True, recursive=False) for li in top.find_all("li", recursive=False)] == ["a", "b"]
        assert [li.get_text() for li in top.li.ul.find_all("li")] == ["a1", "a2"]

    def test_ordered_list(self):
        soup = _soup(render_list("1. one\n2. two"))
        assert soup.ol is not None
        assert len(soup.ol.find_all("li")) == 2

    def test_deep_jump_nests_one_level(self):
        soup = _soup(render_list("- a\n      - deep"))
        assert soup.ul.li.ul.li.get_text() == "deep"

    def test_inline_markup_in_items(self):
        soup = _soup(render_list("- **bold** item"))
        assert soup.li.strong.get_text() == "bold"


class TestTables:
    def test_header_body_and_alignment(self):
        soup = _soup(render_table("| A | B |\n|:--|--:|\n| 1 | 2 |\n| 3 |"))
        assert [th.get_text() for th in soup.select("thead th")] == ["A", "B"]
        rows = soup.select("tbody tr")
        assert len(rows) == 2
        # Short rows are padded
        assert len(rows[1].find_all("td")) == 2
        assert rows[0].td["style"] == "text-align: left"
        assert rows[0].find_all("td")[1]["style"] == "text-align: right"

    def test_header_only(self):
        soup = _soup(render_table("| A | B |"))
        assert len(soup.select("thead th")) == 2
        assert soup.select("tbody tr") == []

    def test_empty(self):
        assert render_table("   \n") == ""


class TestBlocks:
    def test_heading_level_is_clamped(self):
        assert render_element(SlideElement(type="heading", content="x", level=9), None).startswith("<h6>")
        assert render_element(SlideElement(type="heading", content="x", level=0), None).startswith("<h1>")

    def test_code_is_escaped_and_tagged(self):
        html = render_element(SlideElement(type="code", content="a < b", language="python"), None)
        soup = _soup(html)
        assert soup.code["class"] == ["language-python"]
        assert soup.code.get_text() == "a < b"

    def test_code_without_language(self):
        html = render_element(SlideElement(type="code", content="x = 1"), None)
        assert html == "<pre><code>x = 1</code></pre>"

    def test_blockquote_strips_markers(self):
        html = render_element(SlideElement(type="blockquote", content="> quoted\n> more"), None)
        assert html == "<blockquote>quoted<br>more</blockquote>"

    def test_math_and_kicker(self):
        assert render_element(SlideElement(type="math", content="a<b"), None) == '<div class="math-block">a&lt;b</div>'
        assert render_element(SlideElement(type="kicker", content="Intro"), None) == '<div class="kicker">Intro</div>'

    def test_image_figure(self, context):
        soup = _soup(render_element(SlideElement.from_dict({"type": "image", "content": "a.png"}), context))
        assert soup.select_one("figure.image-figure img")["src"] == "a.png"
