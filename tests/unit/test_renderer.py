#!/usr/bin/env python3
"""
Test slide and document rendering end to end.
"""

import pytest
from bs4 import BeautifulSoup

from slide_renderer.context import RenderContext
from slide_renderer.renderer import SlideRenderer
from slide_renderer.theme_loader import get_theme


def _soup(html):
    return BeautifulSoup(html, "html.parser")


def _slide_tag(renderer, index, **kwargs):
    return _soup(renderer.render_slide(renderer.slides[index], index, **kwargs)).section


def _p(text, **extra):
    return {"type": "paragraph", "content": text, **extra}


def _img(src):
    return {"type": "image", "content": src, "imageData": {"src": src, "alt": "pic"}}


def _h(text, level=1):
    return {"type": "heading", "content": text, "level": level}


class TestSlideFrame:
    def test_default_slide(self, make_presentation, context):
        renderer = SlideRenderer(make_presentation({"elements": [_h("Hello"), _p("World")]}), context)
        section = _slide_tag(renderer, 0)
        assert section["class"] == ["slide", "default-container", "light"]
        assert section["data-layout"] == "default"
        assert section.select_one(".slide-body > .slide-content.layout-default .slot-header h1").get_text() == "Hello"
        assert section.select_one(".column p").get_text() == "World"

    def test_container_classes(self, make_presentation, context):
        doc = make_presentation(
            {"metadata": {"layout": "cover"}, "elements": [_h("Deck")]},
            {"metadata": {"layout": "3-columns"}, "elements": []},
            {"metadata": {"layout": "footnotes"}, "elements": []},
        )
        renderer = SlideRenderer(doc, context)
        assert "cover-container" in _slide_tag(renderer, 0)["class"]
        assert _slide_tag(renderer, 0).select_one(".cover-content h1") is not None
        assert "columns-container" in _slide_tag(renderer, 1)["class"]
        assert "footnotes-container" in _slide_tag(renderer, 2)["class"]

    def test_unknown_layout_falls_back(self, make_presentation, context, diagnostics):
        renderer = SlideRenderer(make_presentation({"metadata": {"layout": "mosaic"}, "elements": [_p("x")]}), context)
        section = _slide_tag(renderer, 0)
        assert section["data-layout"] == "default"
        assert "layout" in diagnostics.topics()

    def test_mode_override_and_class(self, make_presentation, context):
        doc = make_presentation({"metadata": {"mode": "dark", "class": "quiet"}, "elements": []}, mode="light")
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert {"dark", "mode-override", "quiet"} <= set(section["class"])

    def test_system_mode_uses_context_scheme(self, make_presentation):
        doc = make_presentation({"elements": []}, mode="system")
        section = _slide_tag(SlideRenderer(doc, RenderContext(system_scheme="dark")), 0)
        assert "dark" in section["class"]

    def test_hidden_elements_skipped(self, make_presentation, context):
        doc = make_presentation({"elements": [_p("shown"), _p("secret", visible=False)]})
        html = SlideRenderer(doc, context).render_slide(doc.slides[0], 0)
        assert "shown" in html
        assert "secret" not in html


class TestNumbering:
    def test_hidden_slides_not_counted(self, make_presentation, context):
        doc = make_presentation(
            {"elements": [_p("a")]},
            {"elements": [_p("b")], "hidden": True},
            {"elements": [_p("c")]},
        )
        renderer = SlideRenderer(doc, context)
        assert [renderer.visible_slide_number(i) for i in range(3)] == [1, None, 2]
        assert renderer.visible_slide_number(7) is None

        hidden = _slide_tag(renderer, 1)
        assert "hidden-slide" in hidden["class"]
        assert hidden["data-hidden"] == "true"
        assert not hidden.has_attr("data-visible-number")

        third = _slide_tag(renderer, 2)
        assert third["data-visible-number"] == "2"
        assert third.select_one(".footer-right").get_text() == "2"

    def test_slide_numbers_can_be_disabled(self, make_presentation, context):
        doc = make_presentation({"elements": []}, showSlideNumbers=False, footerRight="ACME")
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert section.select_one(".footer-right").get_text() == "ACME"


class TestHeaderFooter:
    def test_header_only_when_configured(self, make_presentation, context):
        section = _slide_tag(SlideRenderer(make_presentation({"elements": []}), context), 0)
        assert section.select_one("header.slide-header") is None
        assert section.select_one("footer.slide-footer") is not None

    def test_header_slots_drop_links(self, make_presentation, context):
        doc = make_presentation({"elements": []}, headerLeft="[Home](https://example.com)", headerRight="**Q3**")
        section = _slide_tag(SlideRenderer(doc, context), 0)
        header = section.select_one("header.slide-header")
        assert header.select_one(".header-left").get_text() == "Home"
        assert header.find("a") is None
        assert header.select_one(".header-right strong").get_text() == "Q3"


class TestHalfImage:
    @pytest.mark.parametrize(
        "layout, image_first, expected",
        [
            ("half-image", True, "image-left"),
            ("half-image", False, "image-right"),
            ("half-image-horizontal", True, "image-top"),
            ("half-image-horizontal", False, "image-bottom"),
        ],
    )
    def test_orientation(self, make_presentation, context, layout, image_first, expected):
        elements = [_img("a.png"), _p("text")] if image_first else [_p("text"), _img("a.png")]
        doc = make_presentation({"metadata": {"layout": layout}, "elements": elements})
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert expected in section["class"]
        split = "split-horizontal" if layout.endswith("horizontal") else "split-vertical"
        assert split in section["class"]
        assert section.select_one(".half-image-panel img")["src"] == "a.png"
        content = section.select_one(".half-content-panel")
        assert content.select_one("p").get_text() == "text"
        assert content.select_one("footer.slide-footer") is not None

    def test_hidden_first_image_is_ignored(self, make_presentation, context):
        elements = [dict(_img("x.png"), visible=False), _p("text"), _img("a.png")]
        doc = make_presentation({"metadata": {"layout": "half-image"}, "elements": elements})
        assert "image-right" in _slide_tag(SlideRenderer(doc, context), 0)["class"]


class TestImageLayouts:
    def test_full_image(self, make_presentation, context):
        doc = make_presentation({"metadata": {"layout": "full-image"}, "elements": [_img("a.png"), _h("Over")]})
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert section.select_one(".slide-image-background img")["src"] == "a.png"
        assert section.select_one(".slide-content .slot-header h1").get_text() == "Over"
        assert section.select_one(".slide-content img") is None

    def test_caption(self, make_presentation, context):
        doc = make_presentation({
            "metadata": {"layout": "caption"},
            "elements": [_h("Figure", 2), _img("a.png"), _p("A caption")],
        })
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert section.select_one(".slot-title-bar h2").get_text() == "Figure"
        assert section.select_one(".slot-image figure img")["src"] == "a.png"
        assert section.select_one(".slot-caption p").get_text() == "A caption"

    def test_caption_without_text(self, make_presentation, context):
        doc = make_presentation({"metadata": {"layout": "caption"}, "elements": [_img("a.png")]})
        assert _slide_tag(SlideRenderer(doc, context), 0).select_one(".slot-caption") is None


class TestFootnotes:
    def _doc(self, make_presentation, **frontmatter):
        return make_presentation(
            {
                "metadata": {"layout": "2-columns"},
                "elements": [_p("claim[^1]", columnIndex=0), _p("more", columnIndex=1)],
                "footnotes": [{"id": "1", "content": "Source"}],
            },
            **frontmatter,
        )

    def test_suppressed_by_default(self, make_presentation, context):
        section = _slide_tag(SlideRenderer(self._doc(make_presentation), context), 0)
        assert section.select_one(".slide-footnotes") is None
        assert section.select_one("sup.footnote-ref")["data-footnote"] == "1"

    def test_shown_with_flag(self, make_presentation, context):
        doc = self._doc(make_presentation, showFootnotesOnSlides=True)
        block = _slide_tag(SlideRenderer(doc, context), 0).select_one(".slide-footnotes.columns-2")
        assert block is not None
        assert block["style"] == "width: calc((100% - 10 * var(--slide-unit) - 3 * var(--slide-unit)) / 2);"

    def test_unknown_layout_uses_detected_columns(self, make_presentation, context):
        doc = make_presentation(
            {
                "metadata": {"layout": "weird"},
                "elements": [_p("claim[^1]", columnIndex=0), _p("more", columnIndex=1)],
                "footnotes": [{"id": "1", "content": "Source"}],
            },
            showFootnotesOnSlides=True,
        )
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert section["data-layout"] == "default"
        block = section.select_one(".slide-footnotes.columns-2")
        assert block is not None
        assert block["style"].startswith("width: calc(")

    def test_footnotes_layout_collects_deck(self, make_presentation, context):
        doc = make_presentation(
            {"elements": [_p("a[^1]")], "footnotes": [{"id": "1", "content": "First"}]},
            {"elements": [_p("b[^2]")], "footnotes": [{"id": "2", "content": "Second"}]},
            {"metadata": {"layout": "footnotes"}, "elements": [_h("Notes")]},
        )
        section = _slide_tag(SlideRenderer(doc, context), 2)
        assert section.select_one(".slot-header h1").get_text() == "Notes"
        items = section.select(".slot-footnotes li")
        assert [li["data-footnote"] for li in items] == ["1", "2"]


class TestLayers:
    def test_background_and_overlay(self, make_presentation, context):
        doc = make_presentation(
            {"metadata": {"background": "bg.png", "backgroundOpacity": 40}, "elements": []},
            imageOverlay="https://example.com/grain.png",
        )
        section = _slide_tag(SlideRenderer(doc, context), 0)
        background = section.select_one(".slide-background")
        assert "url('bg.png')" in background["style"]
        assert "opacity: 0.4" in background["style"]
        overlay = section.select_one(".slide-overlay")
        assert "opacity: 0.5" in overlay["style"]
        children = [c["class"][0] for c in section.find_all(recursive=False)]
        assert children.index("slide-background") < children.index("slide-overlay") < children.index("slide-body")

    def test_dynamic_background_attribute(self, make_presentation, context):
        doc = make_presentation(
            {"elements": []},
            {"elements": []},
            useDynamicBackground="light",
            lightDynamicBackground=["#000000", "#ffffff"],
        )
        renderer = SlideRenderer(doc, context)
        assert _slide_tag(renderer, 1)["style"] == "background-color: rgb(255, 255, 255);"
        exported = _slide_tag(renderer, 0, mode_backgrounds=True)
        assert exported["data-bg-light"] == "rgb(0, 0, 0)"
        assert not exported.has_attr("data-bg-dark")

    def test_speaker_notes(self, make_presentation, context):
        doc = make_presentation({"elements": [], "speakerNotes": ["one", "two"]})
        renderer = SlideRenderer(doc, context)
        notes = _slide_tag(renderer, 0).select_one("aside.speaker-notes")
        assert notes.decode_contents() == "one<br/>two"
        assert _slide_tag(renderer, 0, render_speaker_notes=False).select_one("aside") is None


def test_render_error_is_contained(make_presentation, context, diagnostics, monkeypatch):
    doc = make_presentation({"elements": [_p("a")]})
    renderer = SlideRenderer(doc, context)

    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(renderer, "_render_slide", explode)
    section = _slide_tag(renderer, 0)
    assert "render-error" in section["class"]
    assert diagnostics.topics() == ["renderer"]


class TestDocuments:
    def test_thumbnail_document(self, make_presentation):
        context = RenderContext(theme=get_theme("zurich"))
        doc = make_presentation({"elements": [_h("Hi")], "speakerNotes": ["psst"]}, title="Deck")
        html = SlideRenderer(doc, context).render_thumbnail_html(0)
        soup = _soup(html)
        assert soup.body["class"] == ["slide-thumbnail", "theme-zurich"]
        assert len(soup.select("section.slide")) == 1
        assert soup.select_one("aside.speaker-notes") is None
        styles = [s.string or "" for s in soup.find_all("style")]
        assert len(styles) == 5
        theme_css = styles[2]
        assert ".slide" in theme_css
        assert "font-size" not in theme_css

    @pytest.mark.parametrize("method, body_class", [
        ("render_preview_html", "slide-preview"),
        ("render_presentation_slide_html", "slide-presentation"),
    ])
    def test_other_single_slide_contexts(self, make_presentation, context, method, body_class):
        renderer = SlideRenderer(make_presentation({"elements": []}), context)
        soup = _soup(getattr(renderer, method)(0))
        assert soup.body["class"] == [body_class]

    def test_missing_index_renders_empty_slide(self, make_presentation, context, diagnostics):
        html = SlideRenderer(make_presentation(), context).render_thumbnail_html(3)
        assert _soup(html).select_one("section.slide") is not None
        assert "renderer" in diagnostics.topics()

    def test_export_document(self, make_presentation, context):
        doc = make_presentation(
            {"elements": [_h("One")], "speakerNotes": ["note"]},
            {"elements": [_h("Two")], "hidden": True},
            title="Quarterly <Review>",
            author="Sam",
            transition="wobble",
            mode="dark",
        )
        soup = _soup(SlideRenderer(doc, context).render_export_html())
        assert soup.title.get_text() == "Quarterly <Review>"
        assert soup.find("meta", attrs={"name": "author"})["content"] == "Sam"
        assert soup.body["class"] == ["slide-export", "transition-fade"]
        assert soup.body["data-default-mode"] == "dark"
        slides = soup.select(".deck > section.slide")
        assert len(slides) == 2
        assert slides[1]["data-hidden"] == "true"
        assert soup.select_one("aside.speaker-notes").get_text() == "note"
        assert soup.select_one(".progress-bar") is not None
        assert soup.select_one(".export-controls .toggle-theme")["data-mode"] == "dark"
        assert soup.select_one(".export-controls .toggle-hidden") is not None
        assert "ArrowRight" in soup.script.string

    def test_export_without_progress(self, make_presentation, context):
        soup = _soup(SlideRenderer(make_presentation({"elements": []}, showProgress=False), context).render_export_html())
        assert soup.select_one(".progress-bar") is None


class TestOddInput:
    def test_negative_column_index(self, make_presentation, context, diagnostics):
        doc = make_presentation({"elements": [_p("stray", columnIndex=-1), _p("right", columnIndex=1)]})
        section = _slide_tag(SlideRenderer(doc, context), 0)
        assert "render-error" not in section["class"]
        columns = section.select(".slot-columns.columns-2 > .column")
        assert [c.get_text(strip=True) for c in columns] == ["stray", "right"]
        assert "renderer" not in diagnostics.topics()

    @pytest.mark.parametrize("value", ["nan", "Infinity", "-inf", 1e400])
    def test_non_finite_numbers_are_ignored(self, make_presentation, context, value):
        doc = make_presentation(
            {"elements": [_p("a", columnIndex=0), _p("b[^1]", columnIndex=1)], "footnotes": [{"id": "1", "content": "n"}]},
            contentLeft=value,
            fontSizeOffset=value,
            titleFontWeight=value,
            showFootnotesOnSlides=True,
        )
        html = SlideRenderer(doc, context).render_export_html()
        assert "--content-left:" not in html
        assert "--title-font-weight:" not in html
        soup = _soup(html)
        assert soup.select(".render-error") == []
        assert "--font-scale: 1;" in html
