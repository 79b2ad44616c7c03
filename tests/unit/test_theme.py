#!/usr/bin/env python3
"""Tests for mode resolution and theme/frontmatter CSS variables."""

import pytest

from slide_renderer.context import RenderContext
from slide_renderer.css_utils import extract_css_variables, format_number, strip_fixed_typography
from slide_renderer.models import Config, Theme, ThemeBackground, ThemeModeData, ThemePreset, ThemeTemplate
from slide_renderer.theme import (
    font_scale_css,
    frontmatter_css,
    generate_theme_css,
    resolve_heading_color,
    resolve_layout_background,
    resolve_mode,
)


@pytest.fixture
def theme():
    return Theme(
        template=ThemeTemplate(name="Test", title_font="Georgia", body_font="Inter"),
        presets=[ThemePreset(light_title_text_color="#101010", light_bg_gradient=["#ffffff", "#eeeeee"])],
        css=".slide h1 { font-size: 48px; font-weight: 700; color: red; }",
        theme_json={
            "light": ThemeModeData(
                heading_colors={"h1": ["#aa0000"], "h2": ["#00aa00", "#0000aa"]},
                layout_backgrounds={
                    "general": ThemeBackground(color="#fafafa"),
                    "cover": ThemeBackground(type="gradient", colors=["#111111", "#222222"]),
                },
            )
        },
    )


@pytest.mark.parametrize(
    "slide_mode, default_mode, scheme, expected",
    [
        (None, "light", "dark", "light"),
        ("dark", "light", "light", "dark"),
        (None, "system", "dark", "dark"),
        ("system", "dark", "light", "light"),
        (None, None, "light", "light"),
    ],
)
def test_resolve_mode(slide_mode, default_mode, scheme, expected):
    assert resolve_mode(slide_mode, default_mode, scheme) == expected


class TestHeadingColors:
    def test_theme_heading_colour(self, theme):
        assert resolve_heading_color(Config(), theme, "light", 1) == "#aa0000"

    def test_multi_stop_heading_is_gradient(self, theme):
        assert resolve_heading_color(Config(), theme, "light", 2) == "linear-gradient(to right, #00aa00, #0000aa)"

    def test_falls_back_to_preset_title(self, theme):
        assert resolve_heading_color(Config(), theme, "light", 3) == "#101010"

    def test_frontmatter_title_beats_theme(self, theme):
        assert resolve_heading_color(Config(light_title_text="#123456"), theme, "light", 1) == "#123456"

    def test_frontmatter_heading_beats_all(self, theme):
        config = Config(light_title_text="#123456", light_h1_color=["#654321"])
        assert resolve_heading_color(config, theme, "light", 1) == "#654321"


class TestLayoutBackgrounds:
    def test_theme_gradient(self, theme):
        assert resolve_layout_background(Config(), theme, "light", "cover") == "linear-gradient(135deg, #111111, #222222)"

    def test_general_fallback(self, theme):
        assert resolve_layout_background(Config(), theme, "light", "section") == "#fafafa"

    def test_frontmatter_override(self, theme):
        assert resolve_layout_background(Config(light_bg_cover="#ff0000"), theme, "light", "cover") == "#ff0000"

    def test_no_theme(self):
        assert resolve_layout_background(Config(), None, "dark", "title") is None


class TestThemeCss:
    def test_export_keeps_typography(self, theme):
        css = generate_theme_css(theme, "export")
        assert "font-size: 48px" in css
        variables = extract_css_variables(css)
        assert variables["light-title-text"] == "#101010"
        assert variables["light-h1-color"] == "#aa0000"
        assert variables["light-bg-gradient"] == "#ffffff, #eeeeee"

    @pytest.mark.parametrize("context_name", ["thumbnail", "preview", "presentation"])
    def test_scaled_contexts_strip_typography(self, theme, context_name):
        css = generate_theme_css(theme, context_name)
        assert "font-size" not in css
        assert "font-weight" not in css
        assert "color: red" in css

    def test_no_preset(self, theme):
        theme.presets = []
        assert generate_theme_css(theme, "thumbnail") == ""
        assert generate_theme_css(theme, "export") == theme.css

    def test_no_theme(self):
        assert generate_theme_css(None) == ""


def test_strip_fixed_typography():
    css = "h1 { font-size: 2em; letter-spacing: 1px; color: blue; }"
    assert strip_fixed_typography(css) == "h1 {   color: blue; }"


class TestFrontmatterCss:
    def test_only_set_values_are_emitted(self):
        css = frontmatter_css(Config(), RenderContext())
        variables = extract_css_variables(css)
        assert "title-font" not in variables
        assert "accent1" not in variables

    def test_fonts_scales_and_spacing(self):
        config = Config.from_dict({
            "titleFont": "Inter",
            "bodyFontSize": 20,
            "content-left": 8,
            "accent1": "#ff0000",
            "lightBackground": "#fefefe",
        })
        variables = extract_css_variables(frontmatter_css(config, RenderContext()))
        assert variables["title-font"] == "'Inter', sans-serif"
        assert variables["body-font-scale"] == "1.2"
        assert variables["content-left"] == "8"
        assert variables["accent1"] == "#ff0000"
        assert variables["light-background"] == "#fefefe"

    def test_weight_is_validated(self, diagnostics):
        context = RenderContext(font_weights={"Inter": [400, 700]}, diagnostics=diagnostics)
        config = Config(title_font="Inter", title_font_weight=600)
        variables = extract_css_variables(frontmatter_css(config, context))
        assert variables["title-font-weight"] == "700"
        assert "font-handling" in diagnostics.topics()

    def test_non_finite_values_are_skipped(self):
        config = Config(content_left=float("inf"), line_height=float("nan"), body_font_size=float("-inf"))
        variables = extract_css_variables(frontmatter_css(config, RenderContext()))
        assert "content-left" not in variables
        assert "line-height" not in variables
        assert "body-font-scale" not in variables

    def test_dynamic_background_stops(self):
        config = Config(dark_dynamic_background=["#000000", "#333333"])
        variables = extract_css_variables(frontmatter_css(config, RenderContext()))
        assert variables["dark-bg-gradient"] == "#000000, #333333"


@pytest.mark.parametrize(
    "offset, content_offset, expected",
    [
        (None, None, ":root { --font-scale: 1; --content-top-offset: 0%; }"),
        (20, 5, ":root { --font-scale: 1.2; --content-top-offset: 5%; }"),
        (-90, 50, ":root { --font-scale: 0.5; --content-top-offset: 20%; }"),
    ],
)
def test_font_scale_css(offset, content_offset, expected):
    config = Config(font_size_offset=offset, content_top_offset=content_offset)
    assert font_scale_css(config) == expected


def test_font_scale_css_ignores_non_finite():
    config = Config(font_size_offset=float("nan"), content_top_offset=float("inf"))
    assert font_scale_css(config) == ":root { --font-scale: 1; --content-top-offset: 0%; }"


@pytest.mark.parametrize("value, expected", [
    (1.0, "1"),
    (1.25, "1.25"),
    (float("nan"), "0"),
    (float("inf"), "0"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected
