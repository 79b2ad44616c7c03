"""
Theme and frontmatter CSS custom properties.

Two ``:root`` blocks are produced per document: the theme block (preset
colours, theme.json heading colours and layout backgrounds, then the
theme's own CSS) and the frontmatter block, which comes later and
therefore overrides it. Values whose precedence cannot be expressed by
cascade order alone (heading colours, layout backgrounds) are resolved
here on every call.
"""
import logging
from typing import List, Optional, Tuple

from .context import RenderContext
from .css_utils import color_or_gradient, declarations, finite_or, format_number, root_block, strip_fixed_typography
from .fonts import font_family_value, validated_font_weight
from .models import Config, Theme, ThemeBackground

logger = logging.getLogger(__name__)

SCALED_CONTEXTS = ("thumbnail", "preview", "presentation")
HEADING_LEVELS = (1, 2, 3, 4)
LAYOUT_BACKGROUNDS = ("cover", "title", "section")


def resolve_mode(slide_mode: Optional[str], default_mode: Optional[str], system_scheme: str = "light") -> str:
    """Per-slide mode beats the presentation default; ``system`` becomes *system_scheme*."""
    mode = slide_mode or default_mode or "light"
    if mode == "system":
        mode = system_scheme
    return "dark" if mode == "dark" else "light"


def background_value(background: Optional[ThemeBackground]) -> Optional[str]:
    if background is None:
        return None
    if background.type == "solid" or not background.colors:
        return background.color or (background.colors[0] if background.colors else None)
    if len(background.colors) == 1:
        return background.colors[0]
    return f"linear-gradient(135deg, {', '.join(background.colors)})"


def theme_heading_color(theme: Optional[Theme], mode: str, level: int) -> Optional[str]:
    data = theme.mode_data(mode) if theme else None
    if data is None:
        return None
    return color_or_gradient(data.heading_colors.get(f"h{level}"))


def theme_title_color(theme: Optional[Theme], mode: str) -> Optional[str]:
    preset = theme.preset if theme else None
    if preset is None:
        return None
    return preset.dark_title_text_color if mode == "dark" else preset.light_title_text_color


def resolve_heading_color(config: Config, theme: Optional[Theme], mode: str, level: int) -> Optional[str]:
    """
    Colour of an H1-H4 heading in *mode*.

    Frontmatter per-heading colour, then frontmatter title colour, then
    the theme's per-heading colour, then the theme's title colour.
    """
    explicit = color_or_gradient(config.heading_color(mode, level))
    if explicit:
        return explicit
    general = getattr(config, f"{mode}_title_text")
    if general:
        return general
    return theme_heading_color(theme, mode, level) or theme_title_color(theme, mode)


def resolve_layout_background(config: Config, theme: Optional[Theme], mode: str, layout: str) -> Optional[str]:
    """Frontmatter override, then the theme's layout background, then its general background."""
    override = config.layout_background(mode, layout)
    if override:
        return override
    data = theme.mode_data(mode) if theme else None
    if data is None:
        return None
    return background_value(data.layout_backgrounds.get(layout)) or background_value(
        data.layout_backgrounds.get("general")
    )


def generate_theme_css(theme: Optional[Theme], context_name: str = "export") -> str:
    """Theme variables plus the theme stylesheet (typography stripped for scaled contexts)."""
    if theme is None:
        return ""
    css = strip_fixed_typography(theme.css) if context_name in SCALED_CONTEXTS else theme.css
    preset = theme.preset
    if preset is None:
        logger.debug("Theme '%s' has no presets", theme.name)
        return "" if context_name == "thumbnail" else css

    pairs: List[Tuple[str, Optional[str]]] = [
        ("title-font", f"{preset.title_font or theme.template.title_font}, sans-serif"),
        ("body-font", f"{preset.body_font or theme.template.body_font}, sans-serif"),
        ("light-title-text", preset.light_title_text_color),
        ("dark-title-text", preset.dark_title_text_color),
        ("light-body-text", preset.light_body_text_color),
        ("dark-body-text", preset.dark_body_text_color),
        ("light-background", preset.light_background_color),
        ("dark-background", preset.dark_background_color),
        ("light-accent1", preset.light_accent1 or preset.accent1),
        ("dark-accent1", preset.dark_accent1 or preset.accent1),
    ]
    pairs += [(f"accent{i}", getattr(preset, f"accent{i}")) for i in range(1, 7)]
    pairs += [
        ("light-bg-gradient", ", ".join(preset.light_bg_gradient or []) or "none"),
        ("dark-bg-gradient", ", ".join(preset.dark_bg_gradient or []) or "none"),
    ]
    for mode in ("light", "dark"):
        data = theme.mode_data(mode)
        if data is None:
            continue
        pairs += [(f"{mode}-h{level}-color", theme_heading_color(theme, mode, level)) for level in HEADING_LEVELS]
        pairs += [(f"{mode}-header-text", data.header_text), (f"{mode}-footer-text", data.footer_text)]
        general = background_value(data.layout_backgrounds.get("general"))
        for layout in LAYOUT_BACKGROUNDS:
            pairs.append((f"{mode}-bg-{layout}", background_value(data.layout_backgrounds.get(layout)) or general))

    return root_block(declarations(pairs)) + "\n" + css


def _scale(offset: Optional[float]) -> Optional[str]:
    offset = finite_or(offset)
    if offset is None:
        return None
    return format_number(1 + offset / 100)


def _unit(value: Optional[float]) -> Optional[str]:
    value = finite_or(value)
    return None if value is None else format_number(value)


def generate_css_variables(config: Config, context: RenderContext) -> List[str]:
    """Custom property lines for everything the frontmatter sets."""
    theme = context.theme
    template_fonts = {
        "title": theme.template.title_font if theme else None,
        "body": theme.template.body_font if theme else None,
    }
    pairs: List[Tuple[str, Optional[str]]] = []

    for role in ("title", "body", "header", "footer"):
        family = getattr(config, f"{role}_font")
        pairs.append((f"{role}-font", font_family_value(family)))
        requested = getattr(config, f"{role}_font_weight")
        effective_family = family or getattr(config, "body_font") or template_fonts.get(role) or template_fonts["body"]
        weight = validated_font_weight(role, effective_family, requested, context)
        pairs.append((f"{role}-font-weight", None if weight is None else str(weight)))
    for role in ("title", "body", "header", "footer"):
        pairs.append((f"{role}-font-scale", _scale(getattr(config, f"{role}_font_size"))))

    pairs += [
        ("headline-spacing-before", _unit(config.headline_spacing_before)),
        ("headline-spacing-after", _unit(config.headline_spacing_after)),
        ("list-item-spacing", _unit(config.list_item_spacing)),
        ("line-height", _unit(config.line_height)),
        ("header-top", _unit(config.header_top)),
        ("footer-bottom", _unit(config.footer_bottom)),
        ("title-top", _unit(config.title_top)),
        ("content-top", _unit(config.content_top)),
        ("content-left", _unit(config.content_left)),
        ("content-right", _unit(config.content_right)),
        ("slide-unit-scale", _unit(config.slide_unit_scale)),
    ]
    pairs += [(f"accent{i}", getattr(config, f"accent{i}")) for i in range(1, 7)]

    for mode in ("light", "dark"):
        pairs += [
            (f"{mode}-background", getattr(config, f"{mode}_background")),
            (f"{mode}-title-text", getattr(config, f"{mode}_title_text")),
            (f"{mode}-body-text", getattr(config, f"{mode}_body_text")),
            (f"{mode}-header-text", getattr(config, f"{mode}_header_text")),
            (f"{mode}-footer-text", getattr(config, f"{mode}_footer_text")),
        ]
        pairs += [
            (f"{mode}-h{level}-color", resolve_heading_color(config, theme, mode, level))
            for level in HEADING_LEVELS
        ]
        pairs += [
            (f"{mode}-bg-{layout}", resolve_layout_background(config, theme, mode, layout))
            for layout in LAYOUT_BACKGROUNDS
        ]
        stops = config.dynamic_background(mode)
        if stops:
            pairs.append((f"{mode}-bg-gradient", ", ".join(stops)))

    return declarations(pairs)


def frontmatter_css(config: Config, context: RenderContext) -> str:
    return root_block(generate_css_variables(config, context))


def font_scale_css(config: Config) -> str:
    """Global font scale (clamped 0.5-1.5) and content offset (clamped 0-20%)."""
    scale = 1 + finite_or(config.font_size_offset, 0.0) / 100
    scale = max(0.5, min(1.5, scale))
    offset = max(0.0, min(20.0, finite_or(config.content_top_offset, 0.0)))
    return (
        f":root {{ --font-scale: {format_number(scale)};"
        f" --content-top-offset: {format_number(offset)}%; }}"
    )
