"""
Footnote collection and placement.

On column layouts the footnote block is exactly as wide as the first
visual column, so its left edge and wrap width line up with the grid
above it. The width is emitted as a ``calc()`` expression in slide units.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .columns import COLUMN_GAPS, COLUMN_LAYOUTS, detected_column_count
from .css_utils import finite_or, format_number
from .inline import escape_html, render_inline
from .models import Config, Footnote, Slide

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 5


@dataclass(frozen=True)
class FootnoteGeometry:
    columns: int = 1
    ratio: str = "equal"
    width: Optional[str] = None  # None spans the content area

    @property
    def style(self) -> str:
        return f"width: {self.width};" if self.width else ""


def column_width_expr(
    columns: int,
    ratio: str = "equal",
    left: float = DEFAULT_MARGIN,
    right: float = DEFAULT_MARGIN,
) -> Optional[str]:
    """
    Width of the first visual column as a CSS length.

    ``(100% - margins - gaps)`` divided by the column count, or taken as
    1/3 (narrow-wide) or 2/3 (wide-narrow) for two-column ratio layouts.

    >>> column_width_expr(2)
    'calc((100% - 10 * var(--slide-unit) - 3 * var(--slide-unit)) / 2)'
    """
    if columns <= 1:
        return None
    gaps = COLUMN_GAPS.get(columns, COLUMN_GAPS[3]) * (columns - 1)
    content = (
        f"100% - {format_number(left + right)} * var(--slide-unit)"
        f" - {format_number(gaps)} * var(--slide-unit)"
    )
    if columns == 2 and ratio == "narrow-wide":
        return f"calc(({content}) / 3)"
    if columns == 2 and ratio == "wide-narrow":
        return f"calc(({content}) * 2 / 3)"
    return f"calc(({content}) / {columns})"


def footnote_geometry(slide: Slide, config: Config, layout: Optional[str] = None) -> FootnoteGeometry:
    """Footnote block geometry; *layout* is the normalized tag and defaults to the slide's own."""
    left = finite_or(config.content_left, DEFAULT_MARGIN)
    right = finite_or(config.content_right, DEFAULT_MARGIN)
    layout = layout or slide.layout
    if layout in COLUMN_LAYOUTS:
        columns, ratio = COLUMN_LAYOUTS[layout]
    elif layout == "default":
        columns, ratio = detected_column_count(slide.visible_elements), "equal"
    else:
        columns, ratio = 1, "equal"
    return FootnoteGeometry(columns, ratio, column_width_expr(columns, ratio, left, right))


def is_auto_footnotes_slide(slide: Slide) -> bool:
    """A slide generated only to hold footnotes: no elements, some footnotes."""
    return not slide.elements and bool(slide.footnotes)


def should_render_footnotes(slide: Slide, config: Config) -> bool:
    if slide.layout == "footnotes":
        return True
    if not slide.footnotes:
        return False
    return is_auto_footnotes_slide(slide) or bool(config.show_footnotes_on_slides)


def collect_footnotes(slides: Sequence[Slide]) -> List[Footnote]:
    """All footnotes of the deck; for a repeated id the first definition wins."""
    seen = {}
    for slide in slides:
        for note in slide.footnotes:
            if note.id not in seen:
                seen[note.id] = note
            elif note.content != seen[note.id].content:
                logger.debug("Footnote [^%s] redefined on slide %d; keeping the first", note.id, slide.index)
    return list(seen.values())


def render_footnote_list(footnotes: Sequence[Footnote]) -> str:
    items = []
    for note in footnotes:
        ref = escape_html(note.id)
        items.append(
            f'<li id="fn-{ref}" data-footnote="{ref}">'
            f'<span class="footnote-id">{ref}</span> '
            f'<span class="footnote-text">{render_inline(note.content)}</span></li>'
        )
    return '<ol class="footnotes-list">' + "".join(items) + "</ol>"


def render_footnote_block(footnotes: Sequence[Footnote], geometry: FootnoteGeometry) -> str:
    """Footnotes pinned to the bottom of an ordinary slide."""
    if not footnotes:
        return ""
    style = f' style="{geometry.style}"' if geometry.style else ""
    return (
        f'<div class="slide-footnotes columns-{geometry.columns}"{style}>'
        f"{render_footnote_list(footnotes)}</div>"
    )
