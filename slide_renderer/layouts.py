"""
Layout dispatch.

Each layout is a pure function of the slide's pre-partitioned elements;
``LAYOUT_RENDERERS`` is the closed table of known layouts. The half-image
layouts replace the whole slide structure, so the renderer builds their
frame itself and only asks this table for the content-panel body.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from .columns import COLUMN_LAYOUTS, plan_auto_columns, plan_explicit_columns, render_column_block
from .context import RenderContext
from .footnotes import render_footnote_list
from .models import Footnote, Slide, SlideElement

logger = logging.getLogger(__name__)

ElementRenderer = Callable[[SlideElement], str]

HALF_IMAGE_LAYOUTS = ("half-image", "half-image-horizontal")


@dataclass
class ElementGroups:
    """Visible elements of one slide, split the way layouts consume them."""
    elements: List[SlideElement] = field(default_factory=list)
    headings: List[SlideElement] = field(default_factory=list)  # headings and kickers
    images: List[SlideElement] = field(default_factory=list)
    body: List[SlideElement] = field(default_factory=list)
    footnotes: List[Footnote] = field(default_factory=list)

    @property
    def text(self) -> List[SlideElement]:
        return [e for e in self.elements if e.type != "image"]

    @property
    def image_first(self) -> bool:
        return bool(self.elements) and self.elements[0].type == "image"


def partition_elements(slide: Slide, footnotes: Optional[Sequence[Footnote]] = None) -> ElementGroups:
    visible = slide.visible_elements
    return ElementGroups(
        elements=visible,
        headings=[e for e in visible if e.type in ("heading", "kicker")],
        images=[e for e in visible if e.type == "image"],
        body=[e for e in visible if e.type not in ("heading", "kicker", "image")],
        footnotes=list(slide.footnotes if footnotes is None else footnotes),
    )


def _join(elements: Sequence[SlideElement], render: ElementRenderer) -> str:
    return "\n".join(render(e) for e in elements)


def _centered(name: str) -> Callable[[ElementGroups, ElementRenderer], str]:
    def layout(groups: ElementGroups, render: ElementRenderer) -> str:
        return f'<div class="{name}-content">{_join(groups.elements, render)}</div>'
    layout.__name__ = f"render_{name}_layout"
    return layout


def render_default_layout(groups: ElementGroups, render: ElementRenderer) -> str:
    return render_column_block(plan_auto_columns(groups.elements), render)


def _explicit(layout_name: str) -> Callable[[ElementGroups, ElementRenderer], str]:
    count, ratio = COLUMN_LAYOUTS[layout_name]

    def layout(groups: ElementGroups, render: ElementRenderer) -> str:
        return render_column_block(plan_explicit_columns(groups.elements, count, ratio), render)
    layout.__name__ = f"render_{count}_column_{ratio.replace('-', '_')}_layout"
    return layout


def render_full_image_layout(groups: ElementGroups, render: ElementRenderer) -> str:
    """Images are drawn by the background layer; only text sits in the content area."""
    if not groups.text:
        return ""
    return f'<div class="slot-header">{_join(groups.text, render)}</div>'


def render_caption_layout(groups: ElementGroups, render: ElementRenderer) -> str:
    parts = [
        f'<div class="slot-title-bar">{_join(groups.headings, render)}</div>',
        f'<div class="slot-image">{_join(groups.images, render)}</div>',
    ]
    if groups.body:
        parts.append(f'<div class="slot-caption">{_join(groups.body, render)}</div>')
    return "\n".join(parts)


def render_footnotes_layout(groups: ElementGroups, render: ElementRenderer) -> str:
    header = [e for e in groups.elements if e.is_header]
    rest = [e for e in groups.elements if not e.is_header]
    return (
        f'<div class="slot-header">{_join(header, render)}</div>\n'
        f'<div class="slot-footnotes">{_join(rest, render)}{render_footnote_list(groups.footnotes)}</div>'
    )


def render_half_image_content(groups: ElementGroups, render: ElementRenderer) -> str:
    return _join(groups.text, render)


LAYOUT_RENDERERS: Dict[str, Callable[[ElementGroups, ElementRenderer], str]] = {
    "cover": _centered("cover"),
    "title": _centered("title"),
    "section": _centered("section"),
    "default": render_default_layout,
    "1-column": _explicit("1-column"),
    "2-columns": _explicit("2-columns"),
    "3-columns": _explicit("3-columns"),
    "2-columns-1+2": _explicit("2-columns-1+2"),
    "2-columns-2+1": _explicit("2-columns-2+1"),
    "full-image": render_full_image_layout,
    "caption": render_caption_layout,
    "half-image": render_half_image_content,
    "half-image-horizontal": render_half_image_content,
    "footnotes": render_footnotes_layout,
}


def normalize_layout(layout: Optional[str], context: Optional[RenderContext] = None) -> str:
    """Known layout tag, or ``default`` for anything else."""
    tag = (layout or "default").strip()
    if tag in LAYOUT_RENDERERS:
        return tag
    if context is not None:
        context.emit("layout", f"Unknown layout {tag!r}; using default", layout=tag)
    else:
        logger.debug("Unknown layout %r; using default", tag)
    return "default"


def render_layout(
    layout: str,
    groups: ElementGroups,
    render: ElementRenderer,
    context: Optional[RenderContext] = None,
) -> str:
    return LAYOUT_RENDERERS[normalize_layout(layout, context)](groups, render)
