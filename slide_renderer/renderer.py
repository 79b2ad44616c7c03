"""
Slide renderer: turns a :class:`PresentationDocument` into HTML.

One renderer serves all four output contexts:

* ``thumbnail``, ``preview`` and ``presentation`` produce a standalone
  document holding a single slide, with theme typography replaced by the
  slide-unit scale;
* ``export`` produces one self-contained document with every slide and a
  small navigation script.

The renderer holds a default :class:`RenderContext`; every public method
also accepts a ``context`` argument so concurrent callers can use their
own snapshot without touching shared state.
"""
import logging
from typing import List, Optional

from .background import dynamic_background_color
from .context import RenderContext
from .elements import render_element
from .footnotes import collect_footnotes, footnote_geometry, render_footnote_block, should_render_footnotes
from .images import render_full_image_background, render_half_image_panel
from .inline import escape_html, render_inline
from .layouts import HALF_IMAGE_LAYOUTS, normalize_layout, partition_elements, render_layout
from .models import PresentationDocument, Slide
from .styles import BODY_CLASSES, base_styles, export_styles
from .templates import EXPORT_SCRIPT, render_template
from .theme import font_scale_css, frontmatter_css, generate_theme_css, resolve_mode

logger = logging.getLogger(__name__)

CONTAINER_CLASSES = {
    "cover": "cover-container",
    "title": "title-container",
    "section": "section-container",
    "full-image": "image-container",
    "half-image": "split-container",
    "half-image-horizontal": "split-horizontal-container",
    "caption": "caption-container",
    "1-column": "columns-container",
    "2-columns": "columns-container",
    "3-columns": "columns-container",
    "2-columns-1+2": "columns-container",
    "2-columns-2+1": "columns-container",
    "footnotes": "footnotes-container",
}

SINGLE_SLIDE_CONTEXTS = ("thumbnail", "preview", "presentation")


def _is_url_or_absolute(path: str) -> bool:
    return path.startswith(("http://", "https://", "data:", "/", "file://"))


class SlideRenderer:
    """
    Render slides and whole presentations.

    Parameters
    ----------
    presentation
        The document to render; never modified.
    context
        Default render context used when a call does not pass its own.
    """

    def __init__(self, presentation: PresentationDocument, context: Optional[RenderContext] = None):
        self.presentation = presentation
        self.context = context or RenderContext()

    @property
    def config(self):
        return self.presentation.frontmatter

    @property
    def slides(self) -> List[Slide]:
        return self.presentation.slides

    # ------------------------------------------------------------------
    # Numbering and modes
    # ------------------------------------------------------------------

    def visible_slide_number(self, index: int) -> Optional[int]:
        """1-based number among non-hidden slides, or None for a hidden slide."""
        if not 0 <= index < len(self.slides) or self.slides[index].hidden:
            return None
        return sum(1 for s in self.slides[: index + 1] if not s.hidden)

    def effective_mode(self, slide: Slide, context: Optional[RenderContext] = None) -> str:
        context = context or self.context
        return resolve_mode(slide.metadata.mode, self.config.mode, context.system_scheme)

    # ------------------------------------------------------------------
    # Slide fragments
    # ------------------------------------------------------------------

    def render_slide(
        self,
        slide: Slide,
        index: int,
        render_speaker_notes: bool = True,
        context: Optional[RenderContext] = None,
        mode_backgrounds: bool = False,
    ) -> str:
        """
        Render one ``<section class="slide">`` fragment.

        A failure inside a single slide is reported and replaced by an
        empty slide so the rest of the document still renders.
        """
        context = context or self.context
        try:
            return self._render_slide(slide, index, render_speaker_notes, context, mode_backgrounds)
        except Exception as exc:
            logger.exception("Failed to render slide %d", index)
            context.emit("renderer", f"Slide {index} failed to render: {exc}", logging.ERROR, index=index)
            mode = resolve_mode(None, self.config.mode, context.system_scheme)
            return (
                f'<section class="slide default-container {mode} render-error" '
                f'data-index="{index}"><div class="slide-body"></div></section>'
            )

    def _render_slide(
        self,
        slide: Slide,
        index: int,
        render_speaker_notes: bool,
        context: RenderContext,
        mode_backgrounds: bool,
    ) -> str:
        config = self.config
        layout = normalize_layout(slide.layout, context)
        mode = self.effective_mode(slide, context)
        number = self.visible_slide_number(index)

        classes = ["slide", CONTAINER_CLASSES.get(layout, "default-container"), mode]
        if slide.metadata.css_class:
            classes.append(escape_html(slide.metadata.css_class))
        if slide.metadata.mode:
            classes.append("mode-override")
        if slide.hidden:
            classes.append("hidden-slide")

        background = self._dynamic_background(index, mode, context)
        attrs = [f'data-index="{index}"', f'data-layout="{escape_html(layout)}"']
        if number is not None:
            attrs.append(f'data-visible-number="{number}"')
        if slide.hidden:
            attrs.append('data-hidden="true"')
        if mode_backgrounds:
            for m in ("light", "dark"):
                color = self._dynamic_background(index, m, context)
                if color:
                    attrs.append(f'data-bg-{m}="{color}"')
        if background:
            attrs.append(f'style="background-color: {background};"')

        footnotes = slide.footnotes
        if layout == "footnotes" and not footnotes:
            footnotes = collect_footnotes(self.slides)
        groups = partition_elements(slide, footnotes)

        def render(element):
            return render_element(element, context)

        header = self._render_header()
        footer = self._render_footer(number)
        notes = self._render_speaker_notes(slide) if render_speaker_notes else ""
        slide_background = self._render_slide_background(slide, context)
        footnote_html = ""
        if layout != "footnotes" and should_render_footnotes(slide, config):
            footnote_html = render_footnote_block(slide.footnotes, footnote_geometry(slide, config, layout))

        if layout in HALF_IMAGE_LAYOUTS:
            horizontal = layout == "half-image-horizontal"
            if groups.image_first:
                position = "image-top" if horizontal else "image-left"
            else:
                position = "image-bottom" if horizontal else "image-right"
            classes += ["split-horizontal" if horizontal else "split-vertical", position]
            panel_style = f' style="background-color: {background};"' if background else ""
            body = (
                f'<div class="half-image-panel">{render_half_image_panel(groups.images, context)}</div>\n'
                f'<div class="half-content-panel {mode}"{panel_style}>\n{header}\n'
                f'<div class="slide-body"><div class="slide-content layout-{layout}">'
                f"{render_layout(layout, groups, render, context)}</div></div>\n"
                f"{footnote_html}\n{footer}\n</div>"
            )
            inner = [slide_background, self._render_overlay(context), body, notes]
        else:
            image_background = ""
            if layout == "full-image":
                image_background = render_full_image_background(groups.images, context)
            content = render_layout(layout, groups, render, context)
            inner = [
                slide_background,
                image_background,
                self._render_overlay(context),
                header,
                f'<div class="slide-body">\n<div class="slide-content layout-{layout}">\n{content}\n</div>\n</div>',
                footnote_html,
                footer,
                notes,
            ]

        return (
            f'<section class="{" ".join(classes)}" {" ".join(attrs)}>\n'
            + "\n".join(part for part in inner if part)
            + "\n</section>"
        )

    def _dynamic_background(self, index: int, mode: str, context: RenderContext) -> Optional[str]:
        return dynamic_background_color(self.slides, index, mode, self.config, context)

    def _resolve_layer_path(self, path: str, context: RenderContext) -> str:
        if _is_url_or_absolute(path):
            return path
        return context.resolve_image(path, True)

    def _render_slide_background(self, slide: Slide, context: RenderContext) -> str:
        if not slide.metadata.background:
            return ""
        opacity = slide.metadata.background_opacity
        if opacity is None:
            opacity = 1.0
        elif opacity > 1:
            opacity = opacity / 100
        path = escape_html(self._resolve_layer_path(slide.metadata.background, context))
        return (
            f'<div class="slide-background" style="background-image: url(\'{path}\'); '
            f'opacity: {max(0.0, min(1.0, opacity)):g};"></div>'
        )

    def _render_overlay(self, context: RenderContext) -> str:
        if not self.config.image_overlay:
            return ""
        opacity = self.config.image_overlay_opacity
        opacity = (50 if opacity is None else max(0.0, min(100.0, opacity))) / 100
        path = escape_html(self._resolve_layer_path(self.config.image_overlay, context))
        return (
            f'<div class="slide-overlay" style="background-image: url(\'{path}\'); '
            f'opacity: {opacity:g};"></div>'
        )

    def _slot(self, css_class: str, text: Optional[str]) -> str:
        inner = f"<span>{render_inline(text, links=False)}</span>" if text else ""
        return f'<div class="{css_class}">{inner}</div>'

    def _render_header(self) -> str:
        config = self.config
        if not (config.header_left or config.header_middle or config.header_right):
            return ""
        return (
            '<header class="slide-header">'
            + self._slot("header-left", config.header_left)
            + self._slot("header-middle", config.header_middle)
            + self._slot("header-right", config.header_right)
            + "</header>"
        )

    def _render_footer(self, number: Optional[int]) -> str:
        config = self.config
        right = config.footer_right or ""
        if config.show_slide_numbers and number is not None:
            right = f"{right} {number}".strip()
        return (
            '<footer class="slide-footer">'
            + self._slot("footer-left", config.footer_left)
            + self._slot("footer-middle", config.footer_middle)
            + self._slot("footer-right", right)
            + "</footer>"
        )

    def _render_speaker_notes(self, slide: Slide) -> str:
        if not slide.speaker_notes:
            return ""
        notes = "<br>".join(render_inline(note) for note in slide.speaker_notes)
        return f'<aside class="speaker-notes">{notes}</aside>'

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def _theme_classes(self, context: RenderContext) -> str:
        return context.theme.template.css_classes if context.theme else ""

    def render_single_slide_html(
        self,
        slide: Slide,
        index: int,
        context_name: str = "thumbnail",
        context: Optional[RenderContext] = None,
    ) -> str:
        """Standalone document showing one slide, for iframes and windows."""
        context = context or self.context
        if context_name not in SINGLE_SLIDE_CONTEXTS:
            context.emit("renderer", f"Unknown context {context_name!r}; using thumbnail")
            context_name = "thumbnail"
        body_classes = " ".join(c for c in (BODY_CLASSES[context_name], self._theme_classes(context)) if c)
        return render_template(
            "single_slide.html",
            custom_font_css=context.custom_font_css,
            base_css=base_styles(context_name),
            theme_css=generate_theme_css(context.theme, context_name),
            frontmatter_css=frontmatter_css(self.config, context),
            font_scale_css=font_scale_css(self.config),
            body_classes=body_classes,
            slide_html=self.render_slide(slide, index, render_speaker_notes=False, context=context),
        )

    def _render_indexed(self, index: int, context_name: str, context: Optional[RenderContext]) -> str:
        context = context or self.context
        if not 0 <= index < len(self.slides):
            context.emit("renderer", f"No slide at index {index}", logging.WARNING, index=index)
            empty = Slide(index=index)
            return self.render_single_slide_html(empty, index, context_name, context)
        return self.render_single_slide_html(self.slides[index], index, context_name, context)

    def render_thumbnail_html(self, index: int, context: Optional[RenderContext] = None) -> str:
        return self._render_indexed(index, "thumbnail", context)

    def render_preview_html(self, index: int, context: Optional[RenderContext] = None) -> str:
        return self._render_indexed(index, "preview", context)

    def render_presentation_slide_html(self, index: int, context: Optional[RenderContext] = None) -> str:
        return self._render_indexed(index, "presentation", context)

    def render_export_html(self, context: Optional[RenderContext] = None) -> str:
        """The whole deck as one self-contained HTML document."""
        context = context or self.context
        config = self.config
        transition = config.transition if config.transition in ("none", "fade", "slide") else "fade"
        body_classes = " ".join(
            c for c in ("slide-export", f"transition-{transition}", self._theme_classes(context)) if c
        )
        slides = [
            self.render_slide(slide, i, render_speaker_notes=True, context=context, mode_backgrounds=True)
            for i, slide in enumerate(self.slides)
        ]
        logger.info("Rendered %d slides for export", len(slides))
        return render_template(
            "export.html",
            title=config.title or "Presentation",
            author=config.author,
            custom_font_css=context.custom_font_css,
            theme_css=generate_theme_css(context.theme, "export"),
            base_css=export_styles(),
            frontmatter_css=frontmatter_css(config, context),
            font_scale_css=font_scale_css(config),
            body_classes=body_classes,
            default_mode=resolve_mode(None, config.mode, context.system_scheme),
            slides=slides,
            show_progress=config.show_progress,
            script=EXPORT_SCRIPT,
        )
