#!/usr/bin/env python3
"""
Command-line front end: render a JSON presentation document to HTML.

The JSON mirrors :class:`PresentationDocument`::

    {"frontmatter": {...}, "slides": [{"metadata": {...}, "elements": [...]}, ...]}
"""
import json
import logging
from pathlib import Path
from typing import Optional

from .context import RenderContext
from .models import PresentationDocument
from .paths import make_image_resolver
from .renderer import SlideRenderer
from .theme_loader import get_theme

logger = logging.getLogger(__name__)

CONTEXTS = ("export", "presentation", "preview", "thumbnail")


def load_presentation(path: Path) -> PresentationDocument:
    with open(path, "r", encoding="utf-8") as f:
        return PresentationDocument.from_dict(json.load(f))


def render_file(
    document_path: Path,
    output_path: Path,
    *,
    context_name: str = "export",
    slide_index: int = 0,
    theme: Optional[str] = None,
    themes_dir: Optional[Path] = None,
    asset_base: Optional[Path] = None,
    system_scheme: str = "light",
) -> Path:
    """Render *document_path* and write the HTML to *output_path*."""
    presentation = load_presentation(document_path)
    theme_name = theme or presentation.frontmatter.theme
    loaded_theme = None
    if theme_name:
        try:
            loaded_theme = get_theme(theme_name, themes_dir)
        except (FileNotFoundError, ValueError) as exc:
            logger.warning("⚠️  %s; rendering without a theme", exc)

    base = asset_base if asset_base else document_path.parent
    context = RenderContext(
        theme=loaded_theme,
        resolve_image_path=make_image_resolver(base.expanduser().resolve().as_posix()),
        system_scheme=system_scheme,
    )
    renderer = SlideRenderer(presentation, context)

    single = {
        "thumbnail": renderer.render_thumbnail_html,
        "preview": renderer.render_preview_html,
        "presentation": renderer.render_presentation_slide_html,
    }
    if context_name in single:
        html = single[context_name](slide_index)
    else:
        html = renderer.render_export_html()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    return output_path


def main():
    """Command-line entry point for the slide renderer."""
    import argparse
    import sys

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="sliderender", description="Render a JSON presentation document to HTML.")
        p.add_argument("document", type=Path, help="Presentation JSON file to render")
        p.add_argument("--output", "-o", type=Path, default=Path("output/presentation.html"), help="Destination HTML path")
        p.add_argument("--context", "-c", choices=CONTEXTS, default="export", help="Output context")
        p.add_argument("--slide", type=int, default=0, help="Slide index for single-slide contexts")
        p.add_argument("--theme", "-t", help="Theme name (default: frontmatter theme)")
        p.add_argument("--themes-dir", type=Path, help="Directory of theme folders (default: bundled themes)")
        p.add_argument("--asset-base", type=Path, help="Base directory for relative image paths (default: parent of document)")
        p.add_argument("--system-scheme", choices=("light", "dark"), default="light", help="Value that 'mode: system' resolves to")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    parser = _build_parser()
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s  %(message)s")

    if not args.document.exists():
        logger.error(f"Presentation file '{args.document}' not found")
        sys.exit(1)

    output_path = render_file(
        args.document,
        args.output,
        context_name=args.context,
        slide_index=args.slide,
        theme=args.theme,
        themes_dir=args.themes_dir,
        asset_base=args.asset_base,
        system_scheme=args.system_scheme,
    )
    logger.info("✅ Slides written to %s", output_path)


if __name__ == "__main__":
    main()
