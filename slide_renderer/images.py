"""
Image placement: inline figures, full-bleed backgrounds and half-slide
panels.

Sources with the ``excalidraw://`` pseudo-scheme are looked up in the
context's SVG cache. A miss yields an animated "loading" SVG that
:func:`is_loading_placeholder` can recognise on a later pass.
"""
import base64
import binascii
import logging
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from .context import RenderContext
from .css_utils import format_number
from .inline import escape_html
from .models import ImageData, SlideElement

logger = logging.getLogger(__name__)

FILTERS = {
    "darken": "brightness(0.6)",
    "lighten": "brightness(1.4)",
    "blur": "blur(4px)",
    "grayscale": "grayscale(100%)",
    "sepia": "sepia(100%)",
}

EXCALIDRAW_SCHEME = "excalidraw://"
SVG_DATA_PREFIX = "data:image/svg+xml;base64,"
SPINNER_DASHARRAY = "47 141"

LOADING_PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">'
    "<style>@keyframes spin { from { transform: rotate(0deg); } to { transform: rotate(360deg); } }"
    " .spinner { transform-origin: 100px 100px; animation: spin 1s linear infinite; }</style>"
    '<rect width="200" height="200" fill="#f0f0f0"/>'
    '<circle class="spinner" cx="100" cy="100" r="30" fill="none" stroke="#999999"'
    f' stroke-width="6" stroke-linecap="round" stroke-dasharray="{SPINNER_DASHARRAY}"/>'
    "</svg>"
)


def svg_data_uri(svg: str) -> str:
    return SVG_DATA_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


LOADING_PLACEHOLDER = svg_data_uri(LOADING_PLACEHOLDER_SVG)


def is_loading_placeholder(src: Optional[str]) -> bool:
    """True when *src* is the spinner data URI rather than a real picture."""
    if not src or not src.startswith(SVG_DATA_PREFIX):
        return False
    try:
        svg = base64.b64decode(src[len(SVG_DATA_PREFIX):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return False
    soup = BeautifulSoup(svg, "html.parser")
    has_spin = any("@keyframes spin" in (style.string or "") for style in soup.find_all("style"))
    has_dashes = soup.find(attrs={"stroke-dasharray": SPINNER_DASHARRAY}) is not None
    return has_spin and has_dashes


def image_data_for(element: SlideElement) -> ImageData:
    return element.image_data or ImageData(src=element.content)


def resolve_image_src(element: SlideElement, context: RenderContext) -> str:
    data = image_data_for(element)
    src = data.src or element.content
    if src.startswith(EXCALIDRAW_SCHEME):
        path = src[len(EXCALIDRAW_SCHEME):]
        svg = context.svg_cache.get(path) or context.svg_cache.get(src)
        if svg:
            return svg_data_uri(svg)
        context.emit("excalidraw", f"No converted SVG for {path!r} yet; using placeholder", path=path)
        return LOADING_PLACEHOLDER
    return context.resolve_image(src, data.is_wiki_link)


def image_style(data: ImageData, base: Sequence[str] = ()) -> str:
    """Inline style: fit, position, then opacity (< 100 only) and filter."""
    styles = list(base)
    styles.append(f"object-fit: {data.size or 'cover'}")
    styles.append(f"object-position: {data.x or 'center'} {data.y or 'center'}")
    if data.opacity is not None and data.opacity < 100:
        styles.append(f"opacity: {format_number(max(0.0, data.opacity) / 100)}")
    if data.filter and data.filter != "none":
        value = FILTERS.get(data.filter)
        if value:
            styles.append(f"filter: {value}")
        else:
            logger.debug("Unknown image filter %r ignored", data.filter)
    return "; ".join(styles) + ";"


def img_tag(element: SlideElement, context: RenderContext, base: Sequence[str] = ()) -> str:
    data = image_data_for(element)
    src = escape_html(resolve_image_src(element, context))
    alt = escape_html(data.alt)
    return f'<img src="{src}" alt="{alt}" style="{image_style(data, base)}" />'


def render_figure(element: SlideElement, context: RenderContext) -> str:
    """Image inside the normal content flow."""
    return f'<figure class="image-figure">{img_tag(element, context)}</figure>'


_FILL = ("position: absolute", "top: 0", "left: 0", "right: 0", "bottom: 0", "width: 100%", "height: 100%")


def full_image_class(count: int) -> str:
    if count == 2:
        return "dual-image"
    return f"multi-image count-{count}"


def render_full_image_background(images: Sequence[SlideElement], context: RenderContext) -> str:
    """Edge-to-edge image layer for the ``full-image`` layout."""
    if not images:
        return ""
    if len(images) == 1:
        return f'<div class="slide-image-background">{img_tag(images[0], context, _FILL)}</div>'
    panels = "\n".join(
        f'<div class="image-panel image-{i}">{img_tag(img, context)}</div>'
        for i, img in enumerate(images, start=1)
    )
    return f'<div class="slide-image-background {full_image_class(len(images))}">\n{panels}\n</div>'


def render_half_image_panel(images: Sequence[SlideElement], context: RenderContext) -> str:
    if not images:
        return ""
    fill = ("width: 100%", "height: 100%")
    if len(images) == 1:
        return img_tag(images[0], context, fill)
    return "\n".join(
        f'<div class="image-slot">{img_tag(img, context, fill)}</div>' for img in images
    )
