"""
Dynamic slide backgrounds.

A gradient of colour stops is spread across the deck (or across each
section when restarting at section slides) and every visible slide gets
the colour at its position.
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from PIL import ImageColor

from .context import RenderContext
from .models import Config, Slide, Theme

logger = logging.getLogger(__name__)

FALLBACK_GRADIENTS = {
    "light": ["#ffffff", "#f0f0f0", "#e0e0e0"],
    "dark": ["#1a1a2e", "#2d2d44", "#3d3d5c"],
}

# Layouts whose background can be overridden per mode in the frontmatter.
OVERRIDABLE_LAYOUTS = ("cover", "title", "section")


def parse_color(value: str) -> Tuple[int, int, int]:
    """Parse any colour Pillow understands; unparseable input becomes black."""
    try:
        rgb = ImageColor.getrgb(value.strip())
    except (ValueError, AttributeError):
        logger.debug("Unparseable colour %r, using black", value)
        return (0, 0, 0)
    return rgb[0], rgb[1], rgb[2]


def is_color(value: str) -> bool:
    try:
        ImageColor.getrgb(value.strip())
    except (ValueError, AttributeError):
        return False
    return True


def interpolate_gradient_color(colors: Sequence[str], position: float) -> str:
    """
    Colour at *position* (0..1) along evenly spaced stops.

    Returns ``rgb(r, g, b)`` for interpolated values; a single stop is
    returned unchanged and no stops yield white.
    """
    if not colors:
        return "#ffffff"
    if len(colors) == 1:
        return colors[0]

    position = max(0.0, min(1.0, float(position)))
    segment = position * (len(colors) - 1)
    index = int(math.floor(segment))
    t = segment - index
    if index >= len(colors) - 1:
        index, t = len(colors) - 2, 1.0

    start = parse_color(colors[index])
    end = parse_color(colors[index + 1])
    r, g, b = (_round_half_up(a + (z - a) * t) for a, z in zip(start, end))
    return f"rgb({r}, {g}, {b})"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def global_position(slides: Sequence[Slide], index: int) -> float:
    """Position of ``slides[index]`` among all visible slides."""
    visible = [i for i, s in enumerate(slides) if not s.hidden]
    if len(visible) < 2:
        return 0.0
    rank = _visible_rank(slides, index)
    return rank / (len(visible) - 1)


def section_position(slides: Sequence[Slide], index: int) -> Optional[float]:
    """
    Position of ``slides[index]`` inside its section.

    The segment is the run of visible slides after the nearest preceding
    visible section slide, up to the next one. Section slides themselves
    have no position (None).
    """
    anchor = _anchor_index(slides, index)
    if slides[anchor].layout == "section" and not slides[anchor].hidden:
        return None

    start = anchor
    while start >= 0 and not (slides[start].layout == "section" and not slides[start].hidden):
        start -= 1
    segment = []
    for i in range(start + 1, len(slides)):
        slide = slides[i]
        if slide.hidden:
            continue
        if slide.layout == "section":
            break
        segment.append(i)

    if len(segment) < 2 or anchor not in segment:
        return 0.0
    return segment.index(anchor) / (len(segment) - 1)


def _anchor_index(slides: Sequence[Slide], index: int) -> int:
    """Hidden slides borrow the position of the nearest preceding visible slide."""
    i = index
    while i >= 0 and slides[i].hidden:
        i -= 1
    if i < 0:
        i = index
        while i < len(slides) and slides[i].hidden:
            i += 1
        if i >= len(slides):
            return index
    return i


def _visible_rank(slides: Sequence[Slide], index: int) -> int:
    anchor = _anchor_index(slides, index)
    return sum(1 for s in slides[:anchor] if not s.hidden)


def gradient_stops(mode: str, config: Config, theme: Optional[Theme]) -> List[str]:
    """Frontmatter stops, then the theme preset's gradient, then the built-in fallback."""
    stops = config.dynamic_background(mode)
    if stops:
        return list(stops)
    preset = theme.preset if theme else None
    if preset is not None and preset.bg_gradient(mode):
        return list(preset.bg_gradient(mode))
    return list(FALLBACK_GRADIENTS["dark" if mode == "dark" else "light"])


def dynamic_background_enabled(config: Config, mode: str) -> bool:
    setting = (config.use_dynamic_background or "none").lower()
    return setting == "both" or setting == mode


def dynamic_background_color(
    slides: Sequence[Slide],
    index: int,
    mode: str,
    config: Config,
    context: RenderContext,
) -> Optional[str]:
    """
    Background colour for ``slides[index]`` or None when no dynamic colour applies.

    *mode* must already be resolved to ``light`` or ``dark``.
    """
    if not slides or not dynamic_background_enabled(config, mode):
        return None
    slide = slides[index]
    if slide.layout in OVERRIDABLE_LAYOUTS and config.layout_background(mode, slide.layout):
        return None

    if config.dynamic_background_restart_at_section:
        position = section_position(slides, index)
        if position is None:
            return None
    else:
        position = global_position(slides, index)

    stops = gradient_stops(mode, config, context.theme)
    for stop in stops:
        if not is_color(stop):
            context.emit("background", f"Unparseable gradient stop {stop!r}; treated as black", logging.WARNING, stop=stop)
    color = interpolate_gradient_color(stops, position)
    context.emit(
        "background",
        f"slide {index} at position {position:.3f} -> {color}",
        index=index,
        position=position,
        color=color,
    )
    return color
