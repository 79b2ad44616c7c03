"""
Render context: everything a render pass may consult besides the document.

A context is an immutable snapshot. Hosts that render from several threads
or requests build one per logical render (``context.replace(...)``) instead
of mutating a shared renderer.
"""
import dataclasses
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .models import Theme

logger = logging.getLogger(__name__)

ImagePathResolver = Callable[[str, bool], str]


@dataclass(frozen=True)
class DiagnosticEvent:
    topic: str
    message: str
    data: Mapping[str, Any] = field(default_factory=dict)


class DiagnosticsLog:
    """Collects diagnostic events; pass an instance as ``RenderContext.diagnostics``."""

    def __init__(self):
        self.events: List[DiagnosticEvent] = []

    def __call__(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def topics(self) -> List[str]:
        return [e.topic for e in self.events]

    def by_topic(self, topic: str) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.topic == topic]

    def clear(self) -> None:
        self.events.clear()


def _identity_resolver(path: str, is_wiki_link: bool) -> str:
    return path


@dataclass(frozen=True)
class RenderContext:
    """
    Immutable configuration for one render pass.

    Attributes:
        theme: Active theme, or None for the built-in look
        resolve_image_path: ``(path, is_wiki_link) -> str`` used for every image source
        font_weights: Font family -> weights actually available for it
        svg_cache: Source path -> SVG markup for ``excalidraw://`` images
        system_scheme: Value that ``mode: system`` resolves to (``light`` or ``dark``)
        custom_font_css: ``@font-face`` rules placed before all other styles
        diagnostics: Optional sink receiving :class:`DiagnosticEvent` objects
    """
    theme: Optional[Theme] = None
    resolve_image_path: ImagePathResolver = _identity_resolver
    font_weights: Mapping[str, Sequence[int]] = field(default_factory=dict)
    svg_cache: Mapping[str, str] = field(default_factory=dict)
    system_scheme: str = "light"
    custom_font_css: str = ""
    diagnostics: Optional[Callable[[DiagnosticEvent], None]] = None

    def __post_init__(self):
        # Snapshot caller-owned mappings so later mutation cannot leak into a render.
        object.__setattr__(self, "font_weights", MappingProxyType(
            {k: tuple(v) for k, v in dict(self.font_weights or {}).items()}
        ))
        object.__setattr__(self, "svg_cache", MappingProxyType(dict(self.svg_cache or {})))
        if self.system_scheme not in ("light", "dark"):
            object.__setattr__(self, "system_scheme", "light")

    def replace(self, **changes) -> "RenderContext":
        return dataclasses.replace(self, **changes)

    def emit(self, topic: str, message: str, level: int = logging.DEBUG, **data) -> None:
        """Log a diagnostic and forward it to the sink, if any."""
        logger.log(level, "[%s] %s", topic, message)
        if self.diagnostics is not None:
            self.diagnostics(DiagnosticEvent(topic=topic, message=message, data=dict(data)))

    def available_weights(self, family: Optional[str]) -> Optional[Sequence[int]]:
        if not family:
            return None
        return self.font_weights.get(family)

    def resolve_image(self, path: str, is_wiki_link: bool = False) -> str:
        try:
            return self.resolve_image_path(path, is_wiki_link)
        except Exception as exc:
            self.emit("images", f"Image resolver failed for {path!r}: {exc}", logging.WARNING)
            return path


__all__ = [
    "DiagnosticEvent",
    "DiagnosticsLog",
    "ImagePathResolver",
    "RenderContext",
]
