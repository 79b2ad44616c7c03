"""
Data models for the slide renderer.

Every model can be built from a plain mapping (``from_dict``) so that a
presentation produced by an external markdown parser can be handed over
as JSON. Keys are accepted in snake_case, camelCase or kebab-case.
"""
import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


LAYOUTS = (
    "cover",
    "title",
    "section",
    "default",
    "1-column",
    "2-columns",
    "3-columns",
    "2-columns-1+2",
    "2-columns-2+1",
    "full-image",
    "caption",
    "half-image",
    "half-image-horizontal",
    "footnotes",
)

ELEMENT_TYPES = (
    "heading",
    "paragraph",
    "list",
    "blockquote",
    "image",
    "code",
    "table",
    "math",
    "kicker",
)

MODES = ("light", "dark", "system")

_MISSING = object()


def normalize_key(key: str) -> str:
    """Turn ``lightH1Color`` / ``light-h1-color`` / ``LightH1Color`` into ``light_h1_color``."""
    key = str(key).strip().replace("-", "_")
    key = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key)
    return key.lower()


def _normalized(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not isinstance(data, dict):
        return {}
    return {normalize_key(k): v for k, v in data.items()}


def _coerce(kind: str, value: Any) -> Any:
    """Coerce *value* to the field *kind*; return ``_MISSING`` when it cannot be used."""
    if value is None:
        return _MISSING
    if "List" in kind:
        if isinstance(value, str):
            parts = [p.strip() for p in value.split(",")]
            return [p for p in parts if p] or _MISSING
        if isinstance(value, (list, tuple)):
            return [str(v).strip() for v in value if str(v).strip()] or _MISSING
        return _MISSING
    if "bool" in kind:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "yes", "on", "1"):
            return True
        if isinstance(value, str) and value.strip().lower() in ("false", "no", "off", "0"):
            return False
        return _MISSING
    if "float" in kind or "int" in kind:
        if isinstance(value, bool):
            return _MISSING
        try:
            number = float(value)
        except (TypeError, ValueError):
            return _MISSING
        if not math.isfinite(number):
            return _MISSING
        if "int" in kind:
            return int(number)
        return number
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        text = str(value)
        return text if text.strip() else _MISSING
    return _MISSING


def _fill(cls, data: Dict[str, Any], aliases: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Collect constructor kwargs for the scalar fields of dataclass *cls* from *data*."""
    aliases = aliases or {}
    normalized = _normalized(data)
    for alias, target in aliases.items():
        if alias in normalized and target not in normalized:
            normalized[target] = normalized[alias]
    kwargs = {}
    for f in fields(cls):
        if f.name not in normalized:
            continue
        value = _coerce(str(f.type), normalized[f.name])
        if value is not _MISSING:
            kwargs[f.name] = value
    return kwargs


@dataclass
class Config:
    """
    Presentation frontmatter.

    Unset options stay ``None`` so that theme values, and after them the
    hard defaults baked into the stylesheet, can take over.
    """
    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    theme: Optional[str] = None
    mode: str = "light"
    transition: Optional[str] = None
    aspect_ratio: Optional[str] = None
    show_progress: bool = True

    # Typography
    title_font: Optional[str] = None
    body_font: Optional[str] = None
    header_font: Optional[str] = None
    footer_font: Optional[str] = None
    title_font_weight: Optional[int] = None
    body_font_weight: Optional[int] = None
    header_font_weight: Optional[int] = None
    footer_font_weight: Optional[int] = None
    title_font_size: Optional[float] = None  # percent offset
    body_font_size: Optional[float] = None
    header_font_size: Optional[float] = None
    footer_font_size: Optional[float] = None
    font_size_offset: Optional[float] = None
    line_height: Optional[float] = None

    # Spacing, unitless multiples of --slide-unit
    headline_spacing_before: Optional[float] = None
    headline_spacing_after: Optional[float] = None
    list_item_spacing: Optional[float] = None
    header_top: Optional[float] = None
    footer_bottom: Optional[float] = None
    title_top: Optional[float] = None
    content_top: Optional[float] = None
    content_left: Optional[float] = None
    content_right: Optional[float] = None
    content_top_offset: Optional[float] = None
    slide_unit_scale: Optional[float] = None

    # Palette
    accent1: Optional[str] = None
    accent2: Optional[str] = None
    accent3: Optional[str] = None
    accent4: Optional[str] = None
    accent5: Optional[str] = None
    accent6: Optional[str] = None
    light_background: Optional[str] = None
    dark_background: Optional[str] = None
    light_title_text: Optional[str] = None
    dark_title_text: Optional[str] = None
    light_body_text: Optional[str] = None
    dark_body_text: Optional[str] = None
    light_header_text: Optional[str] = None
    light_footer_text: Optional[str] = None
    dark_header_text: Optional[str] = None
    dark_footer_text: Optional[str] = None
    light_h1_color: Optional[List[str]] = None
    light_h2_color: Optional[List[str]] = None
    light_h3_color: Optional[List[str]] = None
    light_h4_color: Optional[List[str]] = None
    dark_h1_color: Optional[List[str]] = None
    dark_h2_color: Optional[List[str]] = None
    dark_h3_color: Optional[List[str]] = None
    dark_h4_color: Optional[List[str]] = None
    light_bg_cover: Optional[str] = None
    light_bg_title: Optional[str] = None
    light_bg_section: Optional[str] = None
    dark_bg_cover: Optional[str] = None
    dark_bg_title: Optional[str] = None
    dark_bg_section: Optional[str] = None

    # Dynamic background
    use_dynamic_background: Optional[str] = None  # light | dark | both | none
    light_dynamic_background: Optional[List[str]] = None
    dark_dynamic_background: Optional[List[str]] = None
    dynamic_background_restart_at_section: bool = False

    # Header / footer
    header_left: Optional[str] = None
    header_middle: Optional[str] = None
    header_right: Optional[str] = None
    footer_left: Optional[str] = None
    footer_middle: Optional[str] = None
    footer_right: Optional[str] = None
    show_slide_numbers: bool = True

    show_footnotes_on_slides: bool = False

    image_overlay: Optional[str] = None
    image_overlay_opacity: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        kwargs = _fill(cls, data or {})
        normalized = _normalized(data)
        # Legacy single margin sets both sides unless they are given explicitly.
        legacy = _coerce("float", normalized.get("content_width"))
        if legacy is not _MISSING:
            kwargs.setdefault("content_left", legacy)
            kwargs.setdefault("content_right", legacy)
        if kwargs.get("mode") not in MODES:
            kwargs.pop("mode", None)
        return cls(**kwargs)

    def heading_color(self, mode: str, level: int) -> Optional[List[str]]:
        return getattr(self, f"{mode}_h{level}_color", None)

    def layout_background(self, mode: str, layout: str) -> Optional[str]:
        return getattr(self, f"{mode}_bg_{layout}", None)

    def dynamic_background(self, mode: str) -> Optional[List[str]]:
        return getattr(self, f"{mode}_dynamic_background", None)


@dataclass
class ImageData:
    """Placement and effect options of an image element."""
    src: str = ""
    alt: str = ""
    size: str = "cover"  # cover | contain
    x: str = "center"
    y: str = "center"
    filter: Optional[str] = None
    opacity: Optional[float] = None  # 0-100
    is_wiki_link: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ImageData":
        kwargs = _fill(cls, data or {}, aliases={"wiki_link": "is_wiki_link"})
        if kwargs.get("size") not in ("cover", "contain"):
            kwargs.pop("size", None)
        return cls(**kwargs)


@dataclass
class SlideElement:
    type: str
    content: str = ""
    visible: bool = True
    column_index: Optional[int] = None
    level: int = 1
    language: Optional[str] = None
    image_data: Optional[ImageData] = None
    raw: str = ""

    @property
    def is_header(self) -> bool:
        """Kickers and H1/H2 headings form the slide header."""
        return self.type == "kicker" or (self.type == "heading" and self.level <= 2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideElement":
        normalized = _normalized(data)
        kwargs = _fill(cls, data)
        kwargs.pop("image_data", None)
        kwargs.setdefault("type", "paragraph")
        if kwargs["type"] not in ELEMENT_TYPES:
            kwargs["type"] = "paragraph"
        if kwargs.get("column_index") is not None and kwargs["column_index"] < 0:
            kwargs["column_index"] = 0
        image = normalized.get("image_data")
        if isinstance(image, dict):
            kwargs["image_data"] = ImageData.from_dict(image)
        elif kwargs["type"] == "image":
            kwargs["image_data"] = ImageData(src=kwargs.get("content", ""))
        return cls(**kwargs)


@dataclass
class Footnote:
    id: str
    content: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Footnote":
        normalized = _normalized(data)
        return cls(id=str(normalized.get("id", "")), content=str(normalized.get("content", "")))


@dataclass
class SlideMetadata:
    layout: str = "default"
    mode: Optional[str] = None
    background: Optional[str] = None
    background_opacity: Optional[float] = None
    css_class: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SlideMetadata":
        kwargs = _fill(cls, data or {}, aliases={"class": "css_class"})
        if kwargs.get("mode") not in MODES:
            kwargs.pop("mode", None)
        return cls(**kwargs)


@dataclass
class Slide:
    index: int
    metadata: SlideMetadata = field(default_factory=SlideMetadata)
    elements: List[SlideElement] = field(default_factory=list)
    speaker_notes: List[str] = field(default_factory=list)
    footnotes: List[Footnote] = field(default_factory=list)
    hidden: bool = False

    @property
    def layout(self) -> str:
        return self.metadata.layout or "default"

    @property
    def visible_elements(self) -> List[SlideElement]:
        return [e for e in self.elements if e.visible]

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "Slide":
        normalized = _normalized(data)
        notes = normalized.get("speaker_notes") or []
        if isinstance(notes, str):
            notes = [notes]
        return cls(
            index=int(normalized.get("index", index)),
            metadata=SlideMetadata.from_dict(normalized.get("metadata")),
            elements=[SlideElement.from_dict(e) for e in normalized.get("elements") or []],
            speaker_notes=[str(n) for n in notes],
            footnotes=[Footnote.from_dict(f) for f in normalized.get("footnotes") or []],
            hidden=bool(normalized.get("hidden", False)),
        )


@dataclass
class PresentationDocument:
    frontmatter: Config = field(default_factory=Config)
    slides: List[Slide] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PresentationDocument":
        normalized = _normalized(data)
        return cls(
            frontmatter=Config.from_dict(normalized.get("frontmatter")),
            slides=[Slide.from_dict(s, i) for i, s in enumerate(normalized.get("slides") or [])],
        )


# ----------------------------------------------------------------------
# Themes
# ----------------------------------------------------------------------

@dataclass
class ThemeTemplate:
    """``template.json`` of a theme folder."""
    name: str = "Untitled"
    version: str = "1.0.0"
    author: Optional[str] = None
    css: str = "theme.css"
    title_font: str = "system-ui"
    body_font: str = "system-ui"
    css_classes: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ThemeTemplate":
        return cls(**_fill(cls, data or {}))


@dataclass
class ThemePreset:
    """One colour preset from ``presets.json``."""
    name: str = "Default"
    appearance: str = "light"
    title_font: Optional[str] = None
    body_font: Optional[str] = None
    light_title_text_color: str = "#000000"
    dark_title_text_color: str = "#ffffff"
    light_body_text_color: str = "#333333"
    dark_body_text_color: str = "#e0e0e0"
    light_background_color: str = "#ffffff"
    dark_background_color: str = "#1a1a1a"
    accent1: str = "#000000"
    accent2: str = "#43aa8b"
    accent3: str = "#f9c74f"
    accent4: str = "#90be6d"
    accent5: str = "#f8961e"
    accent6: str = "#577590"
    light_accent1: Optional[str] = None
    dark_accent1: Optional[str] = None
    light_bg_gradient: Optional[List[str]] = None
    dark_bg_gradient: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ThemePreset":
        return cls(**_fill(cls, data or {}))

    def bg_gradient(self, mode: str) -> Optional[List[str]]:
        return self.dark_bg_gradient if mode == "dark" else self.light_bg_gradient


@dataclass
class ThemeBackground:
    type: str = "solid"  # solid | gradient | dynamic
    color: Optional[str] = None
    colors: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ThemeBackground":
        return cls(**_fill(cls, data or {}))


@dataclass
class ThemeModeData:
    """Per-mode extras from ``theme.json``: heading colours and layout backgrounds."""
    heading_colors: Dict[str, List[str]] = field(default_factory=dict)
    body_text: Optional[str] = None
    header_text: Optional[str] = None
    footer_text: Optional[str] = None
    layout_backgrounds: Dict[str, ThemeBackground] = field(default_factory=dict)
    accents: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ThemeModeData":
        normalized = _normalized(data)
        text = _normalized(normalized.get("text"))
        headings = {}
        for level in ("h1", "h2", "h3", "h4"):
            colors = _coerce("List", text.get(level))
            if colors is not _MISSING:
                headings[level] = colors
        backgrounds = {
            name: ThemeBackground.from_dict(bg)
            for name, bg in _normalized(normalized.get("backgrounds")).items()
            if isinstance(bg, dict)
        }
        accents = _coerce("List", normalized.get("accents"))
        return cls(
            heading_colors=headings,
            body_text=text.get("body"),
            header_text=text.get("header"),
            footer_text=text.get("footer"),
            layout_backgrounds=backgrounds,
            accents=[] if accents is _MISSING else accents,
        )


@dataclass
class Theme:
    template: ThemeTemplate = field(default_factory=ThemeTemplate)
    presets: List[ThemePreset] = field(default_factory=list)
    css: str = ""
    theme_json: Dict[str, ThemeModeData] = field(default_factory=dict)  # keyed by mode

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def preset(self) -> Optional[ThemePreset]:
        return self.presets[0] if self.presets else None

    def mode_data(self, mode: str) -> Optional[ThemeModeData]:
        return self.theme_json.get(mode)
