"""
CSS helpers shared by the theme composer and the stylesheet builder.

Theme CSS arrives as an opaque string; the only structure we rely on is
the ``:root { --name: value; }`` block and plain ``property: value;``
declarations.
"""
import math
import re
from typing import Dict, Iterable, List, Optional, Sequence, Union

_ROOT_BLOCK = re.compile(r":root\s*\{([^}]+)\}", re.DOTALL)
_VARIABLE = re.compile(r"--([^:]+):\s*([^;]+);")
_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_FIXED_TYPOGRAPHY = (
    re.compile(r"font-size:\s*[^;]+;"),
    re.compile(r"font-weight:\s*[^;]+;"),
    re.compile(r"letter-spacing:\s*[^;]+;"),
)


def extract_css_variables(css: str) -> Dict[str, str]:
    """Return ``{name: value}`` for every custom property declared in ``:root`` blocks.

    Later declarations win, matching the cascade.
    """
    variables: Dict[str, str] = {}
    if not css:
        return variables
    for root in _ROOT_BLOCK.finditer(_COMMENT.sub("", css)):
        for name, value in _VARIABLE.findall(root.group(1)):
            variables[name.strip()] = value.strip()
    return variables


def strip_fixed_typography(css: str) -> str:
    """Drop ``font-size``, ``font-weight`` and ``letter-spacing`` declarations.

    Scaled contexts (thumbnail, preview, presentation) size all text in
    slide units; a theme's absolute sizes would break that.
    """
    for pattern in _FIXED_TYPOGRAPHY:
        css = pattern.sub("", css)
    return css


def color_or_gradient(colors: Union[str, Sequence[str], None], direction: str = "to right") -> Optional[str]:
    """One stop is a plain colour, more stops become a ``linear-gradient``."""
    if not colors:
        return None
    if isinstance(colors, str):
        return colors
    stops = [c for c in colors if c]
    if not stops:
        return None
    if len(stops) == 1:
        return stops[0]
    return f"linear-gradient({direction}, {', '.join(stops)})"


def finite_or(value: Optional[float], default: Optional[float] = None) -> Optional[float]:
    """*value* as a float, or *default* when it is unset, NaN or infinite."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def format_number(value: float) -> str:
    """``1.0`` -> ``1``, ``1.25`` -> ``1.25``; NaN and infinities become ``0``."""
    value = finite_or(value, 0.0)
    value = round(value, 4)
    if value == int(value):
        return str(int(value))
    return f"{value:g}"


def declarations(pairs: Iterable[tuple], indent: str = "  ") -> List[str]:
    """Format ``(name, value)`` pairs as custom property lines, skipping unset values."""
    return [f"{indent}--{name}: {value};" for name, value in pairs if value is not None and value != ""]


def root_block(lines: List[str]) -> str:
    if not lines:
        return ""
    return ":root {\n" + "\n".join(lines) + "\n}"
