"""Font family and weight helpers."""
from typing import Optional, Sequence

from .context import RenderContext

GENERIC_FAMILIES = {"serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui"}


def resolve_font_weight(requested: Optional[int], available: Optional[Sequence[int]]) -> Optional[int]:
    """
    Pick the weight to emit for a font family.

    Args:
        requested: Weight asked for in the frontmatter, or None
        available: Weights actually cached for the family; None or empty
            means nothing is known and no validation happens

    Returns:
        The requested weight when available, otherwise the lightest
        available weight that is heavier than requested, otherwise the
        nearest available weight. None means "no weight constraint".
    """
    if requested is None:
        return None
    weights = sorted({int(w) for w in (available or [])})
    if not weights or requested in weights:
        return requested
    heavier = [w for w in weights if w >= requested]
    if heavier:
        return heavier[0]
    return min(weights, key=lambda w: (abs(w - requested), w))


def validated_font_weight(
    role: str,
    family: Optional[str],
    requested: Optional[int],
    context: RenderContext,
) -> Optional[int]:
    """Resolve *requested* against the context's font table and report substitutions."""
    available = context.available_weights(family)
    resolved = resolve_font_weight(requested, available)
    if resolved != requested:
        context.emit(
            "font-handling",
            f"{role} font '{family}' has no weight {requested}; using {resolved}",
            role=role,
            family=family,
            requested=requested,
            resolved=resolved,
            available=list(available or []),
        )
    return resolved


def font_family_value(family: Optional[str]) -> Optional[str]:
    """CSS value for a configured family: quoted name plus a generic fallback."""
    if not family:
        return None
    family = family.strip()
    if "," in family or family.lower() in GENERIC_FAMILIES:
        return family
    return f"'{family}', sans-serif"
