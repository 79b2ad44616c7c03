"""Theme loader for presentation themes.

A theme is a folder holding ``template.json`` (name, fonts, CSS file
name, body classes), an optional ``presets.json`` with colour presets,
an optional ``theme.json`` with per-mode heading colours and layout
backgrounds, and the stylesheet named by the template.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from .models import Theme, ThemeModeData, ThemePreset, ThemeTemplate

logger = logging.getLogger(__name__)

BUILTIN_THEMES_DIR = Path(__file__).parent / "themes"


def _themes_dir(themes_dir: Optional[Union[str, Path]]) -> Path:
    return Path(themes_dir) if themes_dir else BUILTIN_THEMES_DIR


def _read_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_theme_folder(folder: Union[str, Path]) -> Theme:
    """
    Load a theme from *folder*.

    Args:
        folder: Directory containing at least ``template.json``

    Returns:
        The loaded Theme

    Raises:
        FileNotFoundError: If the folder has no template.json
    """
    folder = Path(folder)
    template_path = folder / "template.json"
    if not template_path.is_file():
        raise FileNotFoundError(f"No template.json found in {folder}")

    template = ThemeTemplate.from_dict(_read_json(template_path))

    presets: List[ThemePreset] = []
    presets_path = folder / "presets.json"
    if presets_path.is_file():
        data = _read_json(presets_path)
        presets = [ThemePreset.from_dict(p) for p in data.get("Presets", data.get("presets", []))]

    theme_json = {}
    theme_json_path = folder / "theme.json"
    if theme_json_path.is_file():
        modes = _read_json(theme_json_path).get("presets", {})
        theme_json = {
            mode: ThemeModeData.from_dict(modes[mode]) for mode in ("light", "dark") if mode in modes
        }

    css_path = folder / (template.css or "theme.css")
    css = ""
    if css_path.is_file():
        css = css_path.read_text(encoding="utf-8")
    else:
        logger.warning("Theme '%s' has no stylesheet %s", template.name, css_path.name)

    logger.debug("Loaded theme '%s' (%d presets) from %s", template.name, len(presets), folder)
    return Theme(template=template, presets=presets, css=css, theme_json=theme_json)


def get_theme(theme: str = "zurich", themes_dir: Optional[Union[str, Path]] = None) -> Theme:
    """
    Load a theme by name.

    Args:
        theme: Theme name (folder name, case-insensitive)
        themes_dir: Directory of theme folders; the bundled themes by default

    Returns:
        The loaded Theme

    Raises:
        FileNotFoundError: If the theme doesn't exist
        ValueError: If the theme name is invalid
    """
    # Validate theme name (security: prevent path traversal)
    if not theme or not theme.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid theme name: {theme}")

    root = _themes_dir(themes_dir)
    folder = root / theme.lower()
    if not (folder / "template.json").is_file():
        raise FileNotFoundError(
            f"Theme '{theme}' not found. Available themes: {list_available_themes(root)}"
        )
    return load_theme_folder(folder)


def list_available_themes(themes_dir: Optional[Union[str, Path]] = None) -> List[str]:
    """
    List all available themes.

    Returns:
        Sorted list of theme names
    """
    root = _themes_dir(themes_dir)
    if not root.is_dir():
        return []
    return sorted(d.name for d in root.iterdir() if (d / "template.json").is_file())


def validate_theme(theme: str, themes_dir: Optional[Union[str, Path]] = None) -> bool:
    """
    Check if a theme exists and loads.

    Returns:
        True if theme exists, False otherwise
    """
    try:
        get_theme(theme, themes_dir)
        return True
    except (FileNotFoundError, ValueError):
        return False
