"""
Inline markdown rendering for slide text.

The substitutions run in a fixed order because several patterns overlap
(``**`` vs ``*``, ``[^id]`` vs ``[text](url)``, ``\\n`` vs ``\n``).
"""
import re
from typing import Optional

_FOOTNOTE_REF = re.compile(r"\[\^([^\]]+)\](?!:)")
_BOLD_STARS = re.compile(r"\*\*(.+?)\*\*")
_BOLD_UNDERSCORES = re.compile(r"(?<!\w)__(.+?)__(?!\w)")
_ITALIC_STAR = re.compile(r"\*(?=\S)(.+?)(?<=\S)\*")
_ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_(?=\S)(.+?)(?<=\S)_(?!\w)")
_HIGHLIGHT = re.compile(r"==(.+?)==")
_INLINE_CODE = re.compile(r"`([^`]+?)`")
_WIKI_LINK = re.compile(r"!?\[\[([^\]|]+?)(?:\|([^\]]+))?\]\]")
_MD_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")

_ESCAPED_NEWLINE = "\\\\n"  # backslash, backslash, n
_NEWLINE_TOKEN = "\\n"  # backslash, n
_PLACEHOLDER = "\x00ESCAPED-NEWLINE\x00"


def escape_html(text: Optional[str]) -> str:
    """Escape ``& < > " '`` for element content and attribute values."""
    if not text:
        return ""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def wikilink_label(target: str, display: Optional[str] = None) -> str:
    """
    Text shown for a wiki-link.

    ``[[folder/page]]`` -> ``page``, ``[[page#Heading]]`` -> ``page``,
    ``[[page|Label]]`` -> ``Label``.
    """
    if display and display.strip():
        return display.strip()
    segment = target.strip().rstrip("/").split("/")[-1]
    name, _, heading = segment.partition("#")
    return name.strip() or heading.strip()


def _footnote_ref(match: re.Match) -> str:
    ref = match.group(1)
    return f'<sup class="footnote-ref" data-footnote="{ref}">{ref}</sup>'


def _wiki(match: re.Match) -> str:
    return wikilink_label(match.group(1), match.group(2))


def _link(match: re.Match) -> str:
    text, url = match.group(1), match.group(2)
    return f'<a href="{url}" target="_blank" rel="noopener noreferrer">{text}</a>'


def render_inline(text: Optional[str], links: bool = True) -> str:
    """
    Render inline markdown to HTML.

    Args:
        text: Raw text of a paragraph, list item, heading, caption, ...
        links: When False, ``[text](url)`` collapses to ``text`` (used for
            header/footer slots where a click would leave the presentation)

    Returns:
        HTML-safe string
    """
    if not text:
        return ""

    html = escape_html(text)

    html = _FOOTNOTE_REF.sub(_footnote_ref, html)

    html = _BOLD_STARS.sub(r"<strong>\1</strong>", html)
    html = _BOLD_UNDERSCORES.sub(r"<strong>\1</strong>", html)

    html = _ITALIC_STAR.sub(r"<em>\1</em>", html)
    html = _ITALIC_UNDERSCORE.sub(r"<em>\1</em>", html)

    html = _HIGHLIGHT.sub(r"<mark>\1</mark>", html)

    html = _INLINE_CODE.sub(r"<code>\1</code>", html)

    html = _WIKI_LINK.sub(_wiki, html)
    if links:
        html = _MD_LINK.sub(_link, html)
    else:
        html = _MD_LINK.sub(r"\1", html)

    html = html.replace(_ESCAPED_NEWLINE, _PLACEHOLDER)
    html = html.replace(_NEWLINE_TOKEN, "<br>").replace("\r\n", "<br>").replace("\n", "<br>")
    html = html.replace(_PLACEHOLDER, _NEWLINE_TOKEN)

    return html
