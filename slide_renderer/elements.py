"""HTML for individual slide elements."""
import logging
import re
from typing import List, Optional, Tuple

from .context import RenderContext
from .images import render_figure
from .inline import escape_html, render_inline
from .models import SlideElement

logger = logging.getLogger(__name__)

_LIST_MARKER = re.compile(r"^([-*+]|\d+[.)])\s+")
_ORDERED_MARKER = re.compile(r"^\d+[.)]")
_TABLE_SEPARATOR = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")


def indent_level(line: str) -> int:
    """Nesting level from leading whitespace: each tab is one level, spaces count in pairs."""
    tabs = spaces = 0
    for char in line:
        if char == "\t":
            tabs += 1
        elif char == " ":
            spaces += 1
        else:
            break
    return tabs + spaces // 2


def parse_list_items(content: str) -> List[Tuple[int, bool, str]]:
    """Return ``(level, ordered, text)`` per item; unmarked lines continue the previous item."""
    items: List[Tuple[int, bool, str]] = []
    for line in content.split("\n"):
        if not line.strip():
            continue
        stripped = line.lstrip(" \t")
        marker = _LIST_MARKER.match(stripped)
        if marker:
            ordered = bool(_ORDERED_MARKER.match(marker.group(1)))
            items.append((indent_level(line), ordered, stripped[marker.end():]))
        elif items:
            level, ordered, text = items[-1]
            items[-1] = (level, ordered, text + "\n" + stripped)
        else:
            items.append((indent_level(line), False, stripped))
    return items


def render_list(content: str) -> str:
    items = parse_list_items(content)
    if not items:
        return ""
    out: List[str] = []
    open_lists: List[str] = []
    for level, ordered, text in items:
        # A list can only nest one level deeper than the current one.
        target = max(1, min(level + 1, len(open_lists) + 1))
        if target > len(open_lists):
            tag = "ol" if ordered else "ul"
            out.append(f"<{tag}>")
            open_lists.append(tag)
        else:
            while len(open_lists) > target:
                out.append(f"</li></{open_lists.pop()}>")
            out.append("</li>")
        out.append(f"<li>{render_inline(text)}")
    while open_lists:
        out.append(f"</li></{open_lists.pop()}>")
    return "".join(out)


def _split_row(line: str) -> List[str]:
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def _alignment(cell: str) -> Optional[str]:
    cell = cell.strip()
    if cell.startswith(":") and cell.endswith(":"):
        return "center"
    if cell.endswith(":"):
        return "right"
    if cell.startswith(":"):
        return "left"
    return None


def render_table(content: str) -> str:
    """Pipe table; malformed input still yields whatever rows could be read."""
    lines = [line for line in content.split("\n") if line.strip()]
    if not lines:
        return ""
    header = _split_row(lines[0])
    aligns: List[Optional[str]] = [None] * len(header)
    body_lines = lines[1:]
    if body_lines and _TABLE_SEPARATOR.match(body_lines[0]):
        aligns = [_alignment(c) for c in _split_row(body_lines[0])]
        body_lines = body_lines[1:]
    aligns += [None] * (len(header) - len(aligns))

    def cell(tag: str, text: str, i: int) -> str:
        align = aligns[i] if i < len(aligns) else None
        style = f' style="text-align: {align}"' if align else ""
        return f"<{tag}{style}>{render_inline(text)}</{tag}>"

    head = "<tr>" + "".join(cell("th", c, i) for i, c in enumerate(header)) + "</tr>"
    rows = []
    for line in body_lines:
        cells = _split_row(line)
        cells += [""] * (len(header) - len(cells))
        rows.append("<tr>" + "".join(cell("td", c, i) for i, c in enumerate(cells)) + "</tr>")
    return f"<table><thead>{head}</thead><tbody>{''.join(rows)}</tbody></table>"


def render_code(element: SlideElement) -> str:
    language = (element.language or "").strip()
    class_attr = f' class="language-{escape_html(language)}"' if language else ""
    return f"<pre><code{class_attr}>{escape_html(element.content)}</code></pre>"


def render_blockquote(content: str) -> str:
    text = "\n".join(re.sub(r"^\s*>\s?", "", line) for line in content.split("\n"))
    return f"<blockquote>{render_inline(text)}</blockquote>"


def render_element(element: SlideElement, context: RenderContext) -> str:
    kind = element.type
    if kind == "heading":
        level = max(1, min(int(element.level or 1), 6))
        return f"<h{level}>{render_inline(element.content)}</h{level}>"
    if kind == "paragraph":
        return f"<p>{render_inline(element.content)}</p>"
    if kind == "list":
        return render_list(element.content)
    if kind == "blockquote":
        return render_blockquote(element.content)
    if kind == "image":
        return render_figure(element, context)
    if kind == "code":
        return render_code(element)
    if kind == "table":
        return render_table(element.content)
    if kind == "math":
        return f'<div class="math-block">{escape_html(element.content)}</div>'
    if kind == "kicker":
        return f'<div class="kicker">{render_inline(element.content)}</div>'
    logger.debug("Unknown element type %r rendered as paragraph", kind)
    return f"<p>{render_inline(element.content)}</p>"
