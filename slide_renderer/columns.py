"""
Column flow for the default and explicit column layouts.

Elements carry an optional 0-based ``column_index`` set by the parser.
The ``default`` layout derives the column count from the data; the
explicit layouts fix it and merge surplus data columns into the last one.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import SlideElement

logger = logging.getLogger(__name__)

MAX_COLUMNS = 3

RATIOS = ("equal", "narrow-wide", "wide-narrow")

# layout tag -> (visual column count, ratio)
COLUMN_LAYOUTS: Dict[str, Tuple[int, str]] = {
    "1-column": (1, "equal"),
    "2-columns": (2, "equal"),
    "3-columns": (3, "equal"),
    "2-columns-1+2": (2, "narrow-wide"),
    "2-columns-2+1": (2, "wide-narrow"),
}

# gap between columns, in slide units
COLUMN_GAPS = {2: 3, 3: 5}


@dataclass
class ColumnPlan:
    """Where every element of a slot-based slide ends up."""
    header: List[SlideElement] = field(default_factory=list)
    columns: List[List[SlideElement]] = field(default_factory=lambda: [[]])
    ratio: Optional[str] = None  # None for auto-detected layouts

    @property
    def count(self) -> int:
        return len(self.columns)

    @property
    def css_classes(self) -> str:
        classes = ["slot-columns", f"columns-{self.count}"]
        if self.ratio:
            classes.append(f"ratio-{self.ratio}")
        return " ".join(classes)


def split_header(elements: Sequence[SlideElement]) -> Tuple[List[SlideElement], List[SlideElement], List[SlideElement]]:
    """Return (header, untagged body, column-tagged) keeping document order."""
    header, body, tagged = [], [], []
    for element in elements:
        if element.column_index is not None:
            tagged.append(element)
        elif element.is_header:
            header.append(element)
        else:
            body.append(element)
    return header, body, tagged


def data_column(element: SlideElement) -> int:
    """0-based data column of a tagged element; negative indices mean the first column."""
    return max(0, int(element.column_index))


def detected_column_count(elements: Sequence[SlideElement]) -> int:
    """Visual column count the default layout would use for *elements*."""
    indices = [data_column(e) for e in elements if e.column_index is not None]
    if not indices:
        return 1
    return min(max(indices) + 1, MAX_COLUMNS)


def plan_auto_columns(elements: Sequence[SlideElement]) -> ColumnPlan:
    """Group by ``column_index``; column count is ``min(max index + 1, 3)``."""
    header, body, tagged = split_header(elements)
    count = detected_column_count(tagged)
    columns: List[List[SlideElement]] = [[] for _ in range(count)]
    for element in tagged:
        columns[min(data_column(element), count - 1)].append(element)
    # Untagged body content leads the first column.
    columns[0] = body + columns[0]
    return ColumnPlan(header=header, columns=columns)


def plan_explicit_columns(
    elements: Sequence[SlideElement],
    count: int,
    ratio: str = "equal",
) -> ColumnPlan:
    """
    Distribute elements over a fixed number of visual columns.

    Data columns beyond the visual count are merged into the last visual
    column. Without any tagged element all body content goes to column 1
    and the remaining columns stay empty.
    """
    count = max(1, min(int(count), MAX_COLUMNS))
    if ratio not in RATIOS:
        ratio = "equal"
    header, body, tagged = split_header(elements)
    columns: List[List[SlideElement]] = [[] for _ in range(count)]

    data_count = max((data_column(e) for e in tagged), default=-1) + 1
    for element in tagged:
        target = data_column(element)
        if data_count > count and target >= count - 1:
            target = count - 1
        columns[min(target, count - 1)].append(element)
    if data_count > count:
        logger.debug("Merged %d data columns into %d visual columns", data_count, count)

    columns[0] = body + columns[0]
    return ColumnPlan(header=header, columns=columns, ratio=ratio)


def plan_for_layout(layout: str, elements: Sequence[SlideElement]) -> ColumnPlan:
    if layout in COLUMN_LAYOUTS:
        count, ratio = COLUMN_LAYOUTS[layout]
        return plan_explicit_columns(elements, count, ratio)
    return plan_auto_columns(elements)


def render_column_block(plan: ColumnPlan, render_element: Callable[[SlideElement], str]) -> str:
    """Emit the ``slot-header`` + ``slot-columns`` markup for *plan*."""
    header = "\n".join(render_element(e) for e in plan.header)
    columns = []
    for number, column in enumerate(plan.columns, start=1):
        inner = "\n".join(render_element(e) for e in column)
        columns.append(f'<div class="column" data-column="{number}">{inner}</div>')
    return (
        f'<div class="slot-header">{header}</div>\n'
        f'<div class="{plan.css_classes}">\n' + "\n".join(columns) + "\n</div>"
    )
