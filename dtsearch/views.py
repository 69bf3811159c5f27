import logging
from typing import List, Sequence

from rich.console import Console
from rich.text import Text

from dtsearch.columns import Column, format_row
from dtsearch.formatting import align_cell, natural_width
from dtsearch.models import Hit
from dtsearch.selection import pick_columns

logger = logging.getLogger(__name__)


def build_table(catalog: Sequence[Column], hits: Sequence[Hit], width: int) -> List[Text]:
    """
    Lay out ``hits`` as lines no wider than ``width``: header first, then one
    line per hit in the order given. Returns no lines for no hits.
    """
    if not hits:
        return []

    rows = [format_row(catalog, h) for h in hits]
    widths = [
        natural_width(col.title, [r[j] for r in rows], col.max_width)
        for j, col in enumerate(catalog)
    ]
    picked = pick_columns(catalog, widths, width)
    if not picked:
        logger.warning("No columns selected for a %d column terminal", width)
        return []

    lines = [Text(" ").join(
        Text(align_cell(catalog[j].title, widths[j], catalog[j].align)) for j in picked
    )]
    for hit, row in zip(hits, rows):
        cells = []
        for j in picked:
            col = catalog[j]
            value = align_cell(row[j], widths[j], col.align)
            cells.append(col.highlight(value, hit) if col.highlight else Text(value))
        lines.append(Text(" ").join(cells))
    return lines


def print_table(console: Console, lines: Sequence[Text]):
    # Lines are already sized; stop rich from wrapping or cropping them.
    for line in lines:
        console.print(line, soft_wrap=True)
