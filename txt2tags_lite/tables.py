"""Table blocks: row splitting, cell construction and row rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import TABLE_DELIMITER
from .inline import run_inline_substitutions
from .models import Markup, TableCell, TextAlign
from .status import ProcessStatus

if TYPE_CHECKING:
    from .renderer import Renderer


def is_table_row(markup: Markup, line: str | None) -> bool:
    """Tell whether `line` is a row of the `markup` table variant."""
    return line is not None and line.strip().startswith(markup.start_tag)


def split_row(row: str) -> list[str]:
    """Split a stripped table row into raw cell texts.

    The leading ``"|"`` (``"||"`` for header rows) and one trailing ``"|"``
    are removed first. A row ending in ``"||"`` yields a trailing empty cell,
    which spans the previous column.

    Examples:
        split_row("| a | b |")  # [" a ", " b "]
        split_row("| a ||")  # [" a ", ""]
    """
    if row.startswith(Markup.TABLE_HEADER.start_tag.strip()):
        body = row[2:]
    elif row.startswith(TABLE_DELIMITER):
        body = row[1:]
    else:
        body = row

    if body.endswith(TABLE_DELIMITER):
        body = body[:-1]
        if body.endswith(TABLE_DELIMITER):
            body += TABLE_DELIMITER

    cells = []
    remainder = body
    while remainder:
        cell, _, remainder = remainder.partition(TABLE_DELIMITER)
        cells.append(cell)
    return cells


def _strip_padding(text: str) -> str:
    """Remove the single padding space on each side of a cell."""
    if text.startswith(" "):
        text = text[1:]
    if text.endswith(" "):
        text = text[:-1]
    return text


def cell_alignment(content: str) -> TextAlign:
    """Derive a cell's alignment from its extra leading and trailing spaces."""
    leading = len(content) - len(content.lstrip(" "))
    trailing = len(content) - len(content.rstrip(" "))
    if leading == trailing and leading > 0:
        return TextAlign.CENTER
    if leading > trailing:
        return TextAlign.RIGHT
    return TextAlign.LEFT


def build_cells(row: str, border: bool, renderer: Renderer) -> list[TableCell]:
    """Build the cells of a stripped table row.

    An empty cell after the first one widens the previous cell and is kept
    as a placeholder whose text is None.

    Args:
        row: Table row without surrounding whitespace.
        border: Whether the table has borders.
        renderer: Renderer used for inline substitution of cell texts.

    Returns:
        list[TableCell]: One cell per column, placeholders included.
    """
    cells: list[TableCell] = []
    spanned: TableCell | None = None

    for index, raw in enumerate(split_row(row)):
        content = _strip_padding(raw)
        if index > 0 and not content and spanned is not None:
            spanned.colspan += 1
            cells.append(TableCell(None, has_border=border))
            continue

        text = run_inline_substitutions(content.strip(), renderer)
        spanned = TableCell(text, cell_alignment(content), border)
        cells.append(spanned)

    return cells


def _render_row(markup: Markup, line: str, status: ProcessStatus, opening: bool = False) -> str:
    renderer = status.renderer
    fragments = []
    if opening:
        fragments.append(
            renderer.table_start(markup, line, status.table_border, line.startswith(" "))
        )
    fragments.append(renderer.table_row(markup, False))
    fragments.append(renderer.table_cells(markup, build_cells(line.strip(), status.table_border, renderer)))
    fragments.append(renderer.table_row(markup, True))
    return "".join(fragments)


def process_table(markup: Markup, line: str, status: ProcessStatus) -> None:
    """Process one line of a table.

    A table switches between plain and header rows without closing. A line
    holding only a vertical bar ends the table. Any other line that is not a
    row of the current variant closes the table; non-blank lines are then
    processed again.
    """
    if not status.continuation:
        status.mode = markup
        status.out_line = _render_row(markup, line, status, opening=True)
        return

    if markup is Markup.TABLE_HEADER and is_table_row(Markup.TABLE, line):
        status.mode = Markup.TABLE
        status.out_line = ""
        status.reprocess = True
    elif markup is Markup.TABLE and is_table_row(Markup.TABLE_HEADER, line):
        status.mode = Markup.TABLE_HEADER
        status.out_line = ""
        status.reprocess = True
    elif line.strip() == TABLE_DELIMITER:
        status.out_line = status.run_end_block()
        status.mode = None
    elif not is_table_row(markup, line):
        status.out_line = status.run_end_block()
        status.mode = None
        status.reprocess = bool(line.strip())
    else:
        status.out_line = _render_row(markup, line, status)
