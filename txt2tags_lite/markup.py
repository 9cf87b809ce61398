"""Markup variant registry, mode resolution and block processing.

Every `Markup` member has one recognizer, telling whether a line opens that
block, and one process function, the block's state transition. Both are looked
up in module-level tables so that each variant is handled in exactly one place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import MappingProxyType

from .constants import TABLE_DELIMITER
from .inline import run_inline_substitutions
from .lists import process_definition_list, process_list
from .models import Markup
from .status import ProcessStatus
from .tables import is_table_row, process_table

logger = logging.getLogger(__name__)

# Later variants win a shared tag, so "+ " opens an ordered list.
START_TAGS = MappingProxyType({markup.start_tag: markup for markup in Markup if markup.start_tag})

SEPARATORS = (Markup.SEPARATOR, Markup.BOLD_SEPARATOR)


def _starts_with_tag(markup: Markup, line: str | None) -> bool:
    return bool(line) and line.startswith(markup.start_tag)


def _has_start_and_end_tags(markup: Markup, line: str | None) -> bool:
    return _starts_with_tag(markup, line) and line.endswith(markup.end_tag)


def _is_area_marker(markup: Markup, line: str | None) -> bool:
    return line is not None and line.strip() == markup.start_tag


def _is_list_item(markup: Markup, line: str | None) -> bool:
    return line is not None and _starts_with_tag(markup, line.strip())


def _is_paragraph(markup: Markup, line: str | None) -> bool:
    return bool(line)


_RECOGNIZERS: dict[Markup, Callable[[Markup, str | None], bool]] = {
    Markup.VERBATIM_LINE: _starts_with_tag,
    Markup.VERBATIM_AREA: _is_area_marker,
    Markup.RAW_AREA: _is_area_marker,
    Markup.TAGGED_AREA: _is_area_marker,
    Markup.SEPARATOR: _starts_with_tag,
    Markup.BOLD_SEPARATOR: _starts_with_tag,
    Markup.TITLE_LEVEL_1: _has_start_and_end_tags,
    Markup.TITLE_LEVEL_2: _has_start_and_end_tags,
    Markup.TITLE_LEVEL_3: _has_start_and_end_tags,
    Markup.NUMBERED_TITLE_LEVEL_1: _has_start_and_end_tags,
    Markup.NUMBERED_TITLE_LEVEL_2: _has_start_and_end_tags,
    Markup.NUMBERED_TITLE_LEVEL_3: _has_start_and_end_tags,
    Markup.TODO_BLOCK: _is_area_marker,
    Markup.TODO: _starts_with_tag,
    Markup.UNORDERED_LIST: _is_list_item,
    Markup.ORDERED_LIST: _is_list_item,
    Markup.DEFINITION_LIST: _starts_with_tag,
    Markup.TABLE: is_table_row,
    Markup.TABLE_HEADER: is_table_row,
    Markup.QUOTED_PARAGRAPH: _starts_with_tag,
    Markup.PARAGRAPH: _is_paragraph,
}


def is_markup(markup: Markup, line: str | None) -> bool:
    """Tell whether `line` opens a `markup` block.

    Examples:
        is_markup(Markup.TITLE_LEVEL_2, "== Usage ==")  # True
        is_markup(Markup.UNORDERED_LIST, "   - nested")  # True
    """
    return _RECOGNIZERS[markup](markup, line)


def recognize(line: str | None) -> Markup | None:
    """Return the first variant, in priority order, that `line` opens."""
    for markup in Markup:
        if is_markup(markup, line):
            return markup
    return None


def _leading_token(line: str) -> str | None:
    """Return the first space-delimited word when the line has more than one."""
    words = line.rstrip(" ").split(" ")
    return words[0] if len(words) > 1 else None


def _separator_for(line: str) -> Markup | None:
    for separator in SEPARATORS:
        if line.startswith(separator.start_tag):
            return separator
    return None


def resolve_mode(status: ProcessStatus, line: str | None) -> None:
    """Determine, switch or clear the open block for `line`.

    Args:
        status: Conversion state; `mode` and `table_border` are updated.
        line: Current source line.

    Returns:
        None.

    Examples:
        status = ProcessStatus(HtmlRenderer())
        resolve_mode(status, "| a | b |")
        status.mode  # Markup.TABLE
        status.table_border  # True
    """
    previous = status.mode

    if status.mode is None and line and line.strip():
        status.mode = recognize(line)
    elif not line or not line.strip():
        if status.mode is not None and not status.mode.end_tag_required:
            status.mode = None
    elif line == status.mode.end_tag:
        status.mode = None
    elif line in START_TAGS:
        status.mode = START_TAGS[line]
    else:
        token = _leading_token(line)
        if token is not None and f"{token} " in START_TAGS:
            status.mode = START_TAGS[f"{token} "]
        elif token is None:
            status.mode = _separator_for(line) or status.mode

    status.table_border = (
        status.mode is not None
        and status.mode.is_table
        and line is not None
        and line.rstrip().endswith(TABLE_DELIMITER)
    )

    if status.mode is not previous:
        logger.debug(
            "Mode %s -> %s",
            previous.name if previous else None,
            status.mode.name if status.mode else None,
        )


def _interrupts_paragraph(line: str) -> bool:
    """Tell whether a line inside a paragraph opens a different block."""
    token = _leading_token(line)
    opens_block = (
        line in START_TAGS
        or (token is not None and f"{token} " in START_TAGS)
        or (token is None and _separator_for(line) is not None)
    )
    return opens_block and recognize(line) is not Markup.PARAGRAPH


def _substitute(markup: Markup, text: str, status: ProcessStatus) -> str:
    if not markup.runs_beautifiers:
        return text
    return run_inline_substitutions(text, status.renderer)


def _process_verbatim_line(markup: Markup, line: str, status: ProcessStatus) -> None:
    status.mode = markup
    status.out_line = status.run_start_block(line[len(markup.start_tag) :])
    status.mode = None


def _process_area(markup: Markup, line: str, status: ProcessStatus) -> None:
    # Area content is never substituted
    if not status.continuation and line.strip() == markup.start_tag:
        status.mode = markup
        status.out_line = status.run_start_block(line)
    elif line.rstrip() == markup.end_tag:
        status.out_line = status.run_end_block()
        status.mode = None
    else:
        status.out_line = status.run_item_block(line)


def _process_separator(markup: Markup, line: str, status: ProcessStatus) -> None:
    status.mode = markup
    status.out_line = status.run_start_block(line)
    status.mode = None


def _process_one_line(markup: Markup, line: str, status: ProcessStatus) -> None:
    status.mode = markup
    body = line[len(markup.start_tag) :]
    if body.endswith(markup.end_tag):
        body = body[: len(body) - len(markup.end_tag)]

    rendered = status.run_start_block(line) + body + status.run_end_block()
    status.out_line = _substitute(markup, rendered, status)
    status.mode = None


def _process_todo(markup: Markup, line: str, status: ProcessStatus) -> None:
    status.out_line = None
    status.mode = None


def _process_quoted_paragraph(markup: Markup, line: str, status: ProcessStatus) -> None:
    if not status.continuation:
        status.mode = markup
        status.out_line = status.run_start_block(_substitute(markup, line.strip(), status))
    elif not line.strip():
        status.out_line = status.run_end_block()
        status.mode = None
    elif line in START_TAGS or not line.startswith(markup.start_tag):
        status.out_line = status.run_end_block()
        status.mode = None
        status.reprocess = True
    else:
        status.out_line = status.run_item_block(_substitute(markup, line.strip(), status))


def _process_paragraph(markup: Markup, line: str, status: ProcessStatus) -> None:
    if not status.continuation:
        status.mode = markup
        status.out_line = status.run_start_block(_substitute(markup, line, status))
    elif not line.strip():
        status.out_line = status.run_end_block()
        status.mode = None
    elif _interrupts_paragraph(line):
        status.out_line = status.run_end_block()
        status.mode = None
        status.reprocess = True
    else:
        status.out_line = status.run_item_block(_substitute(markup, line, status))


_PROCESSORS: dict[Markup, Callable[[Markup, str, ProcessStatus], None]] = {
    Markup.VERBATIM_LINE: _process_verbatim_line,
    Markup.VERBATIM_AREA: _process_area,
    Markup.RAW_AREA: _process_area,
    Markup.TAGGED_AREA: _process_area,
    Markup.SEPARATOR: _process_separator,
    Markup.BOLD_SEPARATOR: _process_separator,
    Markup.TITLE_LEVEL_1: _process_one_line,
    Markup.TITLE_LEVEL_2: _process_one_line,
    Markup.TITLE_LEVEL_3: _process_one_line,
    Markup.NUMBERED_TITLE_LEVEL_1: _process_one_line,
    Markup.NUMBERED_TITLE_LEVEL_2: _process_one_line,
    Markup.NUMBERED_TITLE_LEVEL_3: _process_one_line,
    Markup.TODO_BLOCK: _process_area,
    Markup.TODO: _process_todo,
    Markup.UNORDERED_LIST: process_list,
    Markup.ORDERED_LIST: process_list,
    Markup.DEFINITION_LIST: process_definition_list,
    Markup.TABLE: process_table,
    Markup.TABLE_HEADER: process_table,
    Markup.QUOTED_PARAGRAPH: _process_quoted_paragraph,
    Markup.PARAGRAPH: _process_paragraph,
}


def process(markup: Markup, line: str, status: ProcessStatus) -> None:
    """Run one processing pass of `line` through the `markup` block.

    The pass stores its output in `status.out_line` and sets
    `status.reprocess` when the same line must be processed again.
    """
    status.reprocess = False
    _PROCESSORS[markup](markup, line, status)
