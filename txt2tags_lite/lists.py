"""Unordered, ordered and definition list blocks."""

from __future__ import annotations

from .inline import run_inline_substitutions
from .models import Markup
from .status import ProcessStatus

NESTABLE_LISTS = (Markup.UNORDERED_LIST, Markup.ORDERED_LIST)


def _leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _item_text(markup: Markup, text: str, status: ProcessStatus) -> str:
    if text.startswith(markup.start_tag):
        text = text[len(markup.start_tag) :]
    return run_inline_substitutions(text, status.renderer)


def _opens_nested_list(stripped: str) -> bool:
    return any(stripped.startswith(markup.start_tag) for markup in NESTABLE_LISTS)


def close_entire_list(status: ProcessStatus) -> str:
    """Close the open list and every enclosing level.

    Returns:
        str: The concatenated end tags, innermost first.
    """
    fragments = [status.run_end_block()]
    while status.depth:
        status.mode = status.pop_depth()
        fragments.append(status.run_end_block())

    status.mode = None
    status.blank_line_count = 0
    status.base_indent = 0
    return "".join(fragments)


def process_list(markup: Markup, line: str, status: ProcessStatus) -> None:
    """Process one line of an unordered or ordered list.

    Nesting follows indentation: a deeper line that starts with a list marker
    opens a nested list, a shallower one closes the innermost level. Two
    consecutive blank lines close every level at once; a line holding only
    the marker character closes the innermost level.
    """
    if not status.continuation:
        if not status.depth:
            status.base_indent = _leading_spaces(line)
        status.mode = markup
        status.blank_line_count = 0
        status.out_line = status.run_start_block(_item_text(markup, line.strip(), status))
        return

    stripped = line.strip()
    if not stripped:
        status.blank_line_count += 1
        status.out_line = ""
        if status.blank_line_count > 1:
            status.out_line = close_entire_list(status)
        return

    status.blank_line_count = 0
    leading = _leading_spaces(line)

    if stripped == markup.start_tag.strip():
        status.out_line = status.run_end_block()
        status.mode = status.pop_depth()
    elif leading > status.current_indent:
        if _opens_nested_list(stripped):
            status.push_depth(markup, leading - status.current_indent)
            status.mode = None
            status.out_line = ""
            status.reprocess = True
        else:
            # Indented text continues the current item
            status.out_line = run_inline_substitutions(stripped, status.renderer)
    elif leading < status.current_indent:
        status.out_line = status.run_end_block()
        status.mode = status.pop_depth()
        status.reprocess = True
    elif not stripped.startswith(markup.start_tag):
        status.out_line = close_entire_list(status)
        status.reprocess = True
    else:
        status.out_line = status.run_item_block(_item_text(markup, stripped, status))


def process_definition_list(markup: Markup, line: str, status: ProcessStatus) -> None:
    """Process one line of a definition list.

    Lines starting with ``": "`` are terms, indented lines are definitions of
    the latest term. A line holding only ``":"`` or two blank lines close the
    list; any other line closes it and is processed again.
    """
    if not status.continuation:
        status.mode = markup
        status.blank_line_count = 0
        status.out_line = status.run_start_block(_item_text(markup, line.strip(), status))
        return

    stripped = line.strip()
    if not stripped:
        status.blank_line_count += 1
        status.out_line = ""
        if status.blank_line_count > 1:
            status.out_line = status.run_end_block()
            status.mode = None
            status.blank_line_count = 0
        return

    status.blank_line_count = 0
    if stripped == markup.start_tag.strip():
        status.out_line = status.run_end_block()
        status.mode = None
    elif line.startswith(markup.start_tag):
        status.out_line = status.run_item_block(_item_text(markup, stripped, status))
    elif line[0].isspace():
        text = run_inline_substitutions(stripped, status.renderer)
        status.out_line = status.renderer.definition(text)
    else:
        status.out_line = status.run_end_block()
        status.mode = None
        status.reprocess = True
