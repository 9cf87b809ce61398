"""Data models for txt2tags-lite."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Markup(Enum):
    """Block-level markup variants, declared in recognition priority order.

    Each member carries static metadata about the source syntax.

    Attributes:
        start_tag: Source text opening the block.
        end_tag: Source text closing the block.
        runs_beautifiers: Whether inline substitution runs on the block's text.
        end_tag_required: Whether a blank line is not enough to close the block.
        one_line_result: Whether the block renders on a single line.
    """

    VERBATIM_LINE = ("``` ", "\n", False, True, True)
    VERBATIM_AREA = ("```", "```", False, True, False)
    RAW_AREA = ('"""', '"""', False, True, False)
    TAGGED_AREA = ("'''", "'''", False, True, False)
    SEPARATOR = ("-" * 20, "\n", False, False, True)
    BOLD_SEPARATOR = ("=" * 20, "\n", False, False, True)
    TITLE_LEVEL_1 = ("= ", " =", True, True, True)
    TITLE_LEVEL_2 = ("== ", " ==", True, True, True)
    TITLE_LEVEL_3 = ("=== ", " ===", True, True, True)
    NUMBERED_TITLE_LEVEL_1 = ("+ ", " +", True, True, True)
    NUMBERED_TITLE_LEVEL_2 = ("++ ", " ++", True, True, True)
    NUMBERED_TITLE_LEVEL_3 = ("+++ ", " +++", True, True, True)
    TODO_BLOCK = ("%%%", "%%%", False, False, True)
    TODO = ("% ", "\n", False, False, True)
    UNORDERED_LIST = ("- ", "- ", True, False, False)
    ORDERED_LIST = ("+ ", "+ ", True, False, False)
    DEFINITION_LIST = (": ", ": ", True, False, False)
    TABLE = ("| ", "|", True, False, False)
    TABLE_HEADER = ("|| ", "|", True, True, True)
    QUOTED_PARAGRAPH = ("\t", "", True, False, False)
    PARAGRAPH = ("", "", True, False, False)

    def __init__(
        self,
        start_tag: str,
        end_tag: str,
        runs_beautifiers: bool,
        end_tag_required: bool,
        one_line_result: bool,
    ):
        self.start_tag = start_tag
        self.end_tag = end_tag
        self.runs_beautifiers = runs_beautifiers
        self.end_tag_required = end_tag_required
        self.one_line_result = one_line_result

    @property
    def is_list(self) -> bool:
        return self in _LIST_MARKUPS

    @property
    def is_table(self) -> bool:
        return self in (Markup.TABLE, Markup.TABLE_HEADER)


_LIST_MARKUPS = frozenset({Markup.UNORDERED_LIST, Markup.ORDERED_LIST, Markup.DEFINITION_LIST})

# Levels 0, 1 and 2 of the numbered title counters.
TITLE_LEVELS = {
    Markup.TITLE_LEVEL_1: 0,
    Markup.TITLE_LEVEL_2: 1,
    Markup.TITLE_LEVEL_3: 2,
    Markup.NUMBERED_TITLE_LEVEL_1: 0,
    Markup.NUMBERED_TITLE_LEVEL_2: 1,
    Markup.NUMBERED_TITLE_LEVEL_3: 2,
}


class Beautifier(Enum):
    """Inline decorations applied inside a line.

    Attributes:
        start_tag: Source delimiter opening the decoration.
        end_tag: Source delimiter closing the decoration.
        pattern: Regular expression matching a complete decorated span.
    """

    SOFT_LINE_BREAK = ("\\", "\n", r"\\$")
    BOLD = ("**", "**", r"(^|\s)\*\*([^\s](|.*?[^\s])\**)\*\*")
    ITALIC = ("//", "//", r"(^|\s)//([^\s](|.*?[^\s])/*)(?<!http:)(?<!https:)//")
    UNDERLINE = ("__", "__", r"(^|\s)__([^\s_](|.*?[^\s_])_*)__")
    STRIKE = ("--", "--", r"(^|\s)--([^\s](|.*?[^\s])-*)--")
    MONOSPACE = ("``", "``", r"(^|\s)``([^\s](|.*?[^\s])`*)``")

    def __init__(self, start_tag: str, end_tag: str, pattern: str):
        self.start_tag = start_tag
        self.end_tag = end_tag
        self.pattern = pattern


class TextAlign(Enum):
    """Horizontal alignment of images, links and table cells."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class DepthEntry:
    """One open nesting level on the depth stack.

    Attributes:
        markup: List variant that was open when the nested level started.
        indent: Columns this level adds on top of the enclosing levels.
    """

    markup: Markup
    indent: int


@dataclass
class ImageLinkData:
    """Descriptor handed to renderers for images and links.

    Attributes:
        path: Image path or link URL.
        align: Alignment derived from the position in the line.
        label: Link label, possibly rendered image markup; empty when absent.
    """

    path: str
    align: TextAlign = TextAlign.LEFT
    label: str = ""


@dataclass
class TableCell:
    """A single table cell.

    Attributes:
        text: Cell content after inline substitution, or None for a cell merged
            into its left neighbour.
        align: Alignment derived from the cell padding.
        has_border: Whether the table was declared with a closing border.
        colspan: Number of columns covered by the cell.
    """

    text: str | None
    align: TextAlign = TextAlign.LEFT
    has_border: bool = False
    colspan: int = 1
