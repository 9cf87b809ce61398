"""UNIX manual page target (man and tbl macros)."""

from __future__ import annotations

from .models import Beautifier, ImageLinkData, Markup, TableCell, TextAlign
from .numerals import format_list_counter
from .renderer import BlockTags, Renderer

# Indentation step of nested list items, in ens
LIST_INDENT = 3
TABLE_SEPARATOR = "^"

_FORMAT_LETTERS = {TextAlign.LEFT: "l", TextAlign.CENTER: "c", TextAlign.RIGHT: "r"}


class ManRenderer(Renderer):
    """Render blocks and inline markup as man(7) requests."""

    name = "man"

    def __init__(self):
        super().__init__()
        self.list_counters: dict[int, int] = {}
        self._table_options: str | None = None

        self.blocks.update(
            {
                Markup.VERBATIM_LINE: BlockTags(
                    start=lambda text: f".nf\n{text}\n.fi", item=lambda text: ""
                ),
                Markup.VERBATIM_AREA: BlockTags(start=lambda text: ".nf", end=lambda: ".fi"),
                Markup.RAW_AREA: BlockTags(start=lambda text: ""),
                Markup.TAGGED_AREA: BlockTags(start=lambda text: ""),
                Markup.SEPARATOR: BlockTags(start=lambda text: "-" * 20),
                Markup.BOLD_SEPARATOR: BlockTags(start=lambda text: "=" * 20),
                Markup.TITLE_LEVEL_1: BlockTags(start=lambda text: ".TH "),
                Markup.TITLE_LEVEL_2: BlockTags(start=lambda text: ".SH "),
                Markup.TITLE_LEVEL_3: BlockTags(start=lambda text: ".SS "),
                Markup.NUMBERED_TITLE_LEVEL_1: BlockTags(
                    start=lambda text: f".SH {self.title_counter(0)}"
                ),
                Markup.NUMBERED_TITLE_LEVEL_2: BlockTags(
                    start=lambda text: f".SS {self.title_counter(1)}"
                ),
                Markup.NUMBERED_TITLE_LEVEL_3: BlockTags(
                    start=lambda text: f".SS {self.title_counter(2)}"
                ),
                Markup.UNORDERED_LIST: BlockTags(
                    start=lambda text: f".RS\n{self._bullet_item(text)}",
                    item=self._bullet_item,
                    end=lambda: ".RE\n",
                ),
                Markup.ORDERED_LIST: BlockTags(
                    start=self._start_ordered_list,
                    item=self._ordered_item,
                    end=lambda: ".RE\n",
                ),
                Markup.DEFINITION_LIST: BlockTags(
                    start=lambda text: f".TP\n{text}", item=lambda text: f".TP\n{text}"
                ),
                Markup.QUOTED_PARAGRAPH: BlockTags(
                    start=lambda text: f".RS\n.P\n{text}", end=lambda: ".RE\n"
                ),
                Markup.PARAGRAPH: BlockTags(start=lambda text: f".P\n{text}"),
                Markup.TABLE: BlockTags(end=lambda: ".TE\n"),
                Markup.TABLE_HEADER: BlockTags(end=lambda: ".TE\n"),
            }
        )

        self.beautifiers.update(
            {
                Beautifier.SOFT_LINE_BREAK: ("\n.br", ""),
                Beautifier.BOLD: ("\\fB", "\\fR"),
                Beautifier.ITALIC: ("\\fI", "\\fR"),
                Beautifier.UNDERLINE: ("", ""),
                Beautifier.STRIKE: ("", ""),
                Beautifier.MONOSPACE: ("", ""),
            }
        )

    def _item_indent(self) -> int:
        return LIST_INDENT * (self.list_depth + 1)

    def _bullet_item(self, text: str) -> str:
        return f".IP \\(bu {self._item_indent()}\n{text}"

    def _start_ordered_list(self, text: str) -> str:
        self.list_counters[self.list_depth] = 0
        return f".RS\n{self._ordered_item(text)}"

    def _ordered_item(self, text: str) -> str:
        depth = self.list_depth
        self.list_counters[depth] = self.list_counters.get(depth, 0) + 1
        counter = format_list_counter(depth, self.list_counters[depth])
        return f".IP {counter}. {self._item_indent()}\n{text}"

    def table_start(self, markup: Markup, text: str, border: bool, centered: bool) -> str:
        options = []
        if border:
            options.append("allbox")
        if centered:
            options.append("center")
        options.append(f"tab({TABLE_SEPARATOR});")
        self._table_options = " ".join(options)
        return ".TS\n"

    def table_row(self, markup: Markup, closing: bool) -> str:
        return ""

    def table_cells(self, markup: Markup, cells: list[TableCell]) -> str:
        texts = []
        letters = []
        for cell in cells:
            if cell.text is None:
                letters.append("s")
                continue
            letters.append(_FORMAT_LETTERS[cell.align])
            if markup is Markup.TABLE_HEADER:
                texts.append(f"\\fB{cell.text}\\fR")
            else:
                texts.append(cell.text)

        row = TABLE_SEPARATOR.join(texts)
        if self._table_options is None:
            return row

        # tbl reads its options and column formats before the first row only
        preamble = f"{self._table_options}\n{' '.join(letters)}.\n"
        self._table_options = None
        return preamble + row

    def render_image(self, data: ImageLinkData) -> str:
        return data.path

    def render_link(self, data: ImageLinkData) -> str:
        if not data.label:
            return data.path
        return f"{data.label} ({data.path})"
