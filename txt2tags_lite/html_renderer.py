"""HTML target."""

from __future__ import annotations

from .models import Beautifier, ImageLinkData, Markup, TableCell, TextAlign
from .renderer import BlockTags, Renderer

BORDER_STYLE = "border: 1px solid black;"
CENTER_STYLE = "margin-left: auto; margin-right: auto;"


def _list_tags(tag: str) -> BlockTags:
    return BlockTags(
        start=lambda text: f"<{tag}>\n<li>{text}",
        item=lambda text: f"</li>\n<li>{text}",
        end=lambda: f"</li>\n</{tag}>\n",
    )


class HtmlRenderer(Renderer):
    """Render blocks and inline markup as HTML fragments."""

    name = "html"

    def __init__(self):
        super().__init__()
        self.blocks.update(
            {
                Markup.VERBATIM_LINE: BlockTags(
                    start=lambda text: f"<pre>\n{text}\n</pre>", item=lambda text: ""
                ),
                Markup.VERBATIM_AREA: BlockTags(
                    start=lambda text: "<pre>", end=lambda: "</pre>"
                ),
                Markup.RAW_AREA: BlockTags(start=lambda text: ""),
                Markup.TAGGED_AREA: BlockTags(start=lambda text: ""),
                Markup.SEPARATOR: BlockTags(start=lambda text: "<hr>"),
                Markup.BOLD_SEPARATOR: BlockTags(
                    start=lambda text: "<hr style='border-width: 2px;'>"
                ),
                Markup.UNORDERED_LIST: _list_tags("ul"),
                Markup.ORDERED_LIST: _list_tags("ol"),
                Markup.DEFINITION_LIST: BlockTags(
                    start=lambda text: f"<dl>\n<dt>{text}</dt><dd>",
                    item=lambda text: f"</dd>\n<dt>{text}</dt><dd>",
                    end=lambda: "</dd>\n</dl>\n",
                ),
                Markup.QUOTED_PARAGRAPH: BlockTags(
                    start=lambda text: f"<blockquote>\n{text}",
                    end=lambda: "</blockquote>\n",
                ),
                Markup.PARAGRAPH: BlockTags(
                    start=lambda text: f"<p>\n{text}", end=lambda: "</p>\n"
                ),
                Markup.TABLE: BlockTags(end=lambda: "</table>\n"),
                Markup.TABLE_HEADER: BlockTags(end=lambda: "</table>\n"),
            }
        )
        for markup, level in (
            (Markup.TITLE_LEVEL_1, 1),
            (Markup.TITLE_LEVEL_2, 2),
            (Markup.TITLE_LEVEL_3, 3),
        ):
            self.blocks[markup] = self._title_tags(level, numbered=False)
        for markup, level in (
            (Markup.NUMBERED_TITLE_LEVEL_1, 1),
            (Markup.NUMBERED_TITLE_LEVEL_2, 2),
            (Markup.NUMBERED_TITLE_LEVEL_3, 3),
        ):
            self.blocks[markup] = self._title_tags(level, numbered=True)

        self.beautifiers.update(
            {
                Beautifier.SOFT_LINE_BREAK: ("<br>", "</br>"),
                Beautifier.BOLD: ("<strong>", "</strong>"),
                Beautifier.ITALIC: ("<i>", "</i>"),
                Beautifier.UNDERLINE: ("<u>", "</u>"),
                Beautifier.STRIKE: ("<del>", "</del>"),
                Beautifier.MONOSPACE: ("<code>", "</code>"),
            }
        )

    def _title_tags(self, level: int, numbered: bool) -> BlockTags:
        def start(text: str) -> str:
            counter = self.title_counter(level - 1) if numbered else ""
            return f"<h{level}>{counter}"

        return BlockTags(start=start, end=lambda: f"</h{level}>")

    def table_start(self, markup: Markup, text: str, border: bool, centered: bool) -> str:
        styles = []
        if border:
            styles.append(BORDER_STYLE)
        if centered:
            styles.append(CENTER_STYLE)
        if not styles:
            return "<table>\n"
        return f"<table style='{' '.join(styles)}'>\n"

    def table_row(self, markup: Markup, closing: bool) -> str:
        return "</tr>" if closing else "<tr>\n"

    def table_cells(self, markup: Markup, cells: list[TableCell]) -> str:
        tag = "th" if markup is Markup.TABLE_HEADER else "td"
        rendered = []
        for cell in cells:
            if cell.text is None:
                continue

            attributes = []
            if cell.colspan > 1:
                attributes.append(f"colspan='{cell.colspan}'")
            styles = []
            if cell.align is not TextAlign.LEFT:
                styles.append(f"text-align: {cell.align.value};")
            if cell.has_border:
                styles.append(BORDER_STYLE)
            if styles:
                attributes.append(f"style='{' '.join(styles)}'")

            opening = " ".join([tag, *attributes])
            rendered.append(f"<{opening}>{cell.text}</{tag}>\n")
        return "".join(rendered)

    def render_image(self, data: ImageLinkData) -> str:
        return f"<img src='{data.path}' style='text-align: {data.align.value};' alt=''>"

    def render_link(self, data: ImageLinkData) -> str:
        return f"<a href='{data.path}'>{data.label or data.path}</a>"
