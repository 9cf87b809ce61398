"""MediaWiki target."""

from __future__ import annotations

import re

from .models import Beautifier, ImageLinkData, Markup, TableCell
from .renderer import BlockTags, Renderer

IMAGE_PREFIX = "[[Image:"
IMAGE_MARKUP_PATTERN = re.compile(r"\[\[Image:(?P<path>[^\]]*)\]\]")
IMAGE_LINK_MARKUP_PATTERN = re.compile(r"\[\S+ \([^)\]]*\)\]")


class WikiRenderer(Renderer):
    """Render blocks and inline markup as MediaWiki text."""

    name = "wiki"

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
                Markup.SEPARATOR: BlockTags(start=lambda text: "----"),
                Markup.BOLD_SEPARATOR: BlockTags(start=lambda text: "----"),
                Markup.UNORDERED_LIST: BlockTags(
                    start=lambda text: self._list_item("*", text),
                    item=lambda text: self._list_item("*", text),
                    end=lambda: "",
                ),
                Markup.ORDERED_LIST: BlockTags(
                    start=lambda text: self._list_item("#", text),
                    item=lambda text: self._list_item("#", text),
                    end=lambda: "",
                ),
                Markup.DEFINITION_LIST: BlockTags(
                    start=lambda text: f"; {text}", item=lambda text: f"; {text}"
                ),
                Markup.QUOTED_PARAGRAPH: BlockTags(
                    start=lambda text: f"<blockquote>\n{text}",
                    end=lambda: "</blockquote>\n",
                ),
                Markup.PARAGRAPH: BlockTags(),
                Markup.TABLE: BlockTags(end=lambda: "|}\n"),
                Markup.TABLE_HEADER: BlockTags(end=lambda: "|}\n"),
            }
        )
        for markup, level, numbered in (
            (Markup.TITLE_LEVEL_1, 1, False),
            (Markup.TITLE_LEVEL_2, 2, False),
            (Markup.TITLE_LEVEL_3, 3, False),
            (Markup.NUMBERED_TITLE_LEVEL_1, 1, True),
            (Markup.NUMBERED_TITLE_LEVEL_2, 2, True),
            (Markup.NUMBERED_TITLE_LEVEL_3, 3, True),
        ):
            self.blocks[markup] = self._title_tags(level, numbered)

        self.beautifiers.update(
            {
                Beautifier.SOFT_LINE_BREAK: ("<br />", ""),
                Beautifier.BOLD: ("'''", "'''"),
                Beautifier.ITALIC: ("''", "''"),
                Beautifier.UNDERLINE: ("<u>", "</u>"),
                Beautifier.STRIKE: ("<s>", "</s>"),
                Beautifier.MONOSPACE: ("<code>", "</code>"),
            }
        )

    def _title_tags(self, level: int, numbered: bool) -> BlockTags:
        marker = "=" * level

        def start(text: str) -> str:
            counter = self.title_counter(level - 1) if numbered else ""
            return f"{marker} {counter}"

        return BlockTags(start=start, end=lambda: f" {marker}")

    def _list_item(self, marker: str, text: str) -> str:
        return f"{marker * (self.list_depth + 1)} {text}"

    def definition(self, text: str) -> str:
        return f": {text}"

    def table_start(self, markup: Markup, text: str, border: bool, centered: bool) -> str:
        attributes = ['cellpadding="4"']
        if border:
            attributes.append('border="1"')
        if centered:
            attributes.append('align="center"')
        return f"{{| {' '.join(attributes)}\n"

    def table_row(self, markup: Markup, closing: bool) -> str:
        if closing:
            return ""
        return "|-\n!" if markup is Markup.TABLE_HEADER else "|-\n|"

    def table_cells(self, markup: Markup, cells: list[TableCell]) -> str:
        separator = "!!" if markup is Markup.TABLE_HEADER else "||"
        rendered = []
        for cell in cells:
            if cell.text is None:
                continue
            if cell.colspan > 1:
                rendered.append(f' colspan="{cell.colspan}" | {cell.text} ')
            else:
                rendered.append(f" {cell.text} ")
        return separator.join(rendered)

    def render_image(self, data: ImageLinkData) -> str:
        return f"{IMAGE_PREFIX}{data.path}]]"

    def render_link(self, data: ImageLinkData) -> str:
        if not data.label:
            return f"[{data.path}]"

        image = IMAGE_MARKUP_PATTERN.fullmatch(data.label)
        if image is not None:
            return f"[{data.path} ({image.group('path')})]"
        return f"[{data.path} {data.label}]"

    def already_rendered(self, text: str) -> bool:
        return text.startswith(IMAGE_PREFIX) or IMAGE_LINK_MARKUP_PATTERN.match(text) is not None
