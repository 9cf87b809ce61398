"""Target renderer interface.

A renderer maps the engine's abstract block, beautifier, image and link
operations to concrete target syntax. Every target builds a table of
`BlockTags` keyed by `Markup`; table variants and definitions have their own
methods because they take structured input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .inline import beautify
from .models import Beautifier, ImageLinkData, Markup, TableCell

logger = logging.getLogger(__name__)


def _passthrough(text: str) -> str:
    return text


def _nothing(text: str = "") -> str:
    return ""


@dataclass(frozen=True)
class BlockTags:
    """Tag operations for one block-level markup variant.

    Attributes:
        start: Renders the first line of the block.
        item: Renders a continuation line of the block.
        end: Renders the closing tags of the block.
    """

    start: Callable[[str], str] = _passthrough
    item: Callable[[str], str] = _passthrough
    end: Callable[[], str] = _nothing


SILENT_TAGS = BlockTags(start=_nothing, item=_nothing, end=_nothing)
VERBATIM_FALLBACK = BlockTags()


class Renderer:
    """Base class for target renderers.

    Subclasses fill `blocks` and `beautifiers` in `__init__` and implement the
    table, definition, image and link hooks.

    Attributes:
        name: Target name, as accepted by `create_renderer`.
        blocks: Block tag operations keyed by markup variant.
        beautifiers: Start and end tags keyed by beautifier.
        title_counters: Counters for numbered title levels 0, 1 and 2.
        list_depth: Number of enclosing list levels, kept in sync by the engine.
    """

    name = ""

    def __init__(self):
        self.title_counters = [0, 0, 0]
        self.list_depth = 0
        self.blocks: dict[Markup, BlockTags] = {
            Markup.TODO: SILENT_TAGS,
            Markup.TODO_BLOCK: SILENT_TAGS,
        }
        self.beautifiers: dict[Beautifier, tuple[str, str]] = {}

    def _block_tags(self, markup: Markup) -> BlockTags:
        tags = self.blocks.get(markup)
        if tags is None:
            logger.warning("%s renderer has no tags for %s", self.name, markup.name)
            return VERBATIM_FALLBACK
        return tags

    def block_start(self, markup: Markup, text: str) -> str:
        return self._block_tags(markup).start(text)

    def block_item(self, markup: Markup, text: str) -> str:
        return self._block_tags(markup).item(text)

    def block_end(self, markup: Markup) -> str:
        return self._block_tags(markup).end()

    def definition(self, text: str) -> str:
        """Render the description part of a definition list entry."""
        return text

    def table_start(self, markup: Markup, text: str, border: bool, centered: bool) -> str:
        raise NotImplementedError

    def table_row(self, markup: Markup, closing: bool) -> str:
        raise NotImplementedError

    def table_cells(self, markup: Markup, cells: list[TableCell]) -> str:
        raise NotImplementedError

    def start_tag(self, beautifier: Beautifier) -> str | None:
        tags = self.beautifiers.get(beautifier)
        return tags[0] if tags else None

    def end_tag(self, beautifier: Beautifier) -> str | None:
        tags = self.beautifiers.get(beautifier)
        return tags[1] if tags else None

    def beautify(self, beautifier: Beautifier, text: str) -> str:
        """Replace every `beautifier` span in `text` with this target's tags.

        Lines are returned unchanged when the target has no tags for the
        beautifier.
        """
        tags = self.beautifiers.get(beautifier)
        if tags is None:
            return text
        return beautify(text, beautifier, *tags)

    def render_image(self, data: ImageLinkData) -> str:
        raise NotImplementedError

    def render_link(self, data: ImageLinkData) -> str:
        raise NotImplementedError

    def already_rendered(self, text: str) -> bool:
        """Tell whether `text` starts with markup produced by this renderer."""
        return False

    def title_counter(self, level: int) -> str:
        """Advance the numbered title counter for `level`.

        Deeper levels restart from zero.

        Args:
            level: Zero-based title level (0, 1 or 2).

        Returns:
            str: Dotted counter followed by a space, or an empty string for a
                negative level.

        Examples:
            renderer.title_counter(0)  # "1. "
            renderer.title_counter(1)  # "1.1. "
        """
        if level < 0:
            return ""

        self.title_counters[level] += 1
        for deeper in range(level + 1, len(self.title_counters)):
            self.title_counters[deeper] = 0

        return "".join(f"{counter}." for counter in self.title_counters[: level + 1]) + " "

    def set_list_depth(self, depth: int) -> None:
        self.list_depth = depth
