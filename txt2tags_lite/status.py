"""Mutable per-document conversion state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .models import DepthEntry, Markup

if TYPE_CHECKING:
    from .renderer import Renderer

logger = logging.getLogger(__name__)


@dataclass
class ProcessStatus:
    """State threaded through every step of the line engine.

    One instance belongs to one document and one `LineProcessor`.

    Attributes:
        renderer: Target renderer consulted for tag text.
        mode: Currently open block, or None at top level.
        out_line: Output produced by the latest processing pass; None when the
            pass consumed the line silently.
        reprocess: Whether the same line must be fed through the new mode again.
        continuation: False only for the first pass of a freshly resolved mode.
        depth: Enclosing list levels, innermost last.
        blank_line_count: Consecutive blank lines seen inside a list.
        table_border: Whether the open table was declared with a closing border.
        base_indent: Leading spaces of the first item of the outermost open list.
    """

    renderer: Renderer
    mode: Markup | None = None
    out_line: str | None = None
    reprocess: bool = False
    continuation: bool = False
    depth: list[DepthEntry] = field(default_factory=list)
    blank_line_count: int = 0
    table_border: bool = False
    base_indent: int = 0

    @property
    def current_indent(self) -> int:
        return self.base_indent + sum(entry.indent for entry in self.depth)

    def push_depth(self, markup: Markup, indent: int) -> None:
        self.depth.append(DepthEntry(markup, indent))
        logger.debug("Nesting %s, depth %d", markup.name, len(self.depth))
        self.renderer.set_list_depth(len(self.depth))

    def pop_depth(self) -> Markup | None:
        """Remove the innermost nesting level.

        Returns:
            Markup | None: The list variant enclosing the closed level, or None
                when no level is open.
        """
        if not self.depth:
            self.renderer.set_list_depth(0)
            return None

        entry = self.depth.pop()
        logger.debug("Unnesting to %s, depth %d", entry.markup.name, len(self.depth))
        self.renderer.set_list_depth(len(self.depth))
        return entry.markup

    def run_start_block(self, text: str) -> str:
        return self.renderer.block_start(self.mode, text)

    def run_item_block(self, text: str) -> str:
        return self.renderer.block_item(self.mode, text)

    def run_end_block(self) -> str:
        return self.renderer.block_end(self.mode)

    def reset(self) -> None:
        """Return to top level, keeping the renderer and its counters."""
        self.mode = None
        self.out_line = None
        self.reprocess = False
        self.continuation = False
        self.depth.clear()
        self.renderer.set_list_depth(0)
        self.blank_line_count = 0
        self.table_border = False
        self.base_indent = 0
