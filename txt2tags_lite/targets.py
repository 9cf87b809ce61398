"""Registry of output targets."""

from __future__ import annotations

from .exceptions import UnsupportedTargetError
from .html_renderer import HtmlRenderer
from .man_renderer import ManRenderer
from .renderer import Renderer
from .wiki_renderer import WikiRenderer

RENDERERS: dict[str, type[Renderer]] = {
    HtmlRenderer.name: HtmlRenderer,
    ManRenderer.name: ManRenderer,
    WikiRenderer.name: WikiRenderer,
}


def create_renderer(target: str) -> Renderer:
    """Create a fresh renderer for a target name.

    Args:
        target: One of ``"html"``, ``"man"`` or ``"wiki"`` (case-insensitive).

    Returns:
        Renderer: A new renderer with its own title and list counters.

    Raises:
        UnsupportedTargetError: If no renderer exists for `target`.

    Examples:
        renderer = create_renderer("wiki")
    """
    renderer_class = RENDERERS.get(target.lower()) if isinstance(target, str) else None
    if renderer_class is None:
        raise UnsupportedTargetError(target)
    return renderer_class()
