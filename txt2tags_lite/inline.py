"""Inline substitution: beautifiers, images and links."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import SplitResult, urlsplit

from .constants import (
    BRACKET_PATTERN,
    IMAGE_LINK_PATTERN,
    IMAGE_PATTERN,
    NAMED_LINK_PATTERN,
)
from .models import Beautifier, ImageLinkData, TextAlign

if TYPE_CHECKING:
    from .renderer import Renderer

BEAUTIFIER_PATTERNS = {
    beautifier: re.compile(beautifier.pattern, re.IGNORECASE) for beautifier in Beautifier
}

URL_SCHEMES = frozenset({"http", "https", "ftp", "file", "jar", "mailto"})
_NETWORK_SCHEMES = frozenset({"http", "https", "ftp"})
_INVALID_URL_CHARACTERS = frozenset('"<>\\^`{|}[]')
_TRAILING_PUNCTUATION = ".,;:)"


def _enclosing_bracket(text: str, start: int, end: int) -> re.Match | None:
    for bracket in BRACKET_PATTERN.finditer(text):
        if bracket.start() < start and end < bracket.end():
            return bracket
    return None


def beautify(text: str, beautifier: Beautifier, start_tag: str, end_tag: str) -> str:
    """Replace the delimiters of every `beautifier` span with target tags.

    Spans lying entirely inside a bracketed image or link are skipped. Scanning
    resumes after each inserted end tag, so generated text is never rescanned.

    Args:
        text: Line to transform.
        beautifier: Decoration to substitute.
        start_tag: Target text replacing the opening delimiter.
        end_tag: Target text replacing the closing delimiter.

    Returns:
        str: The line with target tags in place of the source delimiters.

    Examples:
        beautify("**a** b", Beautifier.BOLD, "<strong>", "</strong>")
        # "<strong>a</strong> b"
    """
    pattern = BEAUTIFIER_PATTERNS[beautifier]
    result = text
    position = 0

    while position < len(result):
        match = pattern.search(result, position)
        if match is None:
            break

        start, end = match.span()
        # The pattern includes the whitespace preceding the opening delimiter
        if result[start].isspace():
            start += 1

        bracket = _enclosing_bracket(result, start, end)
        if bracket is not None:
            position = bracket.end()
            continue

        if end - start > 1:
            end_offset = end - len(beautifier.end_tag)
            result = result[:end_offset] + end_tag + result[end:]
            end = end_offset + len(end_tag)
        result = result[:start] + start_tag + result[start + len(beautifier.start_tag) :]
        position = end + len(start_tag) - len(beautifier.start_tag)

    return result


def determine_text_align(text: str, start: int, end: int) -> TextAlign:
    """Derive alignment from a span's position in its line.

    Args:
        text: Line containing the span.
        start: Index where the span starts.
        end: Index just past the span.

    Returns:
        TextAlign: LEFT at the start of the line, RIGHT at its end (one trailing
            character allowed), CENTER otherwise.
    """
    if start <= 0:
        return TextAlign.LEFT
    if end >= len(text) - 1:
        return TextAlign.RIGHT
    return TextAlign.CENTER


def try_parse_url(text: str) -> SplitResult | None:
    """Parse `text` as an absolute URL.

    Args:
        text: Candidate token, usually one space-delimited word of a line.

    Returns:
        SplitResult | None: The parsed URL, or None when `text` is not an
            absolute URL with a supported scheme.

    Examples:
        try_parse_url("https://example.com/docs")  # SplitResult(...)
        try_parse_url("example.com")  # None
    """
    if not text or any(
        character.isspace() or character in _INVALID_URL_CHARACTERS for character in text
    ):
        return None

    try:
        parts = urlsplit(text)
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if scheme not in URL_SCHEMES:
        return None
    if scheme in _NETWORK_SCHEMES and not parts.netloc:
        return None
    if not (parts.netloc or parts.path):
        return None
    return parts


def substitute_images(text: str, renderer: Renderer) -> str:
    """Render every bracketed image that is not the image part of a link."""
    result = text
    position = 0

    while True:
        match = IMAGE_PATTERN.search(result, position)
        if match is None:
            break

        start, end = match.span()
        if start > 0 and result[start - 1] == "[":
            position = end
            continue

        data = ImageLinkData(match.group("path"), determine_text_align(result, start, end))
        image = renderer.render_image(data)
        result = result[:start] + image + result[end:]
        position = start + len(image)

    return result


def substitute_image_links(text: str, renderer: Renderer) -> str:
    """Render ``[[image.png] url]`` as a link labelled with the rendered image."""
    result = text
    position = 0

    while True:
        match = IMAGE_LINK_PATTERN.search(result, position)
        if match is None:
            break

        start, end = match.span()
        align = determine_text_align(result, start, end)
        image = renderer.render_image(ImageLinkData(match.group("path"), align))
        url = match.group("target").strip().rpartition(" ")[2]
        link = renderer.render_link(ImageLinkData(url, align, image))
        result = result[:start] + link + result[end:]
        position = start + len(link)

    return result


def substitute_named_links(text: str, renderer: Renderer) -> str:
    """Render ``[label url]`` and ``[url]`` links.

    The URL is the last space-delimited word inside the brackets. Spans the
    renderer reports as already rendered are left alone.
    """
    result = text
    position = 0

    while True:
        match = NAMED_LINK_PATTERN.search(result, position)
        if match is None:
            break

        start, end = match.span()
        if renderer.already_rendered(result[start:]):
            position = end
            continue

        label, _, url = match.group("inner").rpartition(" ")
        data = ImageLinkData(url, determine_text_align(result, start, end), label)
        link = renderer.render_link(data)
        result = result[:start] + link + result[end:]
        position = start + len(link)

    return result


def substitute_bare_urls(text: str, renderer: Renderer) -> str:
    """Render each space-delimited word that parses as an absolute URL.

    Punctuation closing a sentence or clause stays outside the link.
    """
    words = text.split(" ")
    for index, word in enumerate(words):
        url = word.rstrip(_TRAILING_PUNCTUATION)
        if try_parse_url(url) is not None:
            link = renderer.render_link(ImageLinkData(url)).strip()
            words[index] = link + word[len(url) :]
    return " ".join(words)


def run_inline_substitutions(text: str, renderer: Renderer) -> str:
    """Apply beautifiers, then images, then links to one line of text.

    Args:
        text: Line content outside verbatim, raw and tagged areas.
        renderer: Target renderer supplying tag text.

    Returns:
        str: The substituted line.

    Examples:
        run_inline_substitutions("**bold** and //italic//", HtmlRenderer())
        # "<strong>bold</strong> and <i>italic</i>"
    """
    result = text
    for beautifier in Beautifier:
        result = renderer.beautify(beautifier, result)

    result = substitute_images(result, renderer)
    result = substitute_image_links(result, renderer)
    result = substitute_named_links(result, renderer)
    return substitute_bare_urls(result, renderer)
