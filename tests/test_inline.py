from __future__ import annotations

import pytest

from txt2tags_lite.inline import (
    beautify,
    determine_text_align,
    run_inline_substitutions,
    substitute_bare_urls,
    substitute_images,
    substitute_named_links,
    try_parse_url,
)
from txt2tags_lite.models import Beautifier, TextAlign
from txt2tags_lite.renderer import Renderer


def test_beautify_replaces_both_delimiters():
    result = beautify("**a** b", Beautifier.BOLD, "<strong>", "</strong>")

    assert result == "<strong>a</strong> b"


def test_beautify_handles_several_spans():
    result = beautify("x **a** and **b**", Beautifier.BOLD, "<strong>", "</strong>")

    assert result == "x <strong>a</strong> and <strong>b</strong>"


def test_beautify_requires_whitespace_before_delimiter():
    assert beautify("a**b**", Beautifier.BOLD, "<strong>", "</strong>") == "a**b**"


def test_beautify_skips_spans_inside_brackets():
    text = "[see **bold** here]"

    assert beautify(text, Beautifier.BOLD, "<strong>", "</strong>") == text


def test_beautify_substitutes_before_bracket():
    result = beautify("**bold** [x.png]", Beautifier.BOLD, "<strong>", "</strong>")

    assert result == "<strong>bold</strong> [x.png]"


def test_beautify_substitutes_between_brackets():
    result = beautify("[a.png] **b** [c.png]", Beautifier.BOLD, "<strong>", "</strong>")

    assert result == "[a.png] <strong>b</strong> [c.png]"


def test_beautify_skips_spans_inside_a_later_bracket():
    text = "[a.png] x [see **b** here]"

    assert beautify(text, Beautifier.BOLD, "<strong>", "</strong>") == text


def test_bold_inside_image_brackets_is_left_alone(html):
    assert html.beautify(Beautifier.BOLD, "see [**bold**.png]") == "see [**bold**.png]"


def test_soft_line_break_replaces_only_the_backslash(html):
    assert html.beautify(Beautifier.SOFT_LINE_BREAK, "line\\") == "line<br>"


def test_italic_ignores_url_slashes(html):
    result = html.beautify(Beautifier.ITALIC, "//it// http://x.org")

    assert result == "<i>it</i> http://x.org"


def test_empty_target_tags_remove_delimiters(man):
    assert man.beautify(Beautifier.UNDERLINE, "__u__") == "u"


def test_renderer_without_beautifiers_leaves_text_unchanged():
    assert Renderer().beautify(Beautifier.BOLD, "**a**") == "**a**"


@pytest.mark.parametrize(
    ("text", "start", "end", "expected"),
    [
        ("[a.png] x", 0, 7, TextAlign.LEFT),
        ("x [a.png]", 2, 9, TextAlign.RIGHT),
        ("x [a.png] y", 2, 9, TextAlign.CENTER),
    ],
)
def test_determine_text_align(text, start, end, expected):
    assert determine_text_align(text, start, end) is expected


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/docs",
        "http://example.com",
        "ftp://ftp.example.com/file",
        "mailto:me@example.com",
        "file:///tmp/notes.t2t",
    ],
)
def test_try_parse_url_accepts_absolute_urls(url):
    assert try_parse_url(url) is not None


@pytest.mark.parametrize(
    "text",
    [
        "",
        "example.com",
        "http://",
        "https://exa mple.com",
        "<http://example.com>",
        "javascript:alert(1)",
        "[https://example.com]",
    ],
)
def test_try_parse_url_rejects_other_text(text):
    assert try_parse_url(text) is None


def test_substitute_images(html):
    assert substitute_images("[logo.png]", html) == (
        "<img src='logo.png' style='text-align: left;' alt=''>"
    )


def test_substitute_images_is_case_insensitive(wiki):
    assert substitute_images("x [LOGO.PNG] y", wiki) == "x [[Image:LOGO.PNG]] y"


def test_substitute_images_ignores_other_extensions(html):
    assert substitute_images("[notes.txt]", html) == "[notes.txt]"


def test_image_link_uses_rendered_image_as_label(html):
    result = run_inline_substitutions("[[logo.png] https://example.com]", html)

    assert result == (
        "<a href='https://example.com'>"
        "<img src='logo.png' style='text-align: left;' alt=''></a>"
    )


def test_named_link(html):
    result = substitute_named_links("see [Example https://example.com] now", html)

    assert result == "see <a href='https://example.com'>Example</a> now"


def test_named_link_without_label(html):
    result = substitute_named_links("[https://example.com]", html)

    assert result == "<a href='https://example.com'>https://example.com</a>"


def test_bare_url(html):
    result = substitute_bare_urls("visit https://example.com today", html)

    assert result == "visit <a href='https://example.com'>https://example.com</a> today"


@pytest.mark.parametrize("punctuation", [",", ".", ";", ":", ")", "),"])
def test_bare_url_leaves_trailing_punctuation_outside(html, punctuation):
    result = substitute_bare_urls(f"see http://x.com{punctuation} now", html)

    assert result == f"see <a href='http://x.com'>http://x.com</a>{punctuation} now"


def test_rendered_links_are_not_substituted_again(html):
    result = run_inline_substitutions("see [Example https://example.com]", html)

    assert result == "see <a href='https://example.com'>Example</a>"


def test_wiki_inline_links_and_images(wiki):
    assert run_inline_substitutions("[logo.png]", wiki) == "[[Image:logo.png]]"
    assert run_inline_substitutions("[[logo.png] https://example.com]", wiki) == (
        "[https://example.com (logo.png)]"
    )
    assert run_inline_substitutions("[Docs https://example.com]", wiki) == (
        "[https://example.com Docs]"
    )
    assert run_inline_substitutions("https://example.com", wiki) == "[https://example.com]"


def test_man_inline_links(man):
    assert run_inline_substitutions("[Docs https://example.com]", man) == (
        "Docs (https://example.com)"
    )
    assert run_inline_substitutions("**bold** and //it//", man) == "\\fBbold\\fR and \\fIit\\fR"


def test_run_inline_substitutions_order(html):
    result = run_inline_substitutions("**bold** and //italic//", html)

    assert result == "<strong>bold</strong> and <i>italic</i>"
