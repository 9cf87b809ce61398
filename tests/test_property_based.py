from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from txt2tags_lite.converter import LineProcessor, convert_text
from txt2tags_lite.html_renderer import HtmlRenderer
from txt2tags_lite.markup import recognize
from txt2tags_lite.targets import RENDERERS, create_renderer

block_lines = st.sampled_from(
    [
        "",
        "   ",
        "= Title =",
        "++ Section ++",
        "- item",
        "  - nested",
        "    + deeper",
        "+ ordered",
        "-",
        ": term",
        "  definition",
        ":",
        "| a | b |",
        "|| h | h |",
        "  | c ||",
        "\tquoted",
        "```",
        "``` code",
        '"""',
        "%%%",
        "% todo",
        "-" * 20,
        "paragraph with **bold** and [link https://example.com]",
        "[logo.png] https://example.com",
    ]
)
free_lines = st.text(alphabet=string.ascii_letters + string.digits + " -+|:=*/_[]`%\t", max_size=40)
documents = st.lists(st.one_of(block_lines, free_lines), max_size=40)
targets = st.sampled_from(sorted(RENDERERS))


@given(documents, targets)
def test_conversion_is_deterministic(lines, target):
    first = LineProcessor(create_renderer(target)).process_lines(lines)
    second = LineProcessor(create_renderer(target)).process_lines(lines)

    assert first == second


@given(documents, targets)
def test_reprocessing_is_bounded_by_nesting_depth(lines, target):
    processor = LineProcessor(create_renderer(target))

    for line in lines:
        depth_before = len(processor.status.depth)
        processor.process_line(line)
        assert processor.passes <= depth_before + 2


@given(documents)
def test_depth_stack_only_open_inside_lists(lines):
    processor = LineProcessor(HtmlRenderer())

    for line in lines:
        processor.process_line(line)
        status = processor.status
        if status.depth:
            assert status.mode is not None and status.mode.is_list
        assert processor.renderer.list_depth == len(status.depth)

    processor.close_document()
    assert processor.status.depth == []
    assert processor.status.mode is None


@given(documents)
def test_flush_closes_open_html_blocks(lines):
    processor = LineProcessor(HtmlRenderer())
    for line in lines:
        processor.process_line(line)

    mode = processor.status.mode
    flushed = processor.close_document()

    if mode is None:
        assert flushed == ""
    elif mode.name.endswith("LIST") or mode.name in ("PARAGRAPH", "TABLE", "TABLE_HEADER"):
        assert flushed


@given(documents, targets)
def test_convert_text_accepts_arbitrary_documents(lines, target):
    source = "\n".join(line.replace("\r", "") for line in lines)

    result = convert_text(source, target=target)

    assert isinstance(result, str)


@given(st.text(min_size=1).filter(lambda text: text.strip()))
def test_every_non_blank_line_is_recognized(line):
    assert recognize(line) is not None
