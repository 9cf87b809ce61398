"""Line driver and whole-document conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .config import ConfigError, ConvertConfig, validate_config
from .exceptions import ConversionError, LineTooLongError
from .filesystem import safe_read
from .markup import process, resolve_mode
from .renderer import Renderer
from .status import ProcessStatus
from .targets import create_renderer

logger = logging.getLogger(__name__)


class LineProcessor:
    """Convert a document one source line at a time.

    A processor owns the conversion state of exactly one document. Use a new
    instance, or call `close_document`, before converting another one.

    Attributes:
        status: Conversion state shared by every block.
        passes: Processing passes used by the most recent line.

    Examples:
        processor = LineProcessor(create_renderer("html"))
        fragments = processor.process_lines(["= Title =", "", "Some text"])
    """

    def __init__(self, renderer: Renderer):
        self.status = ProcessStatus(renderer)
        self.passes = 0

    @property
    def renderer(self) -> Renderer:
        return self.status.renderer

    def process_line(self, line: str | None) -> str:
        """Convert one source line.

        The line is fed to the open block, or to the block it opens, until no
        block asks for it again.

        Args:
            line: Source line; a trailing line break is ignored.

        Returns:
            str: Output for the line, possibly empty.
        """
        line = (line or "").rstrip("\r\n")
        status = self.status
        status.continuation = True
        pass_limit = len(status.depth) + 3
        fragments = []
        self.passes = 0

        while True:
            self.passes += 1
            assert self.passes <= pass_limit, f"line processed {self.passes} times: {line!r}"

            if status.mode is None:
                resolve_mode(status, line)
                status.continuation = False
                if status.mode is None:
                    status.out_line = line
                    break

            process(status.mode, line, status)
            if not status.reprocess:
                break
            fragments.append(status.out_line or "")

        fragments.append(status.out_line or "")
        return "".join(fragments)

    def close_document(self) -> str:
        """Close every block still open and reset the state.

        Returns:
            str: End tags of the open block and of each enclosing list level,
                or an empty string at top level.
        """
        status = self.status
        if status.mode is None:
            status.reset()
            return ""

        logger.debug("Closing %s at end of document", status.mode.name)
        fragments = [status.run_end_block()]
        while status.depth:
            status.mode = status.pop_depth()
            fragments.append(status.run_end_block())

        status.reset()
        return "".join(fragments)

    def process_lines(self, lines: Iterable[str]) -> list[str]:
        """Convert a sequence of lines.

        Returns:
            list[str]: One fragment per input line, then the closing fragment.
        """
        outputs = [self.process_line(line) for line in lines]
        outputs.append(self.close_document())
        return outputs


def convert_text(
    content: str,
    target: str | None = None,
    config: ConvertConfig | None = None,
) -> str:
    """Convert txt2tags text to a target format.

    Args:
        content: Complete source document.
        target: Output target; defaults to `config.target`.
        config: Limits and defaults; a default `ConvertConfig` when omitted.

    Returns:
        str: The converted document, one output line per source line followed
            by the closing tags of any block left open.

    Raises:
        ConfigError: If `config` holds invalid values.
        LineTooLongError: If a line exceeds `config.max_line_length`.
        UnsupportedTargetError: If no renderer exists for the target.

    Examples:
        convert_text("= Title =\\n\\nSome **bold** text\\n")
        convert_text("- one\\n- two\\n", target="wiki")
    """
    config = config or ConvertConfig()
    validate_config(config)
    processor = LineProcessor(create_renderer(target or config.target))

    output = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        if len(line) > config.max_line_length:
            raise LineTooLongError(line_number, config.max_line_length)
        fragment = processor.process_line(line)
        output.append(fragment if fragment.endswith("\n") else fragment + "\n")

    output.append(processor.close_document())
    return "".join(output)


class ConvertFileError(Exception):
    """Raised when converting a source file fails."""


def convert_file(
    filepath: Path,
    target: str | None = None,
    config: ConvertConfig | None = None,
) -> str:
    """Read and convert a txt2tags source file.

    Args:
        filepath: Path to the UTF-8 source file.
        target: Output target; defaults to `config.target`.
        config: Limits and defaults; a default `ConvertConfig` when omitted.

    Returns:
        str: The converted document.

    Raises:
        ConvertFileError: If configuration is invalid, the file cannot be read
            or decoded, or conversion fails.

    Examples:
        html = convert_file(Path("manual.t2t"), target="html")
    """
    config = config or ConvertConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    try:
        return convert_text(content, target, config)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ConvertFileError(error_message) from error
    except ConversionError as error:
        error_message = f"{filepath}: {error}"
        raise ConvertFileError(error_message) from error
