"""
txt2tags-lite: converter for a subset of the txt2tags markup language.

Documents are converted line by line to HTML, UNIX man pages or MediaWiki
text. This package can be used both as a CLI tool and as a library.

CLI Usage:
    txt2tags-lite manual.t2t --target man

Library Usage:
    from txt2tags_lite import LineProcessor, convert_text, create_renderer

    html = convert_text("= Title =\\n\\nSome **bold** text\\n")

    processor = LineProcessor(create_renderer("wiki"))
    fragments = processor.process_lines(["- one", "- two"])
"""

import logging

from .config import ConfigError, ConvertConfig
from .converter import ConvertFileError, LineProcessor, convert_file, convert_text
from .exceptions import ConversionError, LineTooLongError, UnsupportedTargetError
from .models import Beautifier, ImageLinkData, Markup, TableCell, TextAlign
from .renderer import Renderer
from .targets import create_renderer

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core functionality
    "convert_text",
    "convert_file",
    "LineProcessor",
    "create_renderer",
    "Renderer",
    # Data models
    "Markup",
    "Beautifier",
    "TextAlign",
    "ImageLinkData",
    "TableCell",
    # Configuration
    "ConvertConfig",
    # Exceptions
    "ConfigError",
    "ConversionError",
    "ConvertFileError",
    "LineTooLongError",
    "UnsupportedTargetError",
    # Version
    "__version__",
]
