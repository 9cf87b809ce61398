"""Constants used across the txt2tags-lite package."""

from __future__ import annotations

import re

from .config import ConvertConfig

DEFAULT_CONFIG = ConvertConfig()

# Limits and configuration defaults
DEFAULT_TARGET = DEFAULT_CONFIG.target
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length

SOURCE_EXTENSIONS = (".t2t", ".txt")

# Source syntax
TABLE_DELIMITER = "|"
IMAGE_EXTENSIONS = (
    "apng",
    "png",
    "avif",
    "gif",
    "jpg",
    "jpeg",
    "jfif",
    "pjpeg",
    "pjp",
    "svg",
    "webp",
    "bmp",
    "ico",
    "cur",
    "tif",
    "tiff",
)
_IMAGE_EXTENSION_GROUP = "|".join(rf"\.{extension}" for extension in IMAGE_EXTENSIONS)

BRACKET_PATTERN = re.compile(r"\[[^\]]*\]")
IMAGE_PATTERN = re.compile(rf"\[(?!\[)(?P<path>\S*?(?:{_IMAGE_EXTENSION_GROUP}))\]", re.IGNORECASE)
IMAGE_LINK_PATTERN = re.compile(
    rf"\[\[(?P<path>\S*?(?:{_IMAGE_EXTENSION_GROUP}))\]\s(?P<target>.*?)\]", re.IGNORECASE
)
NAMED_LINK_PATTERN = re.compile(r"\[(?P<inner>\S.*?)\]")
