"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conversion-related errors.

    Represents errors raised around the line engine (limits, unknown targets).
    The engine itself degrades to literal passthrough on malformed markup.
    """


class LineTooLongError(ConversionError):
    """Raised when a source line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class UnsupportedTargetError(ConversionError):
    """Raised when no renderer exists for the requested target.

    Args:
        target: Name of the requested target.
    """

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Unsupported target: {self.target!r}")
