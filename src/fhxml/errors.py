"""Exception classes for fhxml.

Provides standardized exceptions for error handling throughout fhxml.
"""

from __future__ import annotations

from collections.abc import Iterable


class FhxError(Exception):
    """Base exception for all fhxml errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(FhxError):
    """Error during FHX parsing.

    Raised when the input does not match the grammar. Carries the furthest
    position the parser reached and the constructs it would have accepted
    there. No partial document is ever produced alongside it.
    """

    def __init__(
        self,
        message: str,
        position: int = 0,
        expected: Iterable[str] = (),
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with location.

        Args:
            message: Error description
            position: 0-based offset into the source text
            expected: Human-readable names of the accepted alternatives
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.position = position
        self.expected = tuple(expected)
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")

    @property
    def expected_description(self) -> str:
        """Describe the expected alternatives, e.g. "'=', '{' or tag name"."""
        return describe_expected(self.expected)


def describe_expected(expected: tuple[str, ...]) -> str:
    """Join alternative names into a readable list."""
    if not expected:
        return "valid FHX"
    if len(expected) == 1:
        return expected[0]
    return ", ".join(expected[:-1]) + " or " + expected[-1]


class ConversionError(FhxError):
    """Error while converting a file.

    Raised by the conversion driver when a source file cannot be read,
    parsed, or written. The underlying error is chained as ``__cause__``.
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize conversion error.

        Args:
            path: Source file that failed to convert
            message: Description of the failure
        """
        self.path = path
        super().__init__(f"Failed to convert {path}: {message}")
