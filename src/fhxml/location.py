"""Source location tracking for error messages and debugging.

Provides SourceLocation dataclass for tracking positions in FHX source text.
Used by the parser to stamp nodes and to point ParseError at the offending text.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All line/column positions are 1-indexed; offsets are 0-based indices
    into the decoded source string.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source
        end_offset: Absolute end offset in source
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=5, offset=40)
            >>> str(loc)
            '3:5'

            >>> str(SourceLocation(1, 1, source_file="POWER.fhx"))
            'POWER.fhx:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "POWER.fhx:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"


class LineIndex:
    """Maps absolute offsets to (line, column) pairs.

    Built once per source; each lookup is a binary search over the
    offsets of line starts.

    Usage:
            >>> index = LineIndex("A\\n{\\n}")
            >>> index.position(2)
            (2, 1)

    """

    __slots__ = ("_line_starts", "_source_file", "_length")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        starts = [0]
        find = source.find
        pos = find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = find("\n", pos + 1)
        self._line_starts = starts
        self._source_file = source_file
        self._length = len(source)

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-indexed (lineno, col_offset) of an offset."""
        offset = max(0, min(offset, self._length))
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def location(self, start: int, end: int | None = None) -> SourceLocation:
        """Build a SourceLocation for the span start..end."""
        lineno, col = self.position(start)
        return SourceLocation(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=start if end is None else end,
            source_file=self._source_file,
        )
