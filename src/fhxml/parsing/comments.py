"""Nested block comment scanning.

FHX comments are ``/* ... */`` and may contain other balanced comments to any
depth. The scanner walks forward with an explicit depth counter instead of
recursing, so pathological nesting cannot exhaust the interpreter stack.

Usage:
    >>> scan_comment("/* a /* b */ c */ X{}", 0)
    17
    >>> scan_comment("A{}", 0) is None
    True
"""

from __future__ import annotations

from fhxml.parsing.patterns import COMMENT_CLOSE, COMMENT_OPEN


class UnterminatedComment(Exception):
    """Raised by scan_comment when a comment never closes.

    ``start`` is the offset of the outermost ``/*``; ``depth`` is how many
    comments were still open at end of input.
    """

    def __init__(self, start: int, depth: int) -> None:
        self.start = start
        self.depth = depth
        super().__init__(f"unterminated comment at offset {start} ({depth} open)")


def scan_comment(source: str, pos: int) -> int | None:
    """Scan a comment starting at ``pos``.

    Args:
        source: Full source text
        pos: Offset to scan from

    Returns:
        Offset just past the closing ``*/`` of the outermost comment, or None
        if no comment starts at ``pos``.

    Raises:
        UnterminatedComment: If input ends before every ``/*`` is closed.
    """
    if not source.startswith(COMMENT_OPEN, pos):
        return None

    start = pos
    depth = 1
    pos += 2
    find = source.find
    while depth:
        # Whichever delimiter comes first decides the depth change
        next_open = find(COMMENT_OPEN, pos)
        next_close = find(COMMENT_CLOSE, pos)
        if next_close == -1:
            raise UnterminatedComment(start, depth)
        if next_open != -1 and next_open < next_close:
            depth += 1
            pos = next_open + 2
        else:
            depth -= 1
            pos = next_close + 2
    return pos
