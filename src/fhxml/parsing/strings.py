"""Quoted string scanning.

A quoted string is ``"`` followed by content chunks and a closing ``"``.
Inside the quotes whitespace is significant and exactly two escape sequences
exist, both starting with a quote:

- ``"`` LF TAB ``"`` stands for a line break followed by a tab
- ``""`` stands for a single ``"``

Any other ``"`` closes the string. Runs of ordinary characters are kept with
``&``, ``<`` and ``>`` turned into entity references, so the resulting text is
ready to be written as XML element content.
"""

from __future__ import annotations

from fhxml.parsing.patterns import STRING_RUN
from fhxml.utils.text import escape_xml

QUOTE = '"'
LINE_BREAK_ESCAPE = '"\n\t"'
QUOTE_ESCAPE = '""'


class UnterminatedString(Exception):
    """Raised by scan_string when input ends inside a quoted string."""

    def __init__(self, start: int) -> None:
        self.start = start
        super().__init__(f"unterminated string at offset {start}")


def scan_string(source: str, pos: int) -> tuple[str, int] | None:
    """Scan a quoted string starting at ``pos``.

    Args:
        source: Full source text
        pos: Offset of the opening quote

    Returns:
        ``(text, end)`` where ``text`` is the unescaped, XML-escaped content
        and ``end`` is the offset just past the closing quote; None if no
        quote starts at ``pos``.

    Raises:
        UnterminatedString: If input ends before the closing quote.

    Examples:
        >>> scan_string('"a""b" X', 0)
        ('a"b', 6)
        >>> scan_string('"x < y"', 0)
        ('x &lt; y', 7)
    """
    if not source.startswith(QUOTE, pos):
        return None

    start = pos
    pos += 1
    source_len = len(source)
    parts: list[str] = []
    while True:
        m = STRING_RUN.match(source, pos)
        if m is not None:
            parts.append(escape_xml(m.group()))
            pos = m.end()
            continue
        if pos >= source_len:
            raise UnterminatedString(start)
        # At a quote: escape sequence or closing quote
        if source.startswith(LINE_BREAK_ESCAPE, pos):
            parts.append("\n\t")
            pos += len(LINE_BREAK_ESCAPE)
        elif source.startswith(QUOTE_ESCAPE, pos):
            parts.append(QUOTE)
            pos += len(QUOTE_ESCAPE)
        else:
            return "".join(parts), pos + 1
