"""Recursive descent parser producing the typed FHX tree.

Scannerless: the parser matches compiled lexical classes directly against the
source text and builds immutable nodes as it goes.

Grammar:
    root      := (element | comment)*
    element   := tagName preamble body
    preamble  := '=' | (attribute | comment)*
    body      := '{' (attribute | element | comment)* '}'
    attribute := tagName '=' value
    value     := word | quoted | array | vector | bitmask

Alternatives are tried in the order written and the first one that matches
commits (ordered choice). The order of ``value`` matters: a word is tried
before anything else, so ``foo`` can never become another variant.

Errors:
Every failed terminal records what it expected at the offset it looked at.
When the parse cannot consume the whole input, ParseError reports the
furthest offset reached and everything that would have been accepted there.

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per parse
operation. Configuration is read from ContextVar (thread-local). The
resulting tree is immutable and thread-safe.

"""

from __future__ import annotations

import sys
from collections.abc import Callable
from re import Pattern
from typing import TypeVar

from fhxml.config import get_convert_config
from fhxml.errors import ParseError, describe_expected
from fhxml.location import LineIndex
from fhxml.nodes import (
    Array,
    Attribute,
    Bitmask,
    Document,
    Element,
    QuotedString,
    Value,
    Vector,
    Word,
)
from fhxml.parsing.comments import UnterminatedComment, scan_comment
from fhxml.parsing.patterns import BYTE, INDEX, TAG_NAME, VECTOR, WHITESPACE, WORD
from fhxml.parsing.strings import UnterminatedString, scan_string
from fhxml.utils.logger import get_logger

logger = get_logger(__name__)

_T = TypeVar("_T")

# Python frames consumed per nesting level: _try_element, _repeat, _try_body_node
_FRAMES_PER_LEVEL = 3


def clamp_depth(requested: int, reserve_frames: int = 200) -> int:
    """Clamp a nesting limit so the parser stays under the recursion limit.

    Logs a warning when the requested depth had to be lowered.

    Example:
        >>> clamp_depth(100)
        100

    """
    max_safe = max(1, (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL)
    if requested > max_safe:
        logger.warning(
            "Requested max_depth %d exceeds what the recursion limit (%d) allows. "
            "Clamping to %d.",
            requested,
            sys.getrecursionlimit(),
            max_safe,
        )
        return max_safe
    return requested


class Parser:
    """Ordered-choice recursive descent parser for FHX.

    Usage:
            >>> parser = Parser('MODULE TAG="PUMP" { DESCRIPTION="" }')
            >>> doc = parser.parse()
            >>> doc.children[0].name
            'MODULE'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        "_lines",
        "_furthest",
        "_expected",
        "_depth",
        "_max_depth",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: FHX source text (already decoded)
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._pos = 0
        self._lines = LineIndex(source, source_file)
        self._furthest = 0
        self._expected: list[str] = []
        self._depth = 0
        self._max_depth = clamp_depth(get_convert_config().max_depth)

    def parse(self) -> Document:
        """Parse the whole source into a Document.

        Returns:
            Document whose children are the top-level elements

        Raises:
            ParseError: If the source does not match the grammar or has
                trailing input after the last element.

        """
        logger.debug("Parsing %d characters from %s", self._source_len, self._source_file or "<string>")
        try:
            children = self._repeat(self._try_element)
        except RecursionError:
            raise self._error(
                "elements nested too deeply for the Python stack", self._pos
            ) from None
        self._skip_whitespace()
        if self._pos < self._source_len:
            self._fail("end of input")
            raise self._error()

        doc = Document(children=tuple(children), location=self._lines.location(0, self._source_len))
        logger.debug("Parsed %d top-level elements", len(doc.children))
        return doc

    # =========================================================================
    # Error bookkeeping
    # =========================================================================

    def _fail(self, expected: str) -> None:
        """Record that ``expected`` was not found at the current position."""
        pos = self._pos
        if pos > self._furthest:
            self._furthest = pos
            self._expected = [expected]
        elif pos == self._furthest and expected not in self._expected:
            self._expected.append(expected)

    def _error(self, message: str | None = None, position: int | None = None) -> ParseError:
        """Build a ParseError at ``position`` (default: furthest failure)."""
        if position is None:
            position = self._furthest
            expected = tuple(self._expected)
        else:
            expected = ()
        lineno, col = self._lines.position(position)
        if message is None:
            message = f"expected {describe_expected(expected)}, found {self._describe(position)}"
        return ParseError(
            message,
            position=position,
            expected=expected,
            lineno=lineno,
            col_offset=col,
            source_file=self._source_file,
        )

    def _describe(self, position: int) -> str:
        if position >= self._source_len:
            return "end of input"
        return repr(self._source[position])

    # =========================================================================
    # Terminals
    # =========================================================================

    def _skip_whitespace(self) -> None:
        self._pos = WHITESPACE.match(self._source, self._pos).end()

    def _match(self, pattern: Pattern[str], expected: str) -> str | None:
        """Match ``pattern`` after whitespace; record ``expected`` on failure."""
        self._skip_whitespace()
        m = pattern.match(self._source, self._pos)
        if m is None:
            self._fail(expected)
            return None
        self._pos = m.end()
        return m.group()

    def _literal(self, text: str) -> bool:
        """Consume ``text`` after whitespace; record it as expected on failure."""
        self._skip_whitespace()
        if self._source.startswith(text, self._pos):
            self._pos += len(text)
            return True
        self._fail(f"'{text}'")
        return False

    def _skip_comment(self) -> bool:
        """Consume one comment at the current position, if any."""
        try:
            end = scan_comment(self._source, self._pos)
        except UnterminatedComment as e:
            raise self._error("unterminated comment", e.start) from None
        if end is None:
            return False
        self._pos = end
        return True

    # =========================================================================
    # Repetition
    # =========================================================================

    def _repeat(self, item: Callable[[], _T | None]) -> list[_T]:
        """Parse ``(item | comment)*``, dropping the comments."""
        results: list[_T] = []
        while True:
            self._skip_whitespace()
            if self._skip_comment():
                continue
            node = item()
            if node is None:
                return results
            results.append(node)

    # =========================================================================
    # Structure
    # =========================================================================

    def _try_element(self) -> Element | None:
        start = self._pos
        name = self._match(TAG_NAME, "tag name")
        if name is None:
            return None
        node_start = self._pos - len(name)

        # Preamble: a bare '=' means no attributes
        attributes: list[Attribute]
        if self._literal("="):
            attributes = []
        else:
            attributes = self._repeat(self._try_attribute)

        if not self._literal("{"):
            self._pos = start
            return None

        self._depth += 1
        try:
            if self._depth > self._max_depth:
                raise self._error(
                    f"elements nested deeper than {self._max_depth} levels",
                    node_start,
                )
            body = self._repeat(self._try_body_node)
        finally:
            self._depth -= 1

        if not self._literal("}"):
            self._pos = start
            return None

        return Element(
            name=name,
            attributes=tuple(attributes),
            body=tuple(body),
            location=self._lines.location(node_start, self._pos),
        )

    def _try_body_node(self) -> Attribute | Element | None:
        attribute = self._try_attribute()
        if attribute is not None:
            return attribute
        return self._try_element()

    def _try_attribute(self) -> Attribute | None:
        start = self._pos
        name = self._match(TAG_NAME, "tag name")
        if name is None:
            return None
        node_start = self._pos - len(name)
        if not self._literal("="):
            self._pos = start
            return None
        value = self._try_value()
        if value is None:
            self._pos = start
            return None
        return Attribute(
            name=name,
            value=value,
            location=self._lines.location(node_start, self._pos),
        )

    # =========================================================================
    # Values (ordered choice)
    # =========================================================================

    def _try_value(self) -> Value | None:
        self._skip_whitespace()
        for alternative in (
            self._try_word,
            self._try_quoted_string,
            self._try_array,
            self._try_vector,
            self._try_bitmask,
        ):
            value = alternative()
            if value is not None:
                return value
        return None

    def _try_word(self) -> Word | None:
        text = self._match(WORD, "word")
        return None if text is None else Word(text)

    def _try_quoted_string(self) -> QuotedString | None:
        try:
            scanned = scan_string(self._source, self._pos)
        except UnterminatedString as e:
            raise self._error("unterminated quoted string", e.start) from None
        if scanned is None:
            self._fail("quoted string")
            return None
        text, self._pos = scanned
        return QuotedString(text)

    def _try_array(self) -> Array | None:
        start = self._pos
        if not self._literal("["):
            return None
        indices: list[str] = []
        first = self._match(INDEX, "index")
        if first is not None:
            indices.append(first)
            while True:
                mark = self._pos
                if not self._literal(","):
                    break
                index = self._match(INDEX, "index")
                if index is None:
                    self._pos = mark
                    break
                indices.append(index)
        if not self._literal("]"):
            self._pos = start
            return None
        return Array(tuple(indices))

    def _try_vector(self) -> Vector | None:
        text = self._match(VECTOR, "vector")
        return None if text is None else Vector(text)

    def _try_bitmask(self) -> Bitmask | None:
        start = self._pos
        if not self._literal("{"):
            return None
        octets: list[str] = []
        while (octet := self._match(BYTE, "hex byte")) is not None:
            octets.append(octet)
        if not octets or not self._literal("}"):
            self._pos = start
            return None
        return Bitmask(tuple(octets))
