"""Text processing utilities for fhxml.

Provides the canonical XML escaping helpers shared by the parser and the
renderer.

Example:
    >>> from fhxml.utils.text import escape_xml
    >>> escape_xml("a < b & c")
    'a &lt; b &amp; c'
"""

from __future__ import annotations

import html as html_module
import re

# '<', '>' and any '&' that does not already begin a character or entity reference
_RAW_MARKUP = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);)|[<>]")

_ENTITIES = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}


def escape_xml(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for use as XML element text.

    Every occurrence is escaped, including an ``&`` that already looks like
    an entity reference. Quotes are left alone since element text never
    needs them escaped.

    Args:
        text: Text to escape

    Returns:
        Escaped text

    Examples:
        >>> escape_xml("<TAG>")
        '&lt;TAG&gt;'
        >>> escape_xml("&amp;")
        '&amp;amp;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False)


def escape_unescaped(text: str) -> str:
    """Escape only the raw ``&``, ``<`` and ``>`` left in ``text``.

    Existing entity references are kept, so applying this to already escaped
    text returns it unchanged.

    Examples:
        >>> escape_unescaped("a &amp; b & c")
        'a &amp; b &amp; c'
        >>> escape_unescaped(escape_unescaped("x<y"))
        'x&lt;y'
    """
    if not text:
        return ""
    return _RAW_MARKUP.sub(lambda m: _ENTITIES[m.group()[0]], text)


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    if "\r" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")
