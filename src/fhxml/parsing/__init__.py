"""Lexical building blocks for the FHX parser.

Modules:
    patterns: Compiled lexical classes (tag names, words, indices, bytes, vectors)
    comments: Nested ``/* ... */`` comment scanner
    strings: Quoted string scanner with the two quote-based escapes

"""

from fhxml.parsing.comments import UnterminatedComment, scan_comment
from fhxml.parsing.strings import UnterminatedString, scan_string

__all__ = [
    "UnterminatedComment",
    "UnterminatedString",
    "scan_comment",
    "scan_string",
]
