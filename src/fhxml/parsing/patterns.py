"""Compiled lexical classes for the FHX grammar.

All patterns are compiled once at import time and matched with
``pattern.match(source, pos)`` so the parser never slices the source.

Character classes are ASCII-only (re.ASCII), so ``\\w`` and ``\\d`` mean
``[A-Za-z0-9_]`` and ``[0-9]`` regardless of the input's script.

Usage:
    from fhxml.parsing.patterns import TAG_NAME

    m = TAG_NAME.match(source, pos)
    if m is not None:
        name = m.group()
"""

import re

# Insignificant whitespace between tokens
WHITESPACE = re.compile(r"\s*", re.ASCII)

# Element and attribute names
TAG_NAME = re.compile(r"[a-zA-Z_:][a-zA-Z0-9._\-:]*", re.ASCII)

# Attribute value lexical classes, in ordered-choice priority
WORD = re.compile(r"[\w\-.+]+", re.ASCII)
VECTOR = re.compile(r"\([\d|/\-.+e]*\)", re.ASCII)

# Array element: integer or inclusive range
INDEX = re.compile(r"\d+(?:\.\.\d+)?", re.ASCII)

# Bitmask element: exactly two hex digits
BYTE = re.compile(r"[a-fA-F0-9]{2}", re.ASCII)

# Quoted string content: a run of anything but the quote character
STRING_RUN = re.compile(r'[^"]+')

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"

__all__ = [
    "BYTE",
    "COMMENT_CLOSE",
    "COMMENT_OPEN",
    "INDEX",
    "STRING_RUN",
    "TAG_NAME",
    "VECTOR",
    "WHITESPACE",
    "WORD",
]
