"""Utility modules for fhxml.

Provides:
- text: escape_xml, escape_unescaped, normalize_newlines
- logger: get_logger for logging
"""

from fhxml.utils.logger import get_logger
from fhxml.utils.text import escape_unescaped, escape_xml, normalize_newlines

__all__ = [
    "escape_unescaped",
    "escape_xml",
    "get_logger",
    "normalize_newlines",
]
