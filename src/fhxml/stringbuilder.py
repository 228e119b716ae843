"""StringBuilder for O(n) accumulation of indented output lines.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Indentation prefixes are built once per
depth and cached, so deep trees do not re-multiply the indent unit.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient accumulator of indented lines.

    Usage:
            >>> sb = StringBuilder(indent="  ")
            >>> _ = sb.line(0, "<A>").line(1, "<B />").line(0, "</A>")
            >>> sb.build()
            '<A>\\n  <B />\\n</A>\\n'

    Thread Safety:
        Instance is local to each render() call.
        No shared mutable state.

    """

    __slots__ = ("_parts", "_indent", "_prefixes")

    def __init__(self, indent: str = "\t") -> None:
        """Initialize empty StringBuilder.

        Args:
            indent: Indentation unit written once per depth level
        """
        self._parts: list[str] = []
        self._indent = indent
        self._prefixes: list[str] = [""]

    @property
    def indent(self) -> str:
        return self._indent

    def prefix(self, depth: int) -> str:
        """Return the indentation for ``depth``."""
        prefixes = self._prefixes
        while len(prefixes) <= depth:
            prefixes.append(prefixes[-1] + self._indent)
        return prefixes[depth]

    def line(self, depth: int, s: str) -> StringBuilder:
        """Append ``s`` indented to ``depth`` and terminated by a newline."""
        if depth:
            self._parts.append(self.prefix(depth))
        self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

