"""XML renderer using StringBuilder pattern.

Renders the typed FHX tree to indented XML text with O(n) performance.

Layout:
- One node per line, indented by one indent unit per depth
- Attributes become leaf elements: <NAME>value</NAME>, or <NAME /> when empty
- Elements with neither attributes nor body render self-closed: <NAME />
- The synthetic FHX_ROOT is not written unless wrap_root is requested

Thread Safety:
Renderers hold only immutable settings. Each render() call uses its own
StringBuilder, so a single XmlRenderer can be shared across threads.
"""

from __future__ import annotations

from time import perf_counter

from fhxml.nodes import Attribute, Document, Element, QuotedString, Value
from fhxml.profiling import get_accumulator
from fhxml.stringbuilder import StringBuilder
from fhxml.utils.logger import get_logger
from fhxml.utils.text import escape_unescaped

logger = get_logger(__name__)


def value_text(value: Value) -> str:
    """Return the text written between an attribute's tags.

    Quoted strings are escaped for any raw ``&``, ``<`` or ``>`` they still
    contain; the other variants cannot contain markup characters.
    """
    if isinstance(value, QuotedString):
        return escape_unescaped(value.text)
    return value.representation


class XmlRenderer:
    """Render a Document to XML text.

    Usage:
        >>> from fhxml import parse
        >>> renderer = XmlRenderer(indent="  ")
        >>> print(renderer.render(parse('A { B="x" C{} }')), end="")
        <A>
          <B>x</B>
          <C />
        </A>

    Thread Safety:
        Multiple threads can safely share a single XmlRenderer instance.
    """

    __slots__ = ("_indent", "_wrap_root")

    def __init__(self, indent: str = "\t", *, wrap_root: bool = False) -> None:
        """Initialize renderer.

        Args:
            indent: Indentation unit written once per nesting depth
            wrap_root: Wrap the output in a single FHX_ROOT element so that
                documents with several top-level elements are well-formed
        """
        self._indent = indent
        self._wrap_root = wrap_root

    @property
    def indent(self) -> str:
        return self._indent

    @property
    def wrap_root(self) -> bool:
        return self._wrap_root

    def render(self, node: Document) -> str:
        """Render document tree to an XML string.

        Args:
            node: Document root

        Returns:
            XML text, every line terminated by a newline
        """
        started = perf_counter()
        sb = StringBuilder(self._indent)

        if self._wrap_root:
            if node.children:
                sb.line(0, f"<{node.name}>")
                for child in node.children:
                    self._render_element(child, sb, 1)
                sb.line(0, f"</{node.name}>")
            else:
                sb.line(0, f"<{node.name} />")
        else:
            for child in node.children:
                self._render_element(child, sb, 0)

        output = sb.build()
        elapsed = perf_counter() - started
        acc = get_accumulator()
        if acc is not None:
            acc.record_render(output_length=len(output), seconds=elapsed)
        logger.debug("Rendered %d top-level elements (%d characters)", len(node.children), len(output))
        return output

    def _render_element(self, node: Element, sb: StringBuilder, depth: int) -> None:
        if node.is_empty:
            sb.line(depth, f"<{node.name} />")
            return

        sb.line(depth, f"<{node.name}>")
        inner = depth + 1
        for attribute in node.attributes:
            self._render_attribute(attribute, sb, inner)
        for child in node.body:
            if isinstance(child, Attribute):
                self._render_attribute(child, sb, inner)
            else:
                self._render_element(child, sb, inner)
        sb.line(depth, f"</{node.name}>")

    def _render_attribute(self, node: Attribute, sb: StringBuilder, depth: int) -> None:
        text = value_text(node.value)
        if not text:
            sb.line(depth, f"<{node.name} />")
        else:
            sb.line(depth, f"<{node.name}>{text}</{node.name}>")
