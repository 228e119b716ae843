"""ASTRenderer protocol: stable interface for tree renderers.

Any renderer that implements ``render(node) -> str`` conforms to this protocol.
The built-in ``XmlRenderer`` is the reference implementation.

Example:
    from fhxml.renderers.protocol import ASTRenderer

    def write_document(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from fhxml.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for tree renderers.

    Implementations must accept a Document and return a rendered string.

    """

    def render(self, node: Document) -> str:
        """Render a Document to a string."""
        ...
