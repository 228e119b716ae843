"""fhxml renderers.

Renderers convert the typed FHX tree into output formats.

Available Renderers:
- XmlRenderer: Renders the tree to indented XML using StringBuilder pattern

Thread Safety:
All renderers use a StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from fhxml.renderers.protocol import ASTRenderer
from fhxml.renderers.xml import XmlRenderer, value_text

__all__ = ["ASTRenderer", "XmlRenderer", "value_text"]
