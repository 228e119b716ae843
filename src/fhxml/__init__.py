"""
fhxml: FHX to XML converter

Parses the brace-delimited FHX configuration export format into a typed,
immutable tree and renders that tree as indented XML.

Quick Start:
    >>> from fhxml import parse, render
    >>> doc = parse('MODULE TAG="PUMP_101" { DESCRIPTION="" }')
    >>> print(render(doc), end="")
    <MODULE>
    	<TAG>PUMP_101</TAG>
    	<DESCRIPTION />
    </MODULE>

    >>> # Or use the high-level Converter class
    >>> from fhxml import Converter, ConvertConfig
    >>> converter = Converter(ConvertConfig(indent="  "))
    >>> xml = converter('AREA = { }')

Files:
    from fhxml.convert import convert_file
    result = convert_file("POWER.fhx")   # writes POWER.xml (UTF-16 in, UTF-8 out)

Installation:
    pip install fhxml              # Core parser and renderer (zero deps)
"""

from pathlib import Path
from time import perf_counter
from typing import TYPE_CHECKING

from fhxml.config import (
    ConvertConfig,
    convert_config_context,
    get_convert_config,
    reset_convert_config,
    set_convert_config,
)
from fhxml.errors import ConversionError, FhxError, ParseError
from fhxml.location import SourceLocation
from fhxml.nodes import (
    ROOT_NAME,
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
from fhxml.parser import Parser
from fhxml.profiling import ConversionAccumulator, get_accumulator, profiled_convert
from fhxml.renderers.protocol import ASTRenderer
from fhxml.renderers.xml import XmlRenderer
from fhxml.serialization import from_dict, from_json, to_dict, to_json

if TYPE_CHECKING:
    from fhxml.convert import ConversionResult

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse FHX source into a typed tree.

    Args:
        source: FHX source text (decoded)
        source_file: Optional source file path for error messages

    Returns:
        Document whose children are the top-level elements

    Raises:
        ParseError: If the source does not match the FHX grammar. No partial
            tree is returned.

    Example:
        >>> doc = parse("A{}")
        >>> doc.children[0]
        Element(name='A', attributes=(), body=())
    """
    started = perf_counter()
    doc = Parser(source, source_file=source_file).parse()

    acc = get_accumulator()
    if acc is not None:
        acc.record_parse(
            source_length=len(source),
            element_count=doc.element_count(),
            seconds=perf_counter() - started,
        )
    return doc


def render(
    doc: Document,
    indent: str | None = None,
    *,
    wrap_root: bool | None = None,
) -> str:
    """Render a Document to XML.

    Args:
        doc: Document to render
        indent: Indentation unit (defaults to the active config, a tab)
        wrap_root: Wrap output in FHX_ROOT (defaults to the active config)

    Returns:
        XML string

    Example:
        >>> print(render(parse("A{}")), end="")
        <A />
    """
    config = get_convert_config()
    renderer = XmlRenderer(
        indent=config.indent if indent is None else indent,
        wrap_root=config.wrap_root if wrap_root is None else wrap_root,
    )
    return renderer.render(doc)


def convert(source: str, *, source_file: str | None = None) -> str:
    """Parse FHX source and render it as XML in one call."""
    return render(parse(source, source_file=source_file))


class Converter:
    """High-level FHX to XML converter bound to one configuration.

    Usage:
        >>> converter = Converter(ConvertConfig(indent="  ", wrap_root=True))
        >>> xml = converter("A{} B{}")

        >>> # Access the tree
        >>> doc = converter.parse('A X=1 { }')
        >>> doc.children[0].attributes[0].value
        Word(text='1')

    Thread Safety:
        Applies its config via ContextVar (thread-local) for each call, so
        several Converter instances may be used concurrently.

    """

    __slots__ = ("_config",)

    def __init__(self, config: ConvertConfig | None = None) -> None:
        self._config = config or ConvertConfig()

    @property
    def config(self) -> ConvertConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render FHX in one call."""
        with convert_config_context(self._config):
            return convert(source)

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse FHX source into a tree using this converter's limits."""
        with convert_config_context(self._config):
            return parse(source, source_file=source_file)

    def render(self, doc: Document) -> str:
        """Render a tree using this converter's layout settings."""
        with convert_config_context(self._config):
            return render(doc)

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path | None = None,
    ) -> "ConversionResult":
        """Convert one file; see fhxml.convert.convert_file."""
        from fhxml.convert import convert_file

        return convert_file(input_path, output_path, config=self._config)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "convert",
    "Converter",
    # Tree
    "ROOT_NAME",
    "Document",
    "Element",
    "Attribute",
    # Values
    "Value",
    "Word",
    "QuotedString",
    "Array",
    "Vector",
    "Bitmask",
    # Parser / renderer components
    "Parser",
    "XmlRenderer",
    "ASTRenderer",
    # Errors
    "FhxError",
    "ParseError",
    "ConversionError",
    # Configuration (ContextVar-based)
    "ConvertConfig",
    "get_convert_config",
    "set_convert_config",
    "reset_convert_config",
    "convert_config_context",
    # Profiling
    "ConversionAccumulator",
    "profiled_convert",
    "get_accumulator",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Location
    "SourceLocation",
]
