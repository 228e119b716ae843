"""Typed tree nodes for fhxml.

All nodes are frozen dataclasses with slots for:
- Immutability: the tree is built once by the parser and never mutated
- Memory efficiency: __slots__ keeps large FHX exports affordable
- Pattern matching: match statements work naturally over Value variants

Node Hierarchy:
Document (synthetic FHX_ROOT, not an Element)
└── Element
    ├── attributes: Attribute, ... (preamble)
    └── body: Attribute | Element, ... (source order)

Value (closed set of attribute value variants)
├── Word           foo, -1.5e+3, TRUE
├── QuotedString   "free text"
├── Array          [1,2,5..7]
├── Vector         (1|2.5/-3)
└── Bitmask        {0a ff 1B}

Locations are optional and excluded from equality: two trees that differ only
in where their nodes sat in the source compare equal.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field

from fhxml.location import SourceLocation

ROOT_NAME = "FHX_ROOT"


# =============================================================================
# Values
# =============================================================================


class Value(ABC):
    """Abstract base class for attribute values.

    Every variant exposes ``representation``, the canonical string used for
    both equality checks in tests and rendering. Only the five variants below
    can be instantiated.

    """

    __slots__ = ()

    @property
    @abstractmethod
    def representation(self) -> str:
        """Canonical text of the value."""

    def __str__(self) -> str:
        return self.representation


@dataclass(frozen=True, slots=True)
class Word(Value):
    """Bare token of letters, digits, ``_``, ``.``, ``+`` and ``-``.

    FHX: TYPE=PROCEDURE, SCALE=-1.5e+3

    """

    text: str

    @property
    def representation(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class QuotedString(Value):
    """Text that appeared between double quotes.

    FHX: DESCRIPTION="Power ""main"" feed"

    ``text`` holds the unescaped content with ``&``, ``<`` and ``>`` already
    turned into entity references by the parser.

    """

    text: str

    @property
    def representation(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Array(Value):
    """Comma-separated list of indices or inclusive ranges.

    FHX: INDEX=[1,2,5..7]

    """

    indices: tuple[str, ...] = ()

    @property
    def representation(self) -> str:
        return "[" + ",".join(self.indices) + "]"


@dataclass(frozen=True, slots=True)
class Vector(Value):
    """Numeric tuple kept verbatim, parentheses included.

    FHX: POSITION=(1|2.5/-3)

    """

    text: str

    @property
    def representation(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Bitmask(Value):
    """One or more two-hex-digit octets.

    FHX: MASK={0a ff 1B}

    """

    octets: tuple[str, ...]

    @property
    def representation(self) -> str:
        return "{" + " ".join(self.octets) + "}"


# =============================================================================
# Tree nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attribute:
    """Named leaf holding exactly one value.

    FHX: NAME="PUMP_101"
    XML: <NAME>PUMP_101</NAME>

    """

    name: str
    value: Value
    location: SourceLocation | None = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        """True when the value renders as the empty string."""
        return not self.value.representation


@dataclass(frozen=True, slots=True)
class Element:
    """Named container.

    FHX: MODULE TAG="PUMP_101" { DESCRIPTION="" ATTRIBUTE NAME="X" { } }

    ``attributes`` are the preamble attributes written between the name and
    the opening brace; ``body`` is everything between the braces, attributes
    and nested elements interleaved in source order.

    """

    name: str
    attributes: tuple[Attribute, ...] = ()
    body: tuple[Attribute | Element, ...] = ()
    location: SourceLocation | None = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        """True when the element has neither attributes nor body nodes."""
        return not self.attributes and not self.body

    @property
    def elements(self) -> tuple[Element, ...]:
        """Child elements, in source order."""
        return tuple(node for node in self.body if isinstance(node, Element))

    @property
    def all_attributes(self) -> tuple[Attribute, ...]:
        """Preamble attributes followed by body attributes."""
        return self.attributes + tuple(
            node for node in self.body if isinstance(node, Attribute)
        )

    def get(self, name: str) -> Value | None:
        """Return the value of the first attribute called ``name``."""
        for attribute in self.all_attributes:
            if attribute.name == name:
                return attribute.value
        return None

    def iter_elements(self) -> Iterator[Element]:
        """Walk this element and its descendants depth-first."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.elements))


@dataclass(frozen=True, slots=True)
class Document:
    """Synthetic root holding the top-level elements.

    Not an Element: renderers emit only its children unless asked to wrap
    them in a ``FHX_ROOT`` tag.

    """

    children: tuple[Element, ...] = ()
    location: SourceLocation | None = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return ROOT_NAME

    def iter_elements(self) -> Iterator[Element]:
        """Walk every element in the document depth-first."""
        for child in self.children:
            yield from child.iter_elements()

    def element_count(self) -> int:
        return sum(1 for _ in self.iter_elements())
