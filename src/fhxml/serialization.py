"""Tree serialization: JSON round-trip for fhxml nodes.

Converts typed tree nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed FHX exports between runs
- Diffing two exports structurally (pass ``locations=False``)
- Inspecting a tree with ordinary JSON tools

Every node dict carries a ``_type`` discriminator naming its class. Source
locations are written as a compact ``[lineno, col_offset, offset, end_offset,
source_file]`` list under ``location`` and only when present. JSON text is
produced with sorted keys so equal trees always give identical output.

Example:
    from fhxml import parse
    from fhxml.serialization import to_json, from_json

    doc = parse('MODULE TAG="PUMP" { }')
    assert from_json(to_json(doc)) == doc

Thread Safety:
    Module functions keep no state and may be called from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from fhxml.location import SourceLocation
from fhxml.nodes import (
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

Serializable = Document | Element | Attribute | Value

_CLASSES: dict[str, type] = {
    cls.__name__: cls
    for cls in (Document, Element, Attribute, Word, QuotedString, Array, Vector, Bitmask)
}


def to_dict(node: Serializable, *, locations: bool = True) -> dict[str, Any]:
    """Convert a node or value to a JSON-compatible dict.

    Args:
        node: Any fhxml tree node or attribute value
        locations: Write source locations (when the node has one)

    Returns:
        Dict with ``_type`` plus one key per field; tuples become lists.

    Example:
        >>> to_dict(Attribute("SCAN", Word("1")))
        {'_type': 'Attribute', 'name': 'SCAN', 'value': {'_type': 'Word', 'text': '1'}}

    """
    data: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        item = getattr(node, f.name)
        if f.name == "location":
            if locations and item is not None:
                data["location"] = _encode_location(item)
            continue
        data[f.name] = _encode(item, locations)
    return data


def _encode(item: Any, locations: bool) -> Any:
    if isinstance(item, tuple):
        return [_encode(member, locations) for member in item]
    if isinstance(item, (Document, Element, Attribute, Value)):
        return to_dict(item, locations=locations)
    return item


def _encode_location(loc: SourceLocation) -> list[Any]:
    return [loc.lineno, loc.col_offset, loc.offset, loc.end_offset, loc.source_file]


def _decode_location(raw: list[Any]) -> SourceLocation:
    lineno, col_offset, offset, end_offset, source_file = raw
    return SourceLocation(lineno, col_offset, offset, end_offset, source_file)


def from_dict(data: dict[str, Any]) -> Serializable:
    """Rebuild a typed node from a dict produced by to_dict().

    Raises:
        ValueError: If ``_type`` is missing or names an unknown class.

    """
    if "_type" not in data:
        raise ValueError("Missing '_type' field in serialized node")
    cls = _CLASSES.get(data["_type"])
    if cls is None:
        raise ValueError(f"Unknown node type: {data['_type']!r}")

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        kwargs[f.name] = _decode_location(raw) if f.name == "location" else _decode(raw)
    return cls(**kwargs)


def _decode(raw: Any) -> Any:
    if isinstance(raw, list):
        return tuple(_decode(member) for member in raw)
    if isinstance(raw, dict):
        return from_dict(raw)
    return raw


def to_json(doc: Document, *, indent: int | None = None, locations: bool = True) -> str:
    """Serialize a Document to deterministic JSON text.

    Args:
        doc: Document to serialize
        indent: JSON indentation (None for compact output)
        locations: Include source locations

    """
    return json.dumps(to_dict(doc, locations=locations), sort_keys=True, indent=indent)


def from_json(text: str) -> Document:
    """Deserialize a Document from JSON text.

    Raises:
        ValueError: If the JSON does not hold a Document.

    """
    node = from_dict(json.loads(text))
    if isinstance(node, Document):
        return node
    raise ValueError(f"Expected Document, got {type(node).__name__}")
