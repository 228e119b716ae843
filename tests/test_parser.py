"""Tests for the FHX grammar: elements, preambles, bodies and root."""

from __future__ import annotations

import pytest

from fhxml import parse
from fhxml.errors import ParseError
from fhxml.nodes import Attribute, Document, Element, QuotedString, Word
from fhxml.parser import Parser


class TestRoot:
    """Top-level element sequences."""

    def test_empty_source(self) -> None:
        """Empty input is an empty document."""
        assert parse("") == Document()

    def test_whitespace_only(self) -> None:
        assert parse("  \n\t \r\n") == Document()

    def test_single_empty_element(self) -> None:
        """A{} is an element with nothing in it."""
        doc = parse("A{}")
        assert doc.children == (Element("A"),)
        assert doc.children[0].is_empty

    def test_several_top_level_elements(self) -> None:
        doc = parse("A{} B{}\nC { }")
        assert [e.name for e in doc.children] == ["A", "B", "C"]

    def test_root_name(self) -> None:
        """The synthetic root is named FHX_ROOT."""
        assert parse("A{}").name == "FHX_ROOT"


class TestPreamble:
    """Attributes between an element's name and its body."""

    def test_bare_equals_means_no_attributes(self) -> None:
        doc = parse("AREA = { }")
        assert doc.children[0] == Element("AREA")

    def test_preamble_attributes(self) -> None:
        doc = parse('MODULE TAG="PUMP_101" PLANT_AREA="AREA_A" CATEGORY=Library { }')
        element = doc.children[0]
        assert element.attributes == (
            Attribute("TAG", QuotedString("PUMP_101")),
            Attribute("PLANT_AREA", QuotedString("AREA_A")),
            Attribute("CATEGORY", Word("Library")),
        )
        assert element.body == ()

    def test_preamble_spanning_lines(self) -> None:
        source = 'BATCH_RECIPE NAME="R1" TYPE=PROCEDURE\n  CATEGORY="Recipes"\n{\n}'
        element = parse(source).children[0]
        assert [a.name for a in element.attributes] == ["NAME", "TYPE", "CATEGORY"]

    def test_whitespace_around_equals(self) -> None:
        element = parse("A X = 1 { }").children[0]
        assert element.attributes == (Attribute("X", Word("1")),)

    def test_preamble_with_equals_and_attributes_fails(self) -> None:
        """A bare '=' ends the preamble; attributes after it are an error."""
        with pytest.raises(ParseError):
            parse("A = X=1 { }")


class TestBody:
    """Element bodies with interleaved attributes and elements."""

    def test_body_attributes(self) -> None:
        element = parse('A { DESCRIPTION="Main pump" SCAN=1 }').children[0]
        assert element.attributes == ()
        assert element.body == (
            Attribute("DESCRIPTION", QuotedString("Main pump")),
            Attribute("SCAN", Word("1")),
        )

    def test_nested_elements(self) -> None:
        source = """
        MODULE TAG="M1"
        {
          FUNCTION_BLOCK NAME="AI1" DEFINITION="AI"
          {
            DESCRIPTION=""
          }
          ATTRIBUTE NAME="HI_LIM" { VALUE { CV=100 } }
        }
        """
        module = parse(source).children[0]
        assert [e.name for e in module.elements] == ["FUNCTION_BLOCK", "ATTRIBUTE"]
        attribute = module.elements[1]
        assert attribute.elements[0].body == (Attribute("CV", Word("100")),)

    def test_body_order_is_preserved(self) -> None:
        """Attributes and elements keep their relative source order."""
        element = parse("A { X=1 B{} Y=2 C{} Z=3 }").children[0]
        kinds = [(type(node).__name__, node.name) for node in element.body]
        assert kinds == [
            ("Attribute", "X"),
            ("Element", "B"),
            ("Attribute", "Y"),
            ("Element", "C"),
            ("Attribute", "Z"),
        ]

    def test_attribute_tried_before_element(self) -> None:
        """X=1 in a body is an attribute, not an element X with preamble."""
        element = parse("A { X=1 }").children[0]
        assert isinstance(element.body[0], Attribute)

    def test_equals_element_in_body(self) -> None:
        """NAME = { ... } whose braces hold no bitmask is an element."""
        element = parse("A { WIRES = { W1 { } } }").children[0]
        wires = element.body[0]
        assert isinstance(wires, Element)
        assert wires.name == "WIRES"
        assert wires.elements[0].name == "W1"

    def test_equals_with_bitmask_is_attribute(self) -> None:
        """NAME = {0a ff} is an attribute because attributes are tried first."""
        element = parse("A { MASK = {0a ff} }").children[0]
        assert isinstance(element.body[0], Attribute)
        assert element.body[0].value.representation == "{0a ff}"

    def test_tag_name_characters(self) -> None:
        doc = parse("_a:b.c-d { x.y:z-1=2 }")
        element = doc.children[0]
        assert element.name == "_a:b.c-d"
        assert element.body[0].name == "x.y:z-1"

    def test_elements_accessor_and_all_attributes(self) -> None:
        element = parse("A P=1 { X=2 B{} Y=3 }").children[0]
        assert [a.name for a in element.all_attributes] == ["P", "X", "Y"]
        assert [e.name for e in element.elements] == ["B"]
        assert element.get("Y") == Word("3")
        assert element.get("MISSING") is None

    def test_iter_elements_depth_first(self) -> None:
        doc = parse("A { B { C{} } D{} } E{}")
        assert [e.name for e in doc.iter_elements()] == ["A", "B", "C", "D", "E"]
        assert doc.element_count() == 5


class TestLocations:
    """Nodes remember where they came from."""

    def test_element_location(self) -> None:
        doc = parse("A{}\n  B { X=1 }", source_file="POWER.fhx")
        b = doc.children[1]
        assert b.location is not None
        assert b.location.lineno == 2
        assert b.location.col_offset == 3
        assert b.location.source_file == "POWER.fhx"

    def test_attribute_location(self) -> None:
        attribute = parse("A {\n\tX=1\n}").children[0].body[0]
        assert attribute.location is not None
        assert (attribute.location.lineno, attribute.location.col_offset) == (2, 2)

    def test_location_does_not_affect_equality(self) -> None:
        assert parse("A{X=1}") == parse("\n\n   A  {  X = 1  }")


class TestParserInstance:
    """Direct Parser usage."""

    def test_parser_returns_document(self) -> None:
        doc = Parser("A{}").parse()
        assert isinstance(doc, Document)

    def test_source_file_in_document_location(self) -> None:
        doc = Parser("A{}", source_file="x.fhx").parse()
        assert doc.location is not None
        assert doc.location.source_file == "x.fhx"
