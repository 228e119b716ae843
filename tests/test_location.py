"""Tests for source locations and offset-to-line mapping."""

import pytest

from fhxml.location import LineIndex, SourceLocation


class TestSourceLocation:
    def test_str_without_file(self) -> None:
        assert str(SourceLocation(3, 5)) == "3:5"

    def test_str_with_file(self) -> None:
        assert str(SourceLocation(3, 5, source_file="POWER.fhx")) == "POWER.fhx:3:5"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            SourceLocation(1, 1).lineno = 2  # type: ignore[misc]


class TestLineIndex:
    @pytest.mark.parametrize(
        ("offset", "position"),
        [
            (0, (1, 1)),
            (2, (1, 3)),
            (3, (1, 4)),
            (4, (2, 1)),
            (5, (2, 2)),
            (7, (3, 1)),
        ],
    )
    def test_position(self, offset: int, position: tuple[int, int]) -> None:
        index = LineIndex("A {\n X\n}")
        assert index.position(offset) == position

    def test_offset_past_end_clamped(self) -> None:
        index = LineIndex("A\nB")
        assert index.position(99) == (2, 2)

    def test_empty_source(self) -> None:
        assert LineIndex("").position(0) == (1, 1)

    def test_location(self) -> None:
        loc = LineIndex("A\n  B{}", source_file="x.fhx").location(4, 7)
        assert loc == SourceLocation(2, 3, offset=4, end_offset=7, source_file="x.fhx")

    def test_location_without_end(self) -> None:
        loc = LineIndex("A{}").location(1)
        assert loc.end_offset == 1
