"""fhxml ConversionAccumulator: opt-in timing for conversions.

This module provides accumulated metrics while converting:
- Time spent parsing and rendering
- Source length and output length
- Element count in resulting trees

Zero overhead when disabled (get_accumulator() returns None).

Example:
    from fhxml import convert
    from fhxml.profiling import profiled_convert

    with profiled_convert() as metrics:
        xml = convert(source)

    print(metrics.summary())
    # {"total_ms": 1.2, "parse_ms": 0.9, "render_ms": 0.2, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ConversionAccumulator:
    """Accumulated metrics across parse and render calls.

    Attributes:
        start_time: Profiling start timestamp.
        parse_seconds: Time spent inside parse().
        render_seconds: Time spent inside render().
        source_length: Total characters parsed.
        output_length: Total characters rendered.
        element_count: Number of elements produced by the parser.
        parse_calls: Number of parse() calls recorded.
        render_calls: Number of render() calls recorded.

    """

    start_time: float = field(default_factory=perf_counter)
    parse_seconds: float = 0.0
    render_seconds: float = 0.0
    source_length: int = 0
    output_length: int = 0
    element_count: int = 0
    parse_calls: int = 0
    render_calls: int = 0

    def record_parse(self, source_length: int, element_count: int, seconds: float) -> None:
        """Record a parse call."""
        self.parse_calls += 1
        self.source_length += source_length
        self.element_count += element_count
        self.parse_seconds += seconds

    def record_render(self, output_length: int, seconds: float) -> None:
        """Record a render call."""
        self.render_calls += 1
        self.output_length += output_length
        self.render_seconds += seconds

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of conversion metrics.

        Returns:
            Dict with total_ms, parse_ms, render_ms, lengths, counts.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "parse_ms": round(self.parse_seconds * 1000, 2),
            "render_ms": round(self.render_seconds * 1000, 2),
            "source_length": self.source_length,
            "output_length": self.output_length,
            "element_count": self.element_count,
            "parse_calls": self.parse_calls,
            "render_calls": self.render_calls,
        }


_accumulator: ContextVar[ConversionAccumulator | None] = ContextVar(
    "conversion_accumulator",
    default=None,
)


def get_accumulator() -> ConversionAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_convert() -> Iterator[ConversionAccumulator]:
    """Context manager for profiled conversion.

    Creates a ConversionAccumulator and makes it available via
    get_accumulator() for the duration of the with block.

    Yields:
        ConversionAccumulator populated by parse() and render() calls.

    """
    acc = ConversionAccumulator()
    token: Token[ConversionAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
