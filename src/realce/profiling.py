"""ParseAccumulator: opt-in profiling for inline parsing.

This module provides accumulated metrics during parsing:
- Total profiling time
- Source length
- Marker tokens scanned and spans resolved

Zero overhead when disabled (get_parse_accumulator() returns None).

Example:
    from realce import parse
    from realce.profiling import profiled_parse

    with profiled_parse() as metrics:
        parse("*****a*****")

    print(metrics.summary())
    # {"total_ms": 0.1, "source_length": 11, "marker_count": 10, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ParseAccumulator:
    """Accumulated metrics during inline parsing.

    Attributes:
        start_time: Profiling start timestamp.
        source_length: Total length of sources parsed.
        marker_count: Marker tokens scanned (nested link text included).
        span_count: Emphasis/strong spans resolved.
        parse_calls: Number of parses recorded.

    """

    start_time: float = field(default_factory=perf_counter)
    source_length: int = 0
    marker_count: int = 0
    span_count: int = 0
    parse_calls: int = 0

    def record_parse(self, source_length: int, marker_count: int, span_count: int) -> None:
        """Record one parse.

        Args:
            source_length: Length of the source string parsed.
            marker_count: Marker tokens in the source.
            span_count: Spans resolved from those markers.

        """
        self.parse_calls += 1
        self.source_length += source_length
        self.marker_count += marker_count
        self.span_count += span_count

    @property
    def literal_marker_count(self) -> int:
        """Markers that fell back to literal text (two markers per span)."""
        # Every span consumes exactly one opener and one closer token. Link
        # text adds to both counts, markers inside code spans to neither.
        return self.marker_count - 2 * self.span_count

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of parse metrics.

        Returns:
            Dict with total_ms, source_length, marker_count, span_count,
            literal_marker_count, parse_calls.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "source_length": self.source_length,
            "marker_count": self.marker_count,
            "span_count": self.span_count,
            "literal_marker_count": self.literal_marker_count,
            "parse_calls": self.parse_calls,
        }


_accumulator: ContextVar[ParseAccumulator | None] = ContextVar(
    "parse_accumulator",
    default=None,
)


def get_parse_accumulator() -> ParseAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_parse() -> Iterator[ParseAccumulator]:
    """Context manager for profiled parsing.

    Creates a ParseAccumulator and makes it available via
    get_parse_accumulator() for the duration of the with block.

    Yields:
        ParseAccumulator that will be populated during parse calls.

    """
    acc = ParseAccumulator()
    token: Token[ParseAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = [
    "ParseAccumulator",
    "get_parse_accumulator",
    "profiled_parse",
]
