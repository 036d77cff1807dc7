"""Inline parser producing typed nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `MarkerScannerMixin`: source -> tokens, flanking classification
- `OpaqueSpanMixin`: code spans, autolinks, links
- `EmphasisMixin`: delimiter stack matching
- `InlineBuilderMixin`: tokens + matches -> node tree

Thread Safety:
- Parser instances are single-use; create one per inline content
- Configuration is read from ContextVar (thread-local)
- The resulting nodes are immutable and safe to share across threads

"""

from __future__ import annotations

from bisect import bisect_right

from realce.location import SourceLocation
from realce.nodes import Inline
from realce.parsing import (
    EmphasisMixin,
    InlineBuilderMixin,
    MarkerScannerMixin,
    OpaqueSpanMixin,
)
from realce.parsing.tokens import InlineToken, MarkerToken
from realce.profiling import get_parse_accumulator


class InlineParser(
    MarkerScannerMixin,
    OpaqueSpanMixin,
    EmphasisMixin,
    InlineBuilderMixin,
):
    """Parser for one run of inline content (a paragraph, a heading, ...).

    Usage:
        >>> parser = InlineParser("_foo *bar_ baz*")
        >>> parser.parse()
        (Emphasis(children=(Text(content='foo *bar'),), ...), Text(content=' baz*', ...))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_line_starts",
        "_backtick_runs",
        "_paren_pairs",
        "_marker_count",
        "_span_count",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with inline source text.

        ``\\r\\n`` line endings are normalised to ``\\n`` so that every line
        ending counts as flanking whitespace.

        Args:
            source: Inline source text
            source_file: Optional source file path recorded in locations

        """
        self._source = source.replace("\r\n", "\n")
        self._source_file = source_file
        self._line_starts: list[int] | None = None
        self._backtick_runs: dict[int, list[int]] | None = None
        self._paren_pairs: dict[int, int] | None = None
        self._marker_count = 0
        self._span_count = 0

    @property
    def source(self) -> str:
        """The (normalised) source being parsed."""
        return self._source

    def parse(self) -> tuple[Inline, ...]:
        """Parse the whole source into inline nodes.

        Returns:
            Tuple of Inline nodes (Text, Emphasis, Strong, CodeSpan, Link).
        """
        nodes = self._parse_inline(0, len(self._source))

        acc = get_parse_accumulator()
        if acc is not None:
            acc.record_parse(
                source_length=len(self._source),
                marker_count=self._marker_count,
                span_count=self._span_count,
            )

        return nodes

    def _parse_inline(self, start: int, end: int) -> tuple[Inline, ...]:
        """Parse ``self._source[start:end]`` as independent inline content."""
        if start >= end:
            return ()

        # Phase 1: tokens, with opaque spans carved out first
        return self._resolve_tokens(self._tokenize_inline(start, end))

    def _resolve_tokens(self, tokens: list[InlineToken]) -> tuple[Inline, ...]:
        """Classify, match and build one independent token list.

        Link text resolves through here when its ``]`` is reached, so spans
        never cross a link boundary.
        """
        if not tokens:
            return ()
        self._classify_markers(tokens)

        # Phase 2: resolve spans on the delimiter stack
        registry = self._process_emphasis(tokens)

        self._marker_count += sum(1 for token in tokens if isinstance(token, MarkerToken))
        self._span_count += len(registry)

        # Phase 3: fold spans into nodes
        return self._build_inline_ast(tokens, registry)

    def _location(self, start: int, end: int) -> SourceLocation:
        """Build a SourceLocation for the half-open source range start:end."""
        if self._line_starts is None:
            starts = [0]
            starts.extend(idx + 1 for idx, char in enumerate(self._source) if char == "\n")
            self._line_starts = starts

        line_idx = bisect_right(self._line_starts, start) - 1
        return SourceLocation(
            lineno=line_idx + 1,
            col_offset=start - self._line_starts[line_idx] + 1,
            offset=start,
            end_offset=end,
            source_file=self._source_file,
        )
