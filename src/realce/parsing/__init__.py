"""Inline parsing components for realce.

The InlineParser composes these mixins:
- `MarkerScannerMixin`: tokenization and flanking classification
- `OpaqueSpanMixin`: code spans, autolinks and links
- `EmphasisMixin`: delimiter-stack matching
- `InlineBuilderMixin`: node tree assembly

"""

from realce.parsing.builder import InlineBuilderMixin
from realce.parsing.delimiters import DelimiterCandidate, DelimiterStack
from realce.parsing.emphasis import EmphasisMixin
from realce.parsing.match_registry import MatchRegistry, SpanKind, SpanMatch
from realce.parsing.opaque import OpaqueSpanMixin
from realce.parsing.scanner import MarkerScannerMixin

__all__ = [
    "DelimiterCandidate",
    "DelimiterStack",
    "EmphasisMixin",
    "InlineBuilderMixin",
    "MarkerScannerMixin",
    "MatchRegistry",
    "OpaqueSpanMixin",
    "SpanKind",
    "SpanMatch",
]
