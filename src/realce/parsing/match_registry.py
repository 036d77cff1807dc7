"""Match registry for resolved emphasis spans.

Decouples match state from token objects, keeping tokens immutable. The
matcher records every opener/closer pair here together with the markers it
discarded; the builder reads it back to assemble the node tree.

Thread Safety:
MatchRegistry instances are single-use per inline parse.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class SpanKind(StrEnum):
    """Kind of span a matched marker pair produces."""

    EMPHASIS = "emphasis"
    STRONG = "strong"

    @classmethod
    def for_char(cls, char: str) -> SpanKind:
        """``*`` pairs are strong, ``_`` pairs are emphasis."""
        return cls.STRONG if char == "*" else cls.EMPHASIS


@dataclass(frozen=True, slots=True)
class SpanMatch:
    """Record of a matched opener-closer pair.

    Attributes:
        opener_idx: Index of the opener token in the token list.
        closer_idx: Index of the closer token in the token list.
        kind: Span kind produced by the pair.

    """

    opener_idx: int
    closer_idx: int
    kind: SpanKind


@dataclass(slots=True)
class MatchRegistry:
    """External tracking for resolved spans.

    Usage:
        registry = MatchRegistry()
        registry.record_match(opener_idx=0, closer_idx=4, kind=SpanKind.STRONG)
        registry.closer_for(0)  # 4

    Complexity:
        - record_match(): O(1)
        - closer_for(): O(1)
        - is_matched(): O(1)
        - discard(): O(1)

    """

    matches: list[SpanMatch] = field(default_factory=list)
    discarded: set[int] = field(default_factory=set)
    _by_opener: dict[int, SpanMatch] = field(default_factory=dict)
    _closers: set[int] = field(default_factory=set)

    def record_match(self, opener_idx: int, closer_idx: int, kind: SpanKind) -> None:
        """Record a resolved span.

        Args:
            opener_idx: Index of the opening marker token.
            closer_idx: Index of the closing marker token.
            kind: Span kind.
        """
        match = SpanMatch(opener_idx, closer_idx, kind)
        self.matches.append(match)
        self._by_opener[opener_idx] = match
        self._closers.add(closer_idx)

    def discard(self, idx: int) -> None:
        """Mark an opener as discarded by an enclosing span.

        Args:
            idx: Token index of the discarded marker.
        """
        self.discarded.add(idx)

    def match_for_opener(self, idx: int) -> SpanMatch | None:
        """Match record where idx is the opener, or None."""
        return self._by_opener.get(idx)

    def closer_for(self, idx: int) -> int | None:
        """Closer token index paired with the opener at idx, or None."""
        match = self._by_opener.get(idx)
        return match.closer_idx if match is not None else None

    def is_matched(self, idx: int) -> bool:
        """Check whether the marker at idx is part of a resolved span."""
        return idx in self._by_opener or idx in self._closers

    def __len__(self) -> int:
        return len(self.matches)


__all__ = [
    "MatchRegistry",
    "SpanKind",
    "SpanMatch",
]
