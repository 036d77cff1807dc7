"""Typed inline tokens for realce.

Uses NamedTuples for inline token representation, providing:
- Immutability by default (match state lives in MatchRegistry)
- Tuple unpacking and structural pattern matching
- Lower memory footprint than dicts or regular classes

Every token records the half-open source range ``offset:end`` it was scanned
from, which the builder turns into node locations.

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    from realce.parsing.tokens import MarkerToken, TextToken

    match token:
        case MarkerToken(char="*", can_open=True):
            ...
        case TextToken(content=content):
            ...

"""

from __future__ import annotations

from typing import Literal, NamedTuple

from realce.nodes import Inline

type DelimiterChar = Literal["*", "_"]


class TextToken(NamedTuple):
    """Literal text run.

    Escaped markers and characters consumed as literals are text tokens too.

    Attributes:
        content: The text content.
        offset: Source start offset.
        end: Source end offset (exclusive).

    """

    content: str
    offset: int
    end: int

    @property
    def type(self) -> Literal["text"]:
        """Token type identifier for dispatch."""
        return "text"


class MarkerToken(NamedTuple):
    """One ``*`` or ``_`` character considered for emphasis.

    Runs of markers are never merged: ``***`` is three tokens. The flanking
    flags are filled in by the scanner once all neighbours are known.

    Attributes:
        char: The marker character.
        explicit_open: Decorated with a preceding ``{``.
        explicit_close: Decorated with a following ``}``.
        can_open: May open a span.
        can_close: May close a span.
        offset: Source start offset (includes the ``{`` decoration).
        end: Source end offset (includes the ``}`` decoration).

    """

    char: DelimiterChar
    explicit_open: bool = False
    explicit_close: bool = False
    can_open: bool = False
    can_close: bool = False
    offset: int = 0
    end: int = 0

    @property
    def type(self) -> Literal["marker"]:
        """Token type identifier for dispatch."""
        return "marker"

    @property
    def literal(self) -> str:
        """Source spelling used when the marker stays unmatched."""
        if self.explicit_open:
            return "{" + self.char
        if self.explicit_close:
            return self.char + "}"
        return self.char


class OpaqueToken(NamedTuple):
    """Pre-built inline subtree (code span, autolink, link).

    Markers inside an opaque span are never visible to the matcher.

    Attributes:
        node: The pre-parsed inline node.
        offset: Source start offset.
        end: Source end offset (exclusive).

    """

    node: Inline
    offset: int
    end: int

    @property
    def type(self) -> Literal["opaque"]:
        """Token type identifier for dispatch."""
        return "opaque"


type InlineToken = TextToken | MarkerToken | OpaqueToken


__all__ = [
    "DelimiterChar",
    "TextToken",
    "MarkerToken",
    "OpaqueToken",
    "InlineToken",
]
