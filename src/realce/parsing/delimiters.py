"""Delimiter stack for emphasis matching.

The stack is a growable array of DelimiterCandidate records, ordered by
token position. The matcher pushes openers, looks up the nearest opener of a
given character and explicitness class from the top, and truncates the array
at a matched opener's depth.

A per-class index of depths gives O(1) opener lookup:

    (char, explicit) -> [depth, depth, ...]   # ascending

Truncation drops the tail of the array and pops the same depths from every
index list, so each candidate is pushed and removed at most once and the
total work over a parse is linear in the number of markers.

Thread Safety:
DelimiterStack instances are single-use per inline parse and owned by one
matcher invocation. No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from realce.errors import InternalConsistencyError
from realce.parsing.tokens import DelimiterChar, MarkerToken

type OpenerClass = tuple[DelimiterChar, bool]


@dataclass(slots=True)
class DelimiterCandidate:
    """Runtime record for one marker's open/close eligibility.

    ``can_open``/``can_close`` and the explicit flags are copied from the
    scanned token and never change; ``active`` flips to False once the
    candidate is matched or discarded.

    Attributes:
        char: Marker character.
        position: Index of the marker token in the token list.
        can_open: Whether the marker may open a span.
        can_close: Whether the marker may close a span.
        is_explicit_open: Marker carried a ``{`` decoration.
        is_explicit_close: Marker carried a ``}`` decoration.
        active: Still waiting for a partner.

    """

    char: DelimiterChar
    position: int
    can_open: bool
    can_close: bool
    is_explicit_open: bool = False
    is_explicit_close: bool = False
    active: bool = True

    @classmethod
    def from_token(cls, token: MarkerToken, position: int) -> DelimiterCandidate:
        """Build a candidate for the marker token at ``position``."""
        return cls(
            char=token.char,
            position=position,
            can_open=token.can_open,
            can_close=token.can_close,
            is_explicit_open=token.explicit_open,
            is_explicit_close=token.explicit_close,
        )

    @property
    def opener_class(self) -> OpenerClass:
        """Key of the index list this candidate is filed under as an opener."""
        return (self.char, self.is_explicit_open)


class DelimiterStack:
    """Position-ordered stack of active delimiter candidates.

    Usage:
        stack = DelimiterStack()
        stack.push(DelimiterCandidate("_", 0, can_open=True, can_close=False))
        depth = stack.find_opener("_", explicit=False)
        if depth is not None:
            opener, *discarded = stack.truncate(depth)

    Complexity:
        - push(): O(1)
        - find_opener(): O(1)
        - truncate(): O(removed), amortized O(1) per candidate

    """

    __slots__ = ("_entries", "_index")

    def __init__(self) -> None:
        self._entries: list[DelimiterCandidate] = []
        self._index: dict[OpenerClass, list[int]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[DelimiterCandidate]:
        return iter(self._entries)

    def __getitem__(self, depth: int) -> DelimiterCandidate:
        return self._entries[depth]

    @property
    def top(self) -> DelimiterCandidate | None:
        """Most recently pushed candidate, or None when empty."""
        return self._entries[-1] if self._entries else None

    def push(self, candidate: DelimiterCandidate) -> int:
        """Push a candidate and return its depth.

        Raises:
            InternalConsistencyError: If the candidate does not come after the
                current top in token order.
        """
        entries = self._entries
        if entries and candidate.position <= entries[-1].position:
            raise InternalConsistencyError(
                "Delimiter pushed out of position order",
                position=candidate.position,
                stack_size=len(entries),
            )
        depth = len(entries)
        entries.append(candidate)
        self._index.setdefault(candidate.opener_class, []).append(depth)
        return depth

    def find_opener(self, char: DelimiterChar, explicit: bool) -> int | None:
        """Depth of the nearest active opener of this character and class.

        Args:
            char: Marker character of the closer.
            explicit: Whether the closer is explicitly marked; only openers of
                the same explicitness are considered.

        Returns:
            Stack depth of the opener, or None if there is none.
        """
        depths = self._index.get((char, explicit))
        if not depths:
            return None
        return depths[-1]

    def truncate(self, depth: int) -> list[DelimiterCandidate]:
        """Remove the entry at ``depth`` and everything above it.

        Removed candidates are deactivated and returned bottom-up, so the
        first element is the entry that sat at ``depth``.

        Raises:
            InternalConsistencyError: If ``depth`` is outside the stack.
        """
        entries = self._entries
        if depth < 0 or depth >= len(entries):
            raise InternalConsistencyError(
                "Delimiter stack truncated outside its bounds",
                position=depth,
                stack_size=len(entries),
            )
        removed = entries[depth:]
        del entries[depth:]
        for candidate in removed:
            candidate.active = False
            depths = self._index[candidate.opener_class]
            while depths and depths[-1] >= depth:
                depths.pop()
        return removed

    def drain(self) -> list[DelimiterCandidate]:
        """Remove and deactivate every remaining candidate (end of input)."""
        if not self._entries:
            return []
        return self.truncate(0)


__all__ = [
    "DelimiterCandidate",
    "DelimiterStack",
    "OpenerClass",
]
