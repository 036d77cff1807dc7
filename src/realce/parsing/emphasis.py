"""Emphasis matching for realce.

Single left-to-right pass over the token list, driven by a DelimiterStack.
For every marker:

1. Try close: find the nearest opener of the same character and
   explicitness class. If there is at least one token between the two,
   record a span and truncate the stack at the opener; every candidate that
   sat above it is discarded and stays literal.
2. Else try open: push the marker when it may open.
3. Else the marker is literal.

Whatever is left on the stack at the end of input is literal.

``*`` pairs produce strong spans and ``_`` pairs produce emphasis. Runs are
never merged, so N openers against N closers nest N levels deep.

Thread Safety:
The stack and registry are created per call and never shared.

"""

from __future__ import annotations

from realce.parsing.delimiters import DelimiterCandidate, DelimiterStack
from realce.parsing.match_registry import MatchRegistry, SpanKind
from realce.parsing.tokens import InlineToken, MarkerToken
from realce.utils.logger import get_logger

logger = get_logger(__name__)


class EmphasisMixin:
    """Mixin for marker matching.

    Uses an external MatchRegistry for match tracking (tokens stay immutable).

    Required Host Attributes: None

    Required Host Methods: None

    """

    def _process_emphasis(
        self,
        tokens: list[InlineToken],
        registry: MatchRegistry | None = None,
    ) -> MatchRegistry:
        """Resolve which markers pair up into spans.

        Args:
            tokens: Classified tokens from _tokenize_inline/_classify_markers.
            registry: Optional MatchRegistry to fill. If None, creates a new one.

        Returns:
            MatchRegistry containing all resolved spans and discarded markers.
        """
        if registry is None:
            registry = MatchRegistry()

        stack = DelimiterStack()

        for idx, token in enumerate(tokens):
            if not isinstance(token, MarkerToken):
                continue

            if token.can_close and self._try_close(stack, registry, token, idx):
                continue

            if token.can_open:
                stack.push(DelimiterCandidate.from_token(token, idx))

        leftover = stack.drain()
        if leftover:
            logger.debug("%d unmatched opener(s) left literal at end of input", len(leftover))

        return registry

    def _try_close(
        self,
        stack: DelimiterStack,
        registry: MatchRegistry,
        closer: MarkerToken,
        closer_idx: int,
    ) -> bool:
        """Close the nearest compatible opener, if any.

        Only the nearest opener of the closer's class is considered. When it
        is directly adjacent the span would be empty, so no match is made and
        the closer falls through to the open branch.

        Returns:
            True if a span was recorded.
        """
        depth = stack.find_opener(closer.char, closer.explicit_close)
        if depth is None:
            return False

        opener = stack[depth]
        if closer_idx - opener.position < 2:
            return False

        opener, *discarded = stack.truncate(depth)
        for candidate in discarded:
            registry.discard(candidate.position)
        if discarded:
            logger.debug(
                "Span %d..%d discarded %d enclosed opener(s)",
                opener.position,
                closer_idx,
                len(discarded),
            )

        registry.record_match(opener.position, closer_idx, SpanKind.for_char(closer.char))
        return True
