"""AST assembly for realce.

Folds the resolved spans in a MatchRegistry around the token list. Spans
never overlap, so a single pass with an explicit stack of open frames is
enough: an opener pushes a frame, its closer pops it and appends the
finished Emphasis/Strong node to the enclosing frame. The pass is iterative,
so nesting depth is bounded by memory rather than the recursion limit.

Unmatched and discarded markers become text in their source spelling, and
adjacent text is coalesced into one Text node.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from realce.config import get_parse_config
from realce.nodes import Emphasis, Inline, Strong, Text
from realce.parsing.match_registry import MatchRegistry, SpanKind
from realce.parsing.tokens import InlineToken, MarkerToken, OpaqueToken, TextToken

if TYPE_CHECKING:
    from realce.location import SourceLocation


@dataclass(slots=True)
class _Frame:
    """Children collected so far for one open span (or the top level)."""

    kind: SpanKind | None
    offset: int
    closer_idx: int
    children: list[Inline] = field(default_factory=list)
    text_parts: list[str] = field(default_factory=list)
    text_start: int = 0
    text_end: int = 0


class InlineBuilderMixin:
    """Mixin for turning matched tokens into nodes.

    Required Host Methods (provided by InlineParser):
        - _location(start, end) -> SourceLocation

    """

    def _location(self, start: int, end: int) -> SourceLocation:
        """Location for a source range. Implemented by the InlineParser."""
        raise NotImplementedError

    def _build_inline_ast(
        self,
        tokens: list[InlineToken],
        registry: MatchRegistry,
    ) -> tuple[Inline, ...]:
        """Build nodes from tokens using the match registry.

        Args:
            tokens: Classified token list.
            registry: Spans resolved by _process_emphasis.

        Returns:
            Tuple of Inline nodes.
        """
        transformer = get_parse_config().text_transformer
        root = _Frame(kind=None, offset=0, closer_idx=-1)
        frames = [root]

        for idx, token in enumerate(tokens):
            frame = frames[-1]

            match token:
                case TextToken(content=content, offset=offset, end=end):
                    self._add_text(frame, content, offset, end)

                case OpaqueToken(node=node):
                    self._flush_text(frame, transformer)
                    frame.children.append(node)

                case MarkerToken(offset=offset, end=end):
                    match_info = registry.match_for_opener(idx)
                    if match_info is not None:
                        self._flush_text(frame, transformer)
                        frames.append(
                            _Frame(
                                kind=match_info.kind,
                                offset=offset,
                                closer_idx=match_info.closer_idx,
                            )
                        )
                    elif idx == frame.closer_idx:
                        self._flush_text(frame, transformer)
                        frames.pop()
                        node_cls = Strong if frame.kind is SpanKind.STRONG else Emphasis
                        frames[-1].children.append(
                            node_cls(
                                location=self._location(frame.offset, end),
                                children=tuple(frame.children),
                            )
                        )
                    else:
                        self._add_text(frame, token.literal, offset, end)

        self._flush_text(root, transformer)
        return tuple(root.children)

    def _add_text(self, frame: _Frame, content: str, start: int, end: int) -> None:
        """Queue text on a frame, coalescing with the pending run."""
        if not frame.text_parts:
            frame.text_start = start
        frame.text_parts.append(content)
        frame.text_end = end

    def _flush_text(self, frame: _Frame, transformer: Callable[[str], str] | None) -> None:
        """Emit the pending text run of a frame as one Text node."""
        if not frame.text_parts:
            return
        content = "".join(frame.text_parts)
        frame.text_parts.clear()
        if transformer is not None:
            content = transformer(content)
        frame.children.append(
            Text(location=self._location(frame.text_start, frame.text_end), content=content)
        )
