"""Marker scanning for realce.

Turns a range of inline source into the flat token list the matcher works
on: text runs, one MarkerToken per ``*``/``_`` character, and opaque tokens
for spans carved out by OpaqueSpanMixin.

Precedence, highest first:
1. Opaque spans (code spans, autolinks, links closed at ``]``)
2. Backslash escapes (``\\*`` is literal text, permanently)
3. Explicit decorations (``{*`` opens, ``*}`` closes)
4. Plain markers

Thread Safety:
All methods use instance-local state only. Safe for concurrent use when
each parser instance is used by one thread.

"""

from __future__ import annotations

from realce.config import get_parse_config
from realce.parsing.charsets import (
    ASCII_PUNCTUATION,
    EXPLICIT_CLOSE,
    EXPLICIT_OPEN,
    INLINE_SPECIAL,
    MARKER_CHARS,
    ends_with_whitespace,
    starts_with_whitespace,
)
from realce.parsing.tokens import (
    InlineToken,
    MarkerToken,
    OpaqueToken,
    TextToken,
)
from realce.utils.logger import get_logger

logger = get_logger(__name__)


def _neighbour_text(token: InlineToken | None) -> str:
    """Text view of a neighbouring token for flanking checks."""
    match token:
        case None:
            return ""
        case TextToken(content=content):
            return content
        case MarkerToken(char=char):
            return char
        case _:
            # Opaque spans count as ordinary content
            return "\x00"


class MarkerScannerMixin:
    """Mixin for inline tokenization and flanking classification.

    Required Host Attributes:
        - _source: str

    Required Host Methods (from OpaqueSpanMixin):
        - _try_parse_code_span(pos, end) -> tuple | None
        - _try_parse_autolink(pos, end) -> tuple | None
        - _open_bracket(tokens, brackets, pos) -> None
        - _try_close_link(tokens, brackets, pos, end) -> int | None

    """

    _source: str

    def _tokenize_inline(self, start: int, end: int) -> list[InlineToken]:
        """Tokenize ``self._source[start:end]`` into typed tokens.

        Marker tokens come out with both flanking flags False; call
        ``_classify_markers`` on the finished list to fill them in.
        """
        text = self._source
        config = get_parse_config()
        explicit_enabled = config.explicit_markers_enabled
        tokens: list[InlineToken] = []
        tokens_append = tokens.append
        # Token indices of "[" still waiting for their "]"
        brackets: list[int] = []
        pos = start

        while pos < end:
            char = text[pos]

            # Code span: handled first so markers inside stay literal
            if char == "`":
                if config.code_spans_enabled:
                    code_result = self._try_parse_code_span(pos, end)
                    if code_result:
                        node, new_pos = code_result
                        tokens_append(OpaqueToken(node=node, offset=pos, end=new_pos))
                        pos = new_pos
                        continue
                # Unterminated: the whole backtick run is literal
                run_end = pos
                while run_end < end and text[run_end] == "`":
                    run_end += 1
                tokens_append(TextToken(content=text[pos:run_end], offset=pos, end=run_end))
                pos = run_end
                continue

            if char == "<" and config.autolinks_enabled:
                autolink_result = self._try_parse_autolink(pos, end)
                if autolink_result:
                    node, new_pos = autolink_result
                    tokens_append(OpaqueToken(node=node, offset=pos, end=new_pos))
                    # Pending brackets can no longer become links
                    brackets.clear()
                    pos = new_pos
                    continue

            if char == "[" and config.links_enabled:
                self._open_bracket(tokens, brackets, pos)
                pos += 1
                continue

            if char == "]" and brackets:
                new_pos = self._try_close_link(tokens, brackets, pos, end)
                if new_pos is not None:
                    pos = new_pos
                    continue
                tokens_append(TextToken(content="]", offset=pos, end=pos + 1))
                pos += 1
                continue

            if char == "\\":
                if pos + 1 < end and text[pos + 1] in ASCII_PUNCTUATION:
                    tokens_append(TextToken(content=text[pos + 1], offset=pos, end=pos + 2))
                    pos += 2
                else:
                    tokens_append(TextToken(content="\\", offset=pos, end=pos + 1))
                    pos += 1
                continue

            if (
                char == EXPLICIT_OPEN
                and explicit_enabled
                and pos + 1 < end
                and text[pos + 1] in MARKER_CHARS
            ):
                pos = self._scan_marker(tokens, pos + 1, end, explicit_open=True)
                continue

            if char in MARKER_CHARS:
                pos = self._scan_marker(tokens, pos, end, explicit_open=False)
                continue

            # Regular text: always consume the current character, it may be a
            # special character whose construct did not apply
            text_start = pos
            pos += 1
            while pos < end and text[pos] not in INLINE_SPECIAL:
                pos += 1
            tokens_append(TextToken(content=text[text_start:pos], offset=text_start, end=pos))

        return tokens

    def _scan_marker(
        self,
        tokens: list[InlineToken],
        pos: int,
        end: int,
        *,
        explicit_open: bool,
    ) -> int:
        """Append the marker at ``pos`` and return the position after it.

        A following ``}`` is consumed as a closing decoration unless the
        marker already carries an opening one; in that case the brace stays
        in the source and is scanned as ordinary text.
        """
        text = self._source
        char = text[pos]
        offset = pos - 1 if explicit_open else pos
        next_pos = pos + 1
        explicit_close = False

        if (
            next_pos < end
            and text[next_pos] == EXPLICIT_CLOSE
            and get_parse_config().explicit_markers_enabled
        ):
            if explicit_open:
                logger.debug(
                    "Ignoring closing decoration on explicitly opened marker %r at offset %d",
                    char,
                    offset,
                )
            else:
                explicit_close = True
                next_pos += 1

        tokens.append(
            MarkerToken(
                char=char,  # type: ignore[arg-type]
                explicit_open=explicit_open,
                explicit_close=explicit_close,
                offset=offset,
                end=next_pos,
            )
        )
        return next_pos

    def _classify_markers(self, tokens: list[InlineToken]) -> None:
        """Fill in can_open/can_close of every marker from its neighbours.

        - can_open: explicit opener, or not an explicit closer and the next
          token does not begin with whitespace
        - can_close: explicit closer, or not an explicit opener and the
          previous token does not end with whitespace

        A missing neighbour (start or end of the content) counts as
        whitespace. Tokens are replaced in place.
        """
        last = len(tokens) - 1
        for idx, token in enumerate(tokens):
            if not isinstance(token, MarkerToken):
                continue

            before = tokens[idx - 1] if idx > 0 else None
            after = tokens[idx + 1] if idx < last else None
            space_before = ends_with_whitespace(_neighbour_text(before))
            space_after = starts_with_whitespace(_neighbour_text(after))

            tokens[idx] = token._replace(
                can_open=token.explicit_open or (not token.explicit_close and not space_after),
                can_close=token.explicit_close or (not token.explicit_open and not space_before),
            )
