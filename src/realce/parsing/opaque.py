"""Opaque span tokenization for realce.

Code spans, autolinks and inline links are carved out of the source before
any marker is classified. Each becomes an OpaqueToken wrapping a finished
node, so markers inside them never reach the delimiter stack.

Handles:
- `code` spans (closing backtick run must have the same length)
- <scheme:rest> URI autolinks and <local@domain> email autolinks
- [text](destination) links, resolved when the scanner reaches ``]``

Links may not contain other links. Once a link or autolink forms, every
``[`` still waiting for its ``]`` stays literal.

Backtick runs and parenthesis pairs are indexed once per source, so no
lookahead rescans the rest of the input.

"""

from __future__ import annotations

import re
from bisect import bisect_left
from typing import TYPE_CHECKING

from realce.nodes import CodeSpan, Inline, Link, Text
from realce.parsing.tokens import InlineToken, OpaqueToken, TextToken

if TYPE_CHECKING:
    from realce.location import SourceLocation


# URI autolink: scheme of 2-32 chars, then anything but whitespace, < and >
_URI_AUTOLINK_RE = re.compile(r"<([a-zA-Z][a-zA-Z0-9+.\-]{1,31}:[^\s<>]*)>")

# local-part@domain where local-part has restricted chars
_EMAIL_AUTOLINK_RE = re.compile(
    r"<([a-zA-Z0-9.!#$%&'*+/=?^_`{|}~\-]+@[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*)>"
)

_ESCAPE_RE = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

_BACKTICK_RUN_RE = re.compile(r"`+")

# A backslash hides the character after it from parenthesis balancing
_PAREN_RE = re.compile(r"\\.|[()]", re.DOTALL)


def _process_escapes(text: str) -> str:
    """Replace backslash-escaped ASCII punctuation with the literal character."""
    return _ESCAPE_RE.sub(r"\1", text)


def _index_backtick_runs(text: str) -> dict[int, list[int]]:
    """Map run length to the ascending start offsets of maximal backtick runs."""
    runs: dict[int, list[int]] = {}
    for match in _BACKTICK_RUN_RE.finditer(text):
        runs.setdefault(match.end() - match.start(), []).append(match.start())
    return runs


def _index_paren_pairs(text: str) -> dict[int, int]:
    """Map each ``(`` offset to the offset of the ``)`` that balances it.

    Unbalanced ``(`` are absent from the result.
    """
    pairs: dict[int, int] = {}
    open_stack: list[int] = []
    for match in _PAREN_RE.finditer(text):
        char = match.group()
        if char == "(":
            open_stack.append(match.start())
        elif char == ")" and open_stack:
            pairs[open_stack.pop()] = match.start()
    return pairs


class OpaqueSpanMixin:
    """Mixin for opaque span recognition.

    Required Host Attributes:
        - _source: str
        - _backtick_runs: dict[int, list[int]] | None
        - _paren_pairs: dict[int, int] | None

    Required Host Methods (provided by InlineParser):
        - _resolve_tokens(tokens) -> tuple[Inline, ...]
        - _location(start, end) -> SourceLocation

    """

    _source: str
    _backtick_runs: dict[int, list[int]] | None
    _paren_pairs: dict[int, int] | None

    def _resolve_tokens(self, tokens: list[InlineToken]) -> tuple[Inline, ...]:
        """Resolve spans in a token list. Implemented by the InlineParser."""
        raise NotImplementedError

    def _location(self, start: int, end: int) -> SourceLocation:
        """Location for a source range. Implemented by the InlineParser."""
        raise NotImplementedError

    def _find_code_span_close(self, run_end: int, end: int, count: int) -> int:
        """Find the closing backtick run of exactly ``count`` backticks.

        Returns:
            Index of the closing run, or -1 if the span is unterminated.
        """
        if self._backtick_runs is None:
            self._backtick_runs = _index_backtick_runs(self._source)

        starts = self._backtick_runs.get(count)
        if not starts:
            return -1
        idx = bisect_left(starts, run_end)
        if idx < len(starts) and starts[idx] + count <= end:
            return starts[idx]
        return -1

    def _parse_link_destination(self, pos: int, end: int) -> tuple[str, int] | None:
        """Parse ``(destination)`` starting at the opening parenthesis.

        Nested parentheses must balance; escapes are honoured. Line breaks
        inside the destination are dropped.

        Returns:
            (url, position after the closing parenthesis) or None.
        """
        text = self._source
        if pos >= end or text[pos] != "(":
            return None
        if self._paren_pairs is None:
            self._paren_pairs = _index_paren_pairs(text)

        close = self._paren_pairs.get(pos)
        if close is None or close >= end:
            return None
        raw = text[pos + 1 : close].replace("\n", "").strip(" \t")
        return _process_escapes(raw), close + 1

    def _try_parse_code_span(self, pos: int, end: int) -> tuple[CodeSpan, int] | None:
        """Try to parse a code span at position.

        Line endings become spaces; one leading and one trailing space are
        stripped when both are present and the content is not all spaces.

        Returns (CodeSpan, new_position) or None if unterminated.
        """
        text = self._source
        run_end = pos
        while run_end < end and text[run_end] == "`":
            run_end += 1
        count = run_end - pos

        close_pos = self._find_code_span_close(run_end, end, count)
        if close_pos == -1:
            return None

        code = text[run_end:close_pos].replace("\n", " ")
        if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip(" "):
            code = code[1:-1]
        new_pos = close_pos + count
        return CodeSpan(location=self._location(pos, new_pos), code=code), new_pos

    def _try_parse_autolink(self, pos: int, end: int) -> tuple[Link, int] | None:
        """Try to parse a URI or email autolink at position.

        - <https://example.com> -> Link(url="https://example.com")
        - <foo@example.com> -> Link(url="mailto:foo@example.com")

        Returns (Link, new_position) or None if not an autolink.
        """
        text = self._source

        uri_match = _URI_AUTOLINK_RE.match(text, pos, end)
        if uri_match:
            target = uri_match.group(1)
            new_pos = uri_match.end()
            children = (Text(location=self._location(pos + 1, new_pos - 1), content=target),)
            return (
                Link(
                    location=self._location(pos, new_pos),
                    url=target,
                    children=children,
                    autolink=True,
                ),
                new_pos,
            )

        email_match = _EMAIL_AUTOLINK_RE.match(text, pos, end)
        if email_match:
            email = email_match.group(1)
            new_pos = email_match.end()
            children = (Text(location=self._location(pos + 1, new_pos - 1), content=email),)
            return (
                Link(
                    location=self._location(pos, new_pos),
                    url=f"mailto:{email}",
                    children=children,
                    autolink=True,
                ),
                new_pos,
            )

        return None

    def _try_close_link(
        self,
        tokens: list[InlineToken],
        brackets: list[int],
        pos: int,
        end: int,
    ) -> int | None:
        """Try to close an inline link at the ``]`` at position.

        ``brackets`` holds the token indices of pending ``[`` openers; the
        innermost one is consumed whether or not the link forms. On success
        the opener and every token after it are replaced by one OpaqueToken.
        The link text resolves as inline content of its own, so spans inside
        it never pair with markers outside the link.

        Returns the position after the destination, or None if no link.
        """
        opener_idx = brackets.pop()
        destination = self._parse_link_destination(pos + 1, end)
        if destination is None:
            return None

        url, new_pos = destination
        opener = tokens[opener_idx]
        children = self._resolve_tokens(tokens[opener_idx + 1 :])
        del tokens[opener_idx:]

        link = Link(location=self._location(opener.offset, new_pos), url=url, children=children)
        tokens.append(OpaqueToken(node=link, offset=opener.offset, end=new_pos))
        brackets.clear()
        return new_pos

    @staticmethod
    def _open_bracket(tokens: list[InlineToken], brackets: list[int], pos: int) -> None:
        """Record a ``[`` as literal text that a later ``]`` may turn into a link."""
        brackets.append(len(tokens))
        tokens.append(TextToken(content="[", offset=pos, end=pos + 1))
