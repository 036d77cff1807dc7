"""Tests for marker scanning and flanking classification.

Works on the token list directly, below the node tree.
"""

from __future__ import annotations

import pytest

from realce.config import ParseConfig, parse_config_context
from realce.parser import InlineParser
from realce.parsing.charsets import ends_with_whitespace, starts_with_whitespace
from realce.parsing.tokens import InlineToken, MarkerToken, OpaqueToken, TextToken


def _tokens(source: str) -> list[InlineToken]:
    parser = InlineParser(source)
    tokens = parser._tokenize_inline(0, len(parser.source))
    parser._classify_markers(tokens)
    return tokens


def _markers(source: str) -> list[MarkerToken]:
    return [t for t in _tokens(source) if isinstance(t, MarkerToken)]


class TestTokenization:
    """Splitting source into typed tokens."""

    def test_plain_text_is_one_token(self) -> None:
        assert _tokens("hello world") == [TextToken("hello world", 0, 11)]

    def test_one_token_per_marker(self) -> None:
        """Runs are never merged."""
        markers = _markers("***a***")
        assert len(markers) == 6
        assert [m.offset for m in markers] == [0, 1, 2, 4, 5, 6]

    def test_token_types(self) -> None:
        tokens = _tokens("a*`b`")
        assert [t.type for t in tokens] == ["text", "marker", "opaque"]
        assert isinstance(tokens[2], OpaqueToken)

    def test_offsets_cover_source(self) -> None:
        """Consecutive tokens tile the source without gaps."""
        source = "x {_a_} \\* `c` [d](e) <http://f> *g*"
        tokens = _tokens(source)
        assert tokens[0].offset == 0
        for prev, token in zip(tokens, tokens[1:], strict=False):
            assert prev.end == token.offset
        assert tokens[-1].end == len(source)

    def test_escape_is_text(self) -> None:
        tokens = _tokens("\\*")
        assert tokens == [TextToken("*", 0, 2)]

    def test_explicit_open_decoration(self) -> None:
        (marker,) = _markers("{_a")
        assert marker.explicit_open
        assert not marker.explicit_close
        assert (marker.offset, marker.end) == (0, 2)
        assert marker.literal == "{_"

    def test_explicit_close_decoration(self) -> None:
        (marker,) = _markers("a*}")
        assert marker.explicit_close
        assert (marker.offset, marker.end) == (1, 3)
        assert marker.literal == "*}"

    def test_both_decorations_keep_opening_one(self) -> None:
        tokens = _tokens("{_}")
        assert isinstance(tokens[0], MarkerToken)
        assert tokens[0].explicit_open
        assert not tokens[0].explicit_close
        assert tokens[1] == TextToken("}", 2, 3)

    def test_decorations_disabled(self) -> None:
        with parse_config_context(ParseConfig(explicit_markers_enabled=False)):
            markers = _markers("{_a_}")
        assert all(not m.explicit_open and not m.explicit_close for m in markers)
        assert [m.literal for m in markers] == ["_", "_"]


class TestClassification:
    """can_open/can_close from neighbouring tokens."""

    @pytest.mark.parametrize(
        ("source", "index", "can_open", "can_close"),
        [
            ("*a", 0, True, False),
            ("a*", 0, False, True),
            ("a*b", 0, True, True),
            (" * ", 0, False, False),
            ("*", 0, False, False),
            ("a*\tb", 0, False, True),
            ("a\n*b", 0, True, False),
            ("a\u00a0*\u00a0b", 0, True, True),
            ("a * b", 0, False, False),
            ("**", 0, True, False),
            ("**", 1, False, True),
        ],
    )
    def test_default_marker_flags(
        self, source: str, index: int, can_open: bool, can_close: bool
    ) -> None:
        marker = _markers(source)[index]
        assert marker.can_open is can_open
        assert marker.can_close is can_close

    def test_explicit_open_ignores_whitespace(self) -> None:
        (marker,) = _markers("{_ ")
        assert marker.can_open
        assert not marker.can_close

    def test_explicit_close_ignores_whitespace(self) -> None:
        (marker,) = _markers(" _}")
        assert marker.can_close
        assert not marker.can_open

    def test_opaque_neighbour_is_content(self) -> None:
        first, second = _markers("*`x`*")
        assert first.can_open
        assert second.can_close


class TestWhitespaceHelpers:
    """Boundary helpers on flanking whitespace."""

    @pytest.mark.parametrize("text", ["", " a", "\ta", "\na"])
    def test_starts_with_whitespace(self, text: str) -> None:
        assert starts_with_whitespace(text)

    @pytest.mark.parametrize("text", ["a", "\u00a0a", "\u3000a", "\ra"])
    def test_does_not_start_with_whitespace(self, text: str) -> None:
        assert not starts_with_whitespace(text)

    @pytest.mark.parametrize("text", ["", "a ", "a\t", "a\n"])
    def test_ends_with_whitespace(self, text: str) -> None:
        assert ends_with_whitespace(text)

    @pytest.mark.parametrize("text", ["a", "a\u00a0", "a\u2003"])
    def test_does_not_end_with_whitespace(self, text: str) -> None:
        assert not ends_with_whitespace(text)
