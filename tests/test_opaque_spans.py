"""Tests for opaque spans: code spans, autolinks and inline links.

Markers inside an opaque span never take part in emphasis matching, and an
opaque span counts as ordinary content for the flanking checks of markers
around it.
"""

import pytest

from realce import Markup, parse, render
from realce.nodes import CodeSpan, Emphasis, Link, Strong, Text
from realce.parser import InlineParser
from realce.parsing import InlineBuilderMixin, OpaqueSpanMixin


class TestCodeSpans:
    """Backtick code spans."""

    def test_basic_code_span(self) -> None:
        nodes = parse("`code`")
        assert len(nodes) == 1
        assert isinstance(nodes[0], CodeSpan)
        assert nodes[0].code == "code"

    def test_markers_inside_code_are_literal(self) -> None:
        assert render(parse("`*not strong*`")) == "<code>*not strong*</code>"

    def test_code_span_hides_closer(self) -> None:
        """A marker inside code cannot close an opener outside it."""
        assert render(parse("*a `b*` c")) == "*a <code>b*</code> c"

    def test_code_span_inside_strong(self) -> None:
        assert render(parse("*a `b` c*")) == "<strong>a <code>b</code> c</strong>"

    def test_code_span_is_content_for_flanking(self) -> None:
        """A marker directly before a code span may open."""
        assert render(parse("_`x`_")) == "<em><code>x</code></em>"

    def test_double_backticks(self) -> None:
        assert render(parse("``a ` b``")) == "<code>a ` b</code>"

    def test_single_space_padding_stripped(self) -> None:
        nodes = parse("`` `x` ``")
        assert isinstance(nodes[0], CodeSpan)
        assert nodes[0].code == "`x`"

    def test_all_space_content_kept(self) -> None:
        nodes = parse("`  `")
        assert isinstance(nodes[0], CodeSpan)
        assert nodes[0].code == "  "

    def test_newline_becomes_space(self) -> None:
        nodes = parse("`a\nb`")
        assert isinstance(nodes[0], CodeSpan)
        assert nodes[0].code == "a b"

    def test_unterminated_backticks_are_literal(self) -> None:
        """An unterminated run is text and markers after it still match."""
        assert render(parse("`a *b*")) == "`a <strong>b</strong>"

    def test_mismatched_run_lengths(self) -> None:
        assert render(parse("``a`")) == "``a`"

    def test_code_is_escaped(self) -> None:
        assert render(parse("`<b>&`")) == "<code>&lt;b&gt;&amp;</code>"

    def test_code_span_location(self) -> None:
        node = parse("ab `cd`")[1]
        assert isinstance(node, CodeSpan)
        assert node.location.offset == 3
        assert node.location.end_offset == 7


class TestAutolinks:
    """<scheme:...> and <user@host> autolinks."""

    def test_uri_autolink(self) -> None:
        nodes = parse("<https://example.com/a_b_c>")
        assert len(nodes) == 1
        link = nodes[0]
        assert isinstance(link, Link)
        assert link.autolink
        assert link.url == "https://example.com/a_b_c"
        assert link.children[0].content == "https://example.com/a_b_c"

    def test_markers_in_url_are_literal(self) -> None:
        html = render(parse("<https://x.org/*a*>"))
        assert "<strong>" not in html
        assert html.startswith('<a href="https://x.org/*a*">')

    def test_email_autolink(self) -> None:
        link = parse("<foo_bar@example.com>")[0]
        assert isinstance(link, Link)
        assert link.url == "mailto:foo_bar@example.com"
        assert link.children[0].content == "foo_bar@example.com"

    def test_not_an_autolink(self) -> None:
        """Angle brackets without a scheme are plain text."""
        assert render(parse("<_a_>")) == "&lt;<em>a</em>&gt;"

    def test_whitespace_breaks_autolink(self) -> None:
        assert render(parse("<http://a b>")) == "&lt;http://a b&gt;"

    def test_autolinks_disabled(self) -> None:
        markup = Markup(autolinks=False)
        nodes = markup.parse("<http://a.b/_x_>")
        assert not any(isinstance(n, Link) for n in nodes)
        assert any(isinstance(n, Emphasis) for n in nodes)


class TestLinks:
    """[text](destination) inline links."""

    def test_basic_link(self) -> None:
        assert render(parse("[a](http://x)")) == '<a href="http://x">a</a>'

    def test_link_text_is_parsed(self) -> None:
        assert render(parse("[*a*](u)")) == '<a href="u"><strong>a</strong></a>'

    def test_spans_do_not_cross_link_boundary(self) -> None:
        """Markers inside and outside link text never pair."""
        assert render(parse("*[a*](u)")) == '*<a href="u">a*</a>'
        assert render(parse("[*a](u)*")) == '<a href="u">*a</a>*'

    def test_link_inside_emphasis(self) -> None:
        assert render(parse("_see [here](u)_")) == '<em>see <a href="u">here</a></em>'

    def test_link_text_locations_are_absolute(self) -> None:
        link = parse("xx [*a*](u)")[1]
        assert isinstance(link, Link)
        assert link.location.offset == 3
        strong = link.children[0]
        assert isinstance(strong, Strong)
        assert strong.location.offset == 4
        assert strong.location.end_offset == 7

    def test_nested_brackets(self) -> None:
        link = parse("[a [b] c](u)")[0]
        assert isinstance(link, Link)
        assert link.children[0].content == "a [b] c"

    def test_links_do_not_nest(self) -> None:
        """The inner link wins; the outer brackets stay literal."""
        assert render(parse("[a [b](c) d](e)")) == '[a <a href="c">b</a> d](e)'

    def test_autolink_in_link_text(self) -> None:
        html = render(parse("[<http://x>](u)"))
        assert html == '[<a href="http://x">http://x</a>](u)'

    def test_bracket_inside_code_span(self) -> None:
        assert render(parse("[`a]`](u)")) == '<a href="u"><code>a]</code></a>'

    def test_unmatched_opener_before_link(self) -> None:
        assert render(parse("[[a](b)")) == '[<a href="b">a</a>'

    def test_consecutive_links(self) -> None:
        nodes = parse("[a](b) [c](d)")
        assert [type(n) for n in nodes] == [Link, Text, Link]

    def test_parentheses_in_destination(self) -> None:
        link = parse("[a](http://x/(y))")[0]
        assert isinstance(link, Link)
        assert link.url == "http://x/(y)"

    def test_missing_destination_is_text(self) -> None:
        assert render(parse("[a] *b*")) == "[a] <strong>b</strong>"

    def test_unbalanced_destination_is_text(self) -> None:
        assert render(parse("[a](u")) == "[a](u"

    def test_url_is_escaped(self) -> None:
        assert render(parse('[a](x"y)')) == '<a href="x%22y">a</a>'

    def test_links_disabled(self) -> None:
        markup = Markup(links=False)
        assert markup("[*a*](u)") == "[<strong>a</strong>](u)"

    @pytest.mark.parametrize(
        ("source", "expected_types"),
        [
            ("[a](u) _b_", [Link, Text, Emphasis]),
            ("`a` *b*", [CodeSpan, Text, Strong]),
            ("<http://a> [b](c)", [Link, Text, Link]),
        ],
    )
    def test_mixed_inline_sequence(self, source: str, expected_types: list[type]) -> None:
        assert [type(n) for n in parse(source)] == expected_types


class TestHostMethods:
    """Mixins rely on InlineParser for location and token resolution."""

    @pytest.mark.parametrize("mixin", [OpaqueSpanMixin, InlineBuilderMixin])
    def test_location_requires_host(self, mixin: type) -> None:
        with pytest.raises(NotImplementedError):
            mixin()._location(0, 1)

    def test_resolve_tokens_requires_host(self) -> None:
        with pytest.raises(NotImplementedError):
            OpaqueSpanMixin()._resolve_tokens([])

    def test_inline_parser_provides_both(self) -> None:
        parser = InlineParser("ab")
        assert parser._location(0, 2).end_offset == 2
        assert parser._resolve_tokens([]) == ()
