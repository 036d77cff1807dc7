"""
realce: inline emphasis resolution for lightweight markup.

Decides which ``*`` and ``_`` markers in a run of inline text pair up into
spans and which stay literal punctuation. ``*`` pairs become Strong nodes,
``_`` pairs become Emphasis nodes, and ``{_``/``_}`` decorations force a
marker to open or close where whitespace flanking alone would not allow it.

Quick Start:
    >>> from realce import parse, render
    >>> nodes = parse("_foo *bar_ baz*")
    >>> render(nodes)
    '<em>foo *bar</em> baz*'

    >>> # Or use the high-level Markup class
    >>> from realce import Markup
    >>> markup = Markup(links=False)
    >>> markup("*****a*****")
    '<strong><strong><strong><strong><strong>a</strong></strong></strong></strong></strong>'

Installation:
    pip install realce            # Core (zero deps)
    pip install realce[test]      # + pytest, hypothesis
"""

from collections.abc import Callable, Iterable, Sequence

from realce.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from realce.errors import (
    InternalConsistencyError,
    RealceError,
    RenderError,
    SerializationError,
)
from realce.location import SourceLocation
from realce.nodes import CodeSpan, Emphasis, Inline, Link, Node, Strong, Text
from realce.parser import InlineParser
from realce.profiling import ParseAccumulator, get_parse_accumulator, profiled_parse
from realce.renderers.html import HtmlRenderer
from realce.renderers.protocol import ASTRenderer
from realce.serialization import from_dict, from_json, to_dict, to_json
from realce.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> tuple[Inline, ...]:
    """Parse inline source into a typed node tree.

    Uses the configuration active in the current context (see
    ``parse_config_context``).

    Args:
        source: Inline source text (one paragraph, heading, ...)
        source_file: Optional source file path recorded in node locations

    Returns:
        Tuple of top-level Inline nodes

    Example:
        >>> parse("foo*bar*baz")
        (Text(content='foo', ...), Strong(children=(Text(content='bar', ...),), ...), ...)
    """
    return InlineParser(source, source_file=source_file).parse()


def render(nodes: Sequence[Inline]) -> str:
    """Render inline nodes to HTML.

    Args:
        nodes: Nodes as returned by ``parse``

    Returns:
        HTML string

    Example:
        >>> render(parse("*foo bar*"))
        '<strong>foo bar</strong>'
    """
    return HtmlRenderer().render(nodes)


class Markup:
    """High-level processor combining parser and renderer.

    Usage:
        >>> markup = Markup()
        >>> markup("_({_foo_})_")
        '<em>(<em>foo</em>)</em>'

        >>> # Access the node tree
        >>> nodes = markup.parse("*a*")
        >>> type(nodes[0]).__name__
        'Strong'

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to share one
        Markup instance across threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        code_spans: bool = True,
        autolinks: bool = True,
        links: bool = True,
        explicit_markers: bool = True,
        text_transformer: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            code_spans: Recognise `code` spans
            autolinks: Recognise <url> and <email> autolinks
            links: Recognise [text](url) links
            explicit_markers: Honour {_ and _} decorations
            text_transformer: Optional callback applied to every Text node
        """
        self._config = ParseConfig(
            code_spans_enabled=code_spans,
            autolinks_enabled=autolinks,
            links_enabled=links,
            explicit_markers_enabled=explicit_markers,
            text_transformer=text_transformer,
        )
        self._renderer = HtmlRenderer()

    @property
    def config(self) -> ParseConfig:
        """The immutable configuration used for every parse."""
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call.

        Args:
            source: Inline source text

        Returns:
            HTML string

        """
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> tuple[Inline, ...]:
        """Parse inline source into nodes using this instance's config.

        Args:
            source: Inline source text
            source_file: Optional source file path recorded in node locations

        Returns:
            Tuple of top-level Inline nodes

        """
        with parse_config_context(self._config):
            return InlineParser(source, source_file=source_file).parse()

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[tuple[Inline, ...]]:
        """Parse several independent inline contents.

        Sets config once, parses all, restores once. Each source is its own
        parse: markers never pair across sources.

        Args:
            sources: Iterable of inline source strings
            source_file: Optional source file path (applies to all)

        Returns:
            List of node tuples, one per source

        Example:
            >>> markup = Markup()
            >>> [len(n) for n in markup.parse_many(["*a*", "*a", "a*"])]
            [1, 1, 1]
        """
        with parse_config_context(self._config):
            return [InlineParser(source, source_file=source_file).parse() for source in sources]

    def render(self, nodes: Sequence[Inline]) -> str:
        """Render nodes to HTML."""
        return self._renderer.render(nodes)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "Markup",
    "InlineParser",
    # Nodes
    "Node",
    "Inline",
    "Text",
    "Emphasis",
    "Strong",
    "CodeSpan",
    "Link",
    "SourceLocation",
    # Renderer
    "HtmlRenderer",
    "ASTRenderer",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Profiling
    "ParseAccumulator",
    "profiled_parse",
    "get_parse_accumulator",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "RealceError",
    "InternalConsistencyError",
    "RenderError",
    "SerializationError",
]
