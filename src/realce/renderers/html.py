"""HTML renderer using StringBuilder pattern.

Renders inline node trees to HTML with O(n) performance:
- Strong   -> <strong>...</strong>
- Emphasis -> <em>...</em>
- CodeSpan -> <code>...</code>
- Link     -> <a href="...">...</a>

The walk uses an explicit work stack, so deeply nested spans (long marker
runs) render without hitting the recursion limit.

Thread Safety:
HtmlRenderer holds configuration only. Multiple threads can safely share a
single instance and call render() concurrently.
"""

import html
import logging
from collections.abc import Sequence
from urllib.parse import quote as url_quote

from realce.errors import RenderError
from realce.nodes import CodeSpan, Emphasis, Inline, Link, Strong, Text
from realce.stringbuilder import StringBuilder

logger = logging.getLogger(__name__)


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def _encode_url(url: str) -> str:
    """Percent-encode a URL for an href attribute.

    Already-encoded sequences and common URL punctuation are preserved.
    The result still needs html_escape for quotes and ampersands.
    """
    return url_quote(url, safe="/:?#[]@!$&'()*+,;=-_.~%")


class HtmlRenderer:
    """Render inline nodes to HTML.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render(parse("*bold* and _em_"))
        '<strong>bold</strong> and <em>em</em>'

    Args:
        strict: Raise RenderError for node types the renderer does not know.
            When False such nodes are skipped and logged.

    """

    __slots__ = ("_strict",)

    def __init__(self, *, strict: bool = True) -> None:
        self._strict = strict

    def render(self, nodes: Sequence[Inline]) -> str:
        """Render a sequence of inline nodes.

        Args:
            nodes: Inline nodes as returned by ``parse``.

        Returns:
            HTML string (no trailing newline, no block wrapper).

        Raises:
            RenderError: If ``strict`` and an unknown node type is met.
        """
        sb = StringBuilder()
        # Items are nodes still to render or literal closing tags
        stack: list[Inline | str] = list(reversed(nodes))

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                sb.append(item)
                continue

            match item:
                case Text(content=content):
                    sb.append(html_escape(content))
                case Strong(children=children):
                    sb.append("<strong>")
                    stack.append("</strong>")
                    stack.extend(reversed(children))
                case Emphasis(children=children):
                    sb.append("<em>")
                    stack.append("</em>")
                    stack.extend(reversed(children))
                case CodeSpan(code=code):
                    sb.append("<code>").append(html_escape(code)).append("</code>")
                case Link(url=url, children=children):
                    sb.append(f'<a href="{html_escape(_encode_url(url))}">')
                    stack.append("</a>")
                    stack.extend(reversed(children))
                case _:
                    if self._strict:
                        raise RenderError(f"Cannot render node type {type(item).__name__}")
                    logger.debug("Skipping unknown node type %s", type(item).__name__)

        return sb.build()
