"""ASTRenderer protocol: stable interface for inline renderers.

Any renderer that implements ``render(nodes) -> str`` conforms to this
protocol. The built-in ``HtmlRenderer`` is the reference implementation; the
parser itself knows nothing about output formats.

Example:
    from realce.renderers.protocol import ASTRenderer

    def render_title(renderer: ASTRenderer, nodes: tuple[Inline, ...]) -> str:
        return renderer.render(nodes)

"""

from collections.abc import Sequence
from typing import Protocol

from realce.nodes import Inline


class ASTRenderer(Protocol):
    """Protocol for inline renderers."""

    def render(self, nodes: Sequence[Inline]) -> str:
        """Render a sequence of inline nodes to a string.

        Args:
            nodes: Inline nodes as returned by ``parse``.

        Returns:
            Rendered string output.

        """
        ...
