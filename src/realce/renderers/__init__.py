"""Renderers for realce inline node trees."""

from realce.renderers.html import HtmlRenderer
from realce.renderers.protocol import ASTRenderer

__all__ = [
    "ASTRenderer",
    "HtmlRenderer",
]
