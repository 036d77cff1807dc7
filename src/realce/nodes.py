"""Typed inline nodes for realce.

All nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Text
├── Emphasis      _text_
├── Strong        *text*
├── CodeSpan      `code`      (opaque)
└── Link          [text](url) or <url>  (opaque)

Emphasis and Strong are the only nodes the emphasis resolver creates.
CodeSpan and Link are produced by the opaque-span tokenizer before any
marker is examined, so markers inside them never take part in matching.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from realce.location import SourceLocation


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    All nodes track their source location for debugging and tooling.

    """

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    Unmatched markers end up here as well, spelled as in the source
    (``*``, ``{_``, ``_}``).

    """

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized text.

    Markup: _text_ or {_text_}
    HTML: <em>text</em>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strongly emphasized text.

    Markup: *text* or {*text*}
    HTML: <strong>text</strong>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Verbatim inline code.

    Markup: `code`
    HTML: <code>code</code>

    """

    code: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markup: [text](url), <https://example.com> or <user@example.com>
    HTML: <a href="url">text</a>

    """

    url: str
    children: tuple[Inline, ...]
    autolink: bool = False


type Inline = Text | Emphasis | Strong | CodeSpan | Link

# Nodes that own a child sequence
type Container = Emphasis | Strong | Link


__all__ = [
    "Node",
    "Text",
    "Emphasis",
    "Strong",
    "CodeSpan",
    "Link",
    "Inline",
    "Container",
]
