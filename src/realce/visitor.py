"""Node visitor and transformer for realce.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen inline trees.

Example: collect the text of every strong span:

    class StrongCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.spans: list[Strong] = []

        def visit_strong(self, node: Strong) -> None:
            self.spans.append(node)

    collector = StrongCollector()
    collector.visit_all(parse("*a* _b_ *c*"))

Example: turn every strong span into emphasis:

    def soften(node: Node) -> Node:
        if isinstance(node, Strong):
            return Emphasis(location=node.location, children=node.children)
        return node

    new_nodes = transform(nodes, soften)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. The
    transform function is pure and safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable, Iterable, Iterator

from realce.nodes import CodeSpan, Emphasis, Inline, Link, Node, Strong, Text


class BaseVisitor[T]:
    """Base visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children.

        Descendants are dispatched in document order from an explicit stack,
        so nesting depth is unbounded. Returns the result for ``node`` itself.
        """
        result = self._dispatch(node)
        stack = list(reversed(_children(node)))
        while stack:
            current = stack.pop()
            self._dispatch(current)
            stack.extend(reversed(_children(current)))
        return result

    def visit_all(self, nodes: Iterable[Node]) -> None:
        """Visit every node of a top-level sequence."""
        for node in nodes:
            self.visit(node)

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_code_span(self, node: CodeSpan) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Text():
                return self.visit_text(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strong():
                return self.visit_strong(node)
            case CodeSpan():
                return self.visit_code_span(node)
            case Link():
                return self.visit_link(node)
            case _:
                return self.visit_default(node)


def _children(node: Node) -> tuple[Inline, ...]:
    match node:
        case Emphasis(children=children) | Strong(children=children) | Link(children=children):
            return children
        case _:
            return ()  # Leaf nodes


def transform(
    nodes: tuple[Inline, ...], fn: Callable[[Node], Node | None]
) -> tuple[Inline, ...]:
    """Apply a function to every node, returning a new tree.

    ``fn`` is called bottom-up: children are transformed first, then the
    parent is transformed with its new children. Return ``None`` from ``fn``
    to remove a node. The original tree is untouched, and containers whose
    children all come back unchanged are passed to ``fn`` as-is.

    Args:
        nodes: Top-level inline nodes.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove it.

    Returns:
        New tuple of top-level nodes.

    """
    top: list[Node] = []
    # Post-order frames: (container, its children iterator, transformed children)
    frames: list[tuple[Node | None, Iterator[Inline], list[Node]]] = [(None, iter(nodes), top)]

    while frames:
        node, pending, results = frames[-1]
        child = next(pending, None)
        if child is not None:
            if _children(child):
                frames.append((child, iter(_children(child)), []))
            elif (result := fn(child)) is not None:
                results.append(result)
            continue

        frames.pop()
        if node is None:
            break
        children = _children(node)
        if len(results) != len(children) or any(
            new is not old for new, old in zip(results, children, strict=False)
        ):
            node = dataclasses.replace(node, children=tuple(results))  # type: ignore[type-var]
        if (result := fn(node)) is not None:
            frames[-1][2].append(result)

    return tuple(top)  # type: ignore[arg-type]
