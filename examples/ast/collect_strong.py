"""Typed nodes: list every strong span with its source location."""

from realce import parse
from realce.nodes import Strong
from realce.visitor import BaseVisitor


def _plain_text(node) -> str:
    """Recursively extract text from inline nodes."""
    if hasattr(node, "content"):
        return node.content
    if hasattr(node, "children"):
        return "".join(_plain_text(c) for c in node.children)
    return ""


class StrongCollector(BaseVisitor[None]):
    """Collect the text and location of strong spans."""

    def __init__(self) -> None:
        self.spans: list[tuple[str, str]] = []

    def visit_strong(self, node: Strong) -> None:
        self.spans.append((str(node.location), _plain_text(node)))


source = """Release *notes* for _v2_:
the *{* parser *}* now handles
*nested _spans_ well* and a* stray marker."""

collector = StrongCollector()
collector.visit_all(parse(source, source_file="NOTES.txt"))

for location, text in collector.spans:
    print(f"{location:16} {text!r}")
