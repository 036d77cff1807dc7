"""Serialization: JSON round-trip for realce inline nodes.

Converts typed nodes to/from JSON-compatible dicts. Useful for caching
parsed titles and snippets, fixtures, and debugging.

All output is deterministic (sorted keys) for cache-key stability.

Two shapes are produced:

- ``to_dict`` nests children as lists of dicts, for use from Python.
- ``to_json`` writes a flat JSON array of node records in document
  (pre-order) order. A container record stores its child count in
  ``children``; its children are the records that follow it. Nesting
  depth therefore never reaches the JSON encoder or decoder.

Every walk uses an explicit stack, so arbitrarily deep trees serialize.

Example:
    from realce import parse
    from realce.serialization import to_json, from_json

    nodes = parse("_foo *bar_ baz*")
    restored = from_json(to_json(nodes))
    assert nodes == restored

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from realce.errors import SerializationError
from realce.location import SourceLocation
from realce.nodes import CodeSpan, Emphasis, Inline, Link, Node, Strong, Text

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "Text": Text,
    "Emphasis": Emphasis,
    "Strong": Strong,
    "CodeSpan": CodeSpan,
    "Link": Link,
}


def _location_to_dict(location: SourceLocation) -> dict[str, Any]:
    return {
        "_type": "SourceLocation",
        "lineno": location.lineno,
        "col_offset": location.col_offset,
        "offset": location.offset,
        "end_offset": location.end_offset,
        "source_file": location.source_file,
    }


def _location_from_dict(value: dict[str, Any]) -> SourceLocation:
    return SourceLocation(
        lineno=value["lineno"],
        col_offset=value["col_offset"],
        offset=value.get("offset", 0),
        end_offset=value.get("end_offset", 0),
        source_file=value.get("source_file"),
    )


def _shallow_record(node: Node) -> dict[str, Any]:
    """Record of a node's own fields; ``children`` is left to the caller."""
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        if f.name == "children":
            continue
        value = getattr(node, f.name)
        if isinstance(value, SourceLocation):
            value = _location_to_dict(value)
        # Primitives: str, int, bool, None
        result[f.name] = value
    return result


def _node_class(data: Any) -> type[Node]:
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a serialized node, got {type(data).__name__}")
    type_name = data.get("_type")
    if type_name is None:
        raise SerializationError("Missing '_type' field in serialized node")

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        raise SerializationError(f"Unknown node type: {type_name!r}")
    return node_cls


def _build_node(data: dict[str, Any], children: tuple[Inline, ...] | None) -> Node:
    """Construct one node from its record and already-built children."""
    node_cls = _node_class(data)
    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name == "children":
            if children is not None:
                kwargs["children"] = children
            continue
        if f.name not in data:
            continue
        value = data[f.name]
        if isinstance(value, dict) and value.get("_type") == "SourceLocation":
            value = _location_from_dict(value)
        kwargs[f.name] = value
    return node_cls(**kwargs)


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization. Children
    become nested lists of dicts.

    Args:
        node: Any realce node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    root = _shallow_record(node)
    stack: list[tuple[Node, dict[str, Any]]] = [(node, root)]
    while stack:
        current, record = stack.pop()
        children = getattr(current, "children", None)
        if children is None:
            continue
        child_records = [_shallow_record(child) for child in children]
        record["children"] = child_records
        stack.extend(zip(children, child_records, strict=True))
    return root


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        SerializationError: If ``_type`` is missing or unknown.

    """
    # Pre-order listing; built in reverse so children exist before parents
    order: list[dict[str, Any]] = []
    stack: list[Any] = [data]
    while stack:
        current = stack.pop()
        _node_class(current)
        order.append(current)
        children = current.get("children")
        if isinstance(children, list):
            stack.extend(children)

    built: dict[int, Node] = {}
    for current in reversed(order):
        children = current.get("children")
        child_nodes = None
        if isinstance(children, list):
            child_nodes = tuple(built[id(child)] for child in children)
        built[id(current)] = _build_node(current, child_nodes)  # type: ignore[arg-type]
    return built[id(data)]


def to_json(nodes: Sequence[Inline], *, indent: int | None = None) -> str:
    """Serialize a sequence of inline nodes to a flat JSON array.

    Args:
        nodes: Top-level nodes, as returned by ``parse``.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    records: list[dict[str, Any]] = []
    stack: list[Node] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        record = _shallow_record(node)
        children = getattr(node, "children", None)
        if children is not None:
            record["children"] = len(children)
            stack.extend(reversed(children))
        records.append(record)
    return json.dumps(records, sort_keys=True, indent=indent)


def from_json(data: str) -> tuple[Inline, ...]:
    """Deserialize inline nodes from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Tuple of top-level nodes.

    Raises:
        SerializationError: If the JSON is not an array of node records,
            or a child count runs past the end of the array.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        raise SerializationError(f"Expected a JSON array of nodes, got {type(raw).__name__}")

    # Walking backwards, a container's children are the subtrees just built,
    # first child on top
    built: list[Node] = []
    for record in reversed(raw):
        _node_class(record)
        count = record.get("children")
        children = None
        if count is not None:
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                raise SerializationError(f"Invalid child count: {count!r}")
            if count > len(built):
                raise SerializationError(
                    f"{record['_type']} claims {count} children but only {len(built)} follow"
                )
            children = tuple(built.pop() for _ in range(count))
        built.append(_build_node(record, children))  # type: ignore[arg-type]
    built.reverse()
    return tuple(built)  # type: ignore[arg-type]
