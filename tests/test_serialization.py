"""Tests for node serialization to dicts and JSON."""

import json

import pytest

from realce import parse, render
from realce.errors import SerializationError
from realce.location import SourceLocation
from realce.nodes import Link, Strong, Text
from realce.serialization import from_dict, from_json, to_dict, to_json


class TestToDict:
    """Node to dict conversion."""

    def test_text(self) -> None:
        node = Text(location=SourceLocation(1, 1, 0, 3), content="abc")
        assert to_dict(node) == {
            "_type": "Text",
            "content": "abc",
            "location": {
                "_type": "SourceLocation",
                "lineno": 1,
                "col_offset": 1,
                "offset": 0,
                "end_offset": 3,
                "source_file": None,
            },
        }

    def test_children_become_lists(self) -> None:
        data = to_dict(parse("*a*")[0])
        assert data["_type"] == "Strong"
        assert isinstance(data["children"], list)
        assert data["children"][0]["content"] == "a"

    def test_link_fields(self) -> None:
        data = to_dict(parse("<http://x.y>")[0])
        assert data["url"] == "http://x.y"
        assert data["autolink"] is True


class TestFromDict:
    """Dict to node reconstruction."""

    def test_round_trip_tree(self) -> None:
        nodes = parse("_({_foo_})_ `c` [*l*](u)", source_file="doc.txt")
        assert tuple(from_dict(to_dict(n)) for n in nodes) == nodes

    def test_missing_type(self) -> None:
        with pytest.raises(SerializationError, match="_type"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(SerializationError, match="Paragraph"):
            from_dict({"_type": "Paragraph"})

    def test_missing_optional_field_uses_default(self) -> None:
        data = to_dict(parse("[a](u)")[0])
        del data["autolink"]
        node = from_dict(data)
        assert isinstance(node, Link)
        assert node.autolink is False


class TestJson:
    """JSON array serialization."""

    def test_round_trip(self) -> None:
        nodes = parse("_foo *bar_ baz*\nline *two*")
        assert from_json(to_json(nodes)) == nodes

    def test_output_is_deterministic(self) -> None:
        nodes = parse("*a* _b_")
        assert to_json(nodes) == to_json(parse("*a* _b_"))
        keys = list(json.loads(to_json(nodes))[0])
        assert keys == sorted(keys)

    def test_indent(self) -> None:
        assert "\n" in to_json(parse("a"), indent=2)
        assert "\n" not in to_json(parse("a"))

    def test_empty(self) -> None:
        assert to_json(()) == "[]"
        assert from_json("[]") == ()

    def test_non_array_rejected(self) -> None:
        with pytest.raises(SerializationError, match="array"):
            from_json('{"_type": "Text"}')

    def test_nested_strong_survives(self) -> None:
        nodes = parse("***x***")
        restored = from_json(to_json(nodes))
        assert isinstance(restored[0], Strong)
        assert isinstance(restored[0].children[0], Strong)

    def test_records_are_flat(self) -> None:
        records = json.loads(to_json(parse("*a _b_*")))
        assert [r["_type"] for r in records] == ["Strong", "Text", "Emphasis", "Text"]
        assert records[0]["children"] == 2
        assert records[2]["children"] == 1
        assert "children" not in records[1]

    def test_sibling_roots_after_container(self) -> None:
        nodes = parse("*a* b")
        restored = from_json(to_json(nodes))
        assert [type(n) for n in restored] == [Strong, Text]
        assert restored == nodes

    def test_truncated_children_rejected(self) -> None:
        data = to_json(parse("*a*"))
        with pytest.raises(SerializationError, match="children"):
            from_json(json.dumps(json.loads(data)[:1]))

    def test_invalid_child_count_rejected(self) -> None:
        records = json.loads(to_json(parse("*a*")))
        records[0]["children"] = "one"
        with pytest.raises(SerializationError, match="child count"):
            from_json(json.dumps(records))


class TestDeepTrees:
    """Serialization depth is not bounded by the interpreter stack."""

    DEPTH = 3000

    def _deep(self) -> tuple:
        return parse("_" * self.DEPTH + "a" + "_" * self.DEPTH)

    def test_to_dict_nests_every_level(self) -> None:
        data = to_dict(self._deep()[0])
        depth = 0
        while data["_type"] == "Emphasis":
            (data,) = data["children"]
            depth += 1
        assert depth == self.DEPTH
        assert data["content"] == "a"

    def test_dict_round_trip(self) -> None:
        nodes = self._deep()
        restored = from_dict(to_dict(nodes[0]))
        assert render((restored,)) == render(nodes)  # type: ignore[arg-type]

    def test_json_round_trip(self) -> None:
        nodes = self._deep()
        data = to_json(nodes)
        restored = from_json(data)
        assert to_json(restored) == data
        assert render(restored) == "<em>" * self.DEPTH + "a" + "</em>" * self.DEPTH
