"""Tests for the combination nodes."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from schemaworks import (
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    BooleanNode,
    IntegerNode,
    NumberNode,
    ObjectNode,
    OneOfNode,
    SchemaDefinitionError,
    StringNode,
)
from schemaworks.config import Settings


def messages(node, data) -> list[tuple[str, str]]:
    return [(e.path, e.message) for e in node.validate(data).errors]


class TestCombinationConstruction:
    """Test construction rules shared by all combinators."""

    @pytest.mark.parametrize(
        ("node_class", "label"),
        [(AnyOfNode, "anyOf"), (OneOfNode, "oneOf"), (AllOfNode, "allOf")],
    )
    def test_zero_items_fails_construction(self, node_class, label) -> None:
        """An empty combinator cannot be built."""
        with pytest.raises(
            SchemaDefinitionError,
            match=f'Node "{label}" makes only sense with at least 1 item.',
        ):
            node_class()

        with pytest.raises(SchemaDefinitionError):
            node_class(items=[])

    def test_items_are_children_with_parent(self) -> None:
        string, integer = StringNode(), IntegerNode()
        node = AnyOfNode(items=[string, integer])

        assert node.children == (string, integer)
        assert string.parent is node
        assert integer.parent is node

    def test_items_are_immutable(self) -> None:
        node = AnyOfNode(items=[StringNode()])

        assert isinstance(node.items, tuple)

    def test_non_node_item_fails_construction(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="Expected a schema node"):
            AnyOfNode(items=["string"])

    @pytest.mark.parametrize("items", [5, "string", {"a": StringNode()}])
    def test_malformed_items_fail_construction(self, items) -> None:
        """Items that are not nodes or lists of nodes are a definition error."""
        with pytest.raises(SchemaDefinitionError, match='Option "items"'):
            AnyOfNode(items=items)

    def test_single_item_is_accepted(self) -> None:
        string = StringNode()

        assert AnyOfNode(items=string).items == (string,)

    def test_parent_link_does_not_own_parent(self) -> None:
        """Children keep no strong reference to their parent."""
        child = StringNode()
        AnyOfNode(items=[child])

        assert child.parent is None


class TestAnyOfNode:
    """Test first-match-wins semantics."""

    @pytest.fixture
    def node(self) -> AnyOfNode:
        return AnyOfNode(items=[StringNode(), IntegerNode()])

    def test_matches_first_item(self, node: AnyOfNode) -> None:
        assert node.valid("x")

    def test_matches_second_item_without_leaked_errors(self, node: AnyOfNode) -> None:
        """Errors from the rejected first item never reach the result."""
        result = node.validate(5)

        assert result.valid
        assert result.errors == []
        assert result.data == 5

    def test_no_match_single_error(self, node: AnyOfNode) -> None:
        """Only the aggregate failure is reported, never item errors."""
        assert messages(node, True) == [("/", "Does not match any anyOf condition.")]

    def test_first_match_wins(self) -> None:
        """When both items match, the first item's effects are applied."""
        node = AnyOfNode(
            items=[
                ObjectNode(properties=[IntegerNode(name="a", default=1)]),
                ObjectNode(properties=[IntegerNode(name="a", default=2)]),
            ]
        )

        assert node.validate_or_fail({}) == {"a": 1}

    def test_order_is_caller_controlled(self) -> None:
        node = AnyOfNode(
            items=[
                ObjectNode(properties=[IntegerNode(name="a", default=2)]),
                ObjectNode(properties=[IntegerNode(name="a", default=1)]),
            ]
        )

        assert node.validate_or_fail({}) == {"a": 2}

    def test_default_feeds_matching(self) -> None:
        node = AnyOfNode(items=[StringNode(), IntegerNode()], default=7)

        assert node.validate_or_fail(None) == 7

    def test_nested_path(self) -> None:
        """The aggregate error is reported at the combinator's own path."""
        node = ObjectNode(
            properties=[AnyOfNode(name="id", items=[StringNode(), IntegerNode()])]
        )

        assert messages(node, {"id": 1.5}) == [("/id", "Does not match any anyOf condition.")]

    def test_inside_array(self) -> None:
        node = ArrayNode(items=AnyOfNode(items=[StringNode(), IntegerNode()]))

        assert messages(node, ["a", 1, None, 2.5]) == [
            ("/3", "Does not match any anyOf condition.")
        ]

    def test_nested_combinators(self) -> None:
        node = AnyOfNode(
            items=[
                AllOfNode(items=[IntegerNode(), NumberNode(enum=[1, 2])]),
                StringNode(),
            ]
        )

        assert node.valid(2)
        assert node.valid("x")
        assert messages(node, 3) == [("/", "Does not match any anyOf condition.")]

    def test_probe_failures_are_logged_when_enabled(self, node, monkeypatch, caplog) -> None:
        """Discarded item errors are logged at DEBUG on request."""
        monkeypatch.setattr(
            "schemaworks.nodes.combination.get_settings",
            lambda: Settings(log_probe_failures=True),
        )

        with caplog.at_level(logging.DEBUG, logger="schemaworks.nodes.combination"):
            result = node.validate(5)

        assert result.valid
        assert any("rejected" in record.getMessage() for record in caplog.records)


    def test_no_debug_formatting_when_disabled(self, caplog) -> None:
        """Matched items are not rendered for logging unless DEBUG is on."""

        class LoudString(StringNode):
            def __repr__(self) -> str:
                raise AssertionError("rendered while DEBUG is off")

        node = OneOfNode(items=[AnyOfNode(items=[IntegerNode(), LoudString()]), BooleanNode()])
        caplog.set_level(logging.WARNING, logger="schemaworks.nodes.combination")

        assert node.valid("x")
        assert messages(OneOfNode(items=[LoudString(), StringNode()]), "x") == [
            ("/", "Matches more than one oneOf condition.")
        ]


class TestOneOfNode:
    """Test exactly-one semantics."""

    def test_single_match(self) -> None:
        node = OneOfNode(items=[StringNode(), IntegerNode()])

        result = node.validate(3)

        assert result.valid
        assert result.data == 3

    def test_no_match(self) -> None:
        node = OneOfNode(items=[StringNode(), IntegerNode()])

        assert messages(node, False) == [("/", "Does not match any oneOf condition.")]

    def test_ambiguous_match(self) -> None:
        """Satisfying more than one item is itself an error."""
        node = OneOfNode(items=[IntegerNode(), NumberNode()])

        assert messages(node, 3) == [("/", "Matches more than one oneOf condition.")]

    def test_ambiguity_resolved_by_enum(self) -> None:
        node = OneOfNode(items=[IntegerNode(enum=[1]), NumberNode()])

        assert node.valid(2)
        assert node.invalid(1)

    def test_winner_is_applied(self) -> None:
        """The single matching item is validated through the real result."""
        node = OneOfNode(
            items=[
                ObjectNode(properties=[StringNode(name="kind", enum=["a"]), IntegerNode(name="n", default=0)]),
                ObjectNode(properties=[StringNode(name="kind", enum=["b"])]),
            ]
        )

        assert node.validate_or_fail({"kind": "a"}) == {"kind": "a", "n": 0}

    def test_required(self) -> None:
        node = OneOfNode(items=[StringNode()], required=True)

        assert messages(node, None) == [("/", "Value must be given.")]


class TestAllOfNode:
    """Test every-item semantics."""

    def test_all_match(self) -> None:
        node = AllOfNode(items=[NumberNode(), IntegerNode(enum=[1, 2, 3])])

        result = node.validate(2)

        assert result.valid
        assert result.data == 2

    def test_errors_from_every_item(self) -> None:
        """Each failing item contributes its own error."""
        node = AllOfNode(items=[StringNode(), BooleanNode()])

        assert messages(node, 1) == [
            ("/", 'Invalid type, expected "string".'),
            ("/", 'Invalid type, expected "boolean".'),
        ]

    def test_item_sub_paths(self) -> None:
        node = AllOfNode(
            items=[
                ObjectNode(properties=[StringNode(name="a")], additional_properties=True),
                ObjectNode(properties=[IntegerNode(name="b")], additional_properties=True),
            ]
        )

        assert messages(node, {"a": 1, "b": "x"}) == [
            ("/a", 'Invalid type, expected "string".'),
            ("/b", 'Invalid type, expected "integer".'),
        ]

    def test_optional_none(self) -> None:
        node = AllOfNode(items=[StringNode(required=True)])

        assert node.valid(None)


class TestConcurrentValidation:
    """A built tree can be validated from many threads at once."""

    def test_parallel_validate(self) -> None:
        node = ObjectNode(
            properties=[
                AnyOfNode(name="id", items=[StringNode(), IntegerNode()], required=True),
                OneOfNode(name="flag", items=[BooleanNode(), StringNode(enum=["yes", "no"])]),
            ]
        )
        inputs = [{"id": i, "flag": True} if i % 2 else {"id": 1.5, "flag": "maybe"} for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            reports = list(pool.map(lambda data: node.validate(data).to_report(), inputs))

        for i, report in enumerate(reports):
            if i % 2:
                assert report.valid
            else:
                assert [(e.path, e.message) for e in report.errors] == [
                    ("/id", "Does not match any anyOf condition."),
                    ("/flag", "Does not match any oneOf condition."),
                ]
