"""
Node Registry - Construction boundary of the engine.

The registry maps type tags ("string", "any_of", ...) to node classes and
builds nodes from a tag plus an option bag. ``NodeBuilder`` collects
children one by one and produces the finished, read-only node exactly once.
"""

from typing import Any

from schemaworks.exceptions import SchemaDefinitionError
from schemaworks.nodes.base import SchemaNode, node_sequence
from schemaworks.nodes.combination import AllOfNode, AnyOfNode, CombinationNode, OneOfNode
from schemaworks.nodes.leaves import (
    ArrayNode,
    BooleanNode,
    IntegerNode,
    NumberNode,
    ObjectNode,
    StringNode,
)


class NodeRegistry:
    """
    Central registry of node classes.

    Manages tag registration and provides a unified
    interface for node construction.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, type[SchemaNode]] = {}

    def register(self, tag: str, node_class: type[SchemaNode]) -> None:
        """
        Register a node class.

        Args:
            tag: Type tag used at the construction boundary
            node_class: Concrete SchemaNode subclass
        """
        self._nodes[tag] = node_class

    def unregister(self, tag: str) -> bool:
        """
        Unregister a node class by tag.

        Args:
            tag: Type tag

        Returns:
            True if removed, False if not found
        """
        return self._nodes.pop(tag, None) is not None

    def get(self, tag: str) -> type[SchemaNode] | None:
        """Get a node class by tag."""
        return self._nodes.get(tag)

    def list_types(self) -> list[str]:
        """Get list of registered type tags."""
        return list(self._nodes.keys())

    def create(self, tag: str, **options: Any) -> SchemaNode:
        """
        Build a node from a type tag and its options.

        Raises:
            SchemaDefinitionError: Unknown tag or invalid options
        """
        node_class = self.get(tag)
        if node_class is None:
            raise SchemaDefinitionError(f'Could not find node for type "{tag}".')
        return node_class(**options)


def _build_default_registry() -> NodeRegistry:
    registry = NodeRegistry()
    registry.register("boolean", BooleanNode)
    registry.register("string", StringNode)
    registry.register("integer", IntegerNode)
    registry.register("number", NumberNode)
    registry.register("object", ObjectNode)
    registry.register("array", ArrayNode)
    registry.register("any_of", AnyOfNode)
    registry.register("one_of", OneOfNode)
    registry.register("all_of", AllOfNode)
    return registry


default_registry = _build_default_registry()


def create(tag: str, **options: Any) -> SchemaNode:
    """Build a node with the default registry."""
    return default_registry.create(tag, **options)


class NodeBuilder:
    """
    Collect children for a node, then build it once.

    Children become ``items`` for combination nodes and named
    ``properties`` for object nodes.

    Example:
        builder = NodeBuilder("any_of", required=True)
        builder.add(create("string"))
        builder.add(create("integer"))
        node = builder.build()
    """

    def __init__(
        self,
        tag: str,
        registry: NodeRegistry | None = None,
        **options: Any,
    ) -> None:
        self._registry = registry or default_registry
        self._node_class = self._registry.get(tag)
        if self._node_class is None:
            raise SchemaDefinitionError(f'Could not find node for type "{tag}".')
        self._tag = tag
        self._options = options
        self._children: list[SchemaNode] = []
        self._built = False

    def add(self, node: SchemaNode) -> "NodeBuilder":
        """Append a child; returns the builder for chaining."""
        if self._built:
            raise SchemaDefinitionError(f'Node "{self._tag}" is already built.')
        if not issubclass(self._node_class, (CombinationNode, ObjectNode)):
            raise SchemaDefinitionError(f'Node "{self._tag}" does not support children.')
        self._children.append(node)
        return self

    def build(self) -> SchemaNode:
        """Instantiate the node; runs the node's construction checks."""
        if self._built:
            raise SchemaDefinitionError(f'Node "{self._tag}" is already built.')
        options = dict(self._options)
        if issubclass(self._node_class, CombinationNode):
            options["items"] = [*node_sequence(options.get("items"), "items"), *self._children]
        elif issubclass(self._node_class, ObjectNode):
            options["properties"] = [
                *node_sequence(options.get("properties"), "properties"),
                *self._children,
            ]

        node = self._node_class(**options)
        self._built = True
        return node
