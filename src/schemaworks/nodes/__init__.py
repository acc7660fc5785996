"""Schema nodes - Shared pipeline, leaves and combinators."""

from schemaworks.nodes.base import SchemaNode
from schemaworks.nodes.combination import AllOfNode, AnyOfNode, CombinationNode, OneOfNode
from schemaworks.nodes.leaves import (
    ArrayNode,
    BooleanNode,
    IntegerNode,
    NumberNode,
    ObjectNode,
    StringNode,
)
from schemaworks.nodes.registry import NodeBuilder, NodeRegistry, create, default_registry

__all__ = [
    "AllOfNode",
    "AnyOfNode",
    "ArrayNode",
    "BooleanNode",
    "CombinationNode",
    "IntegerNode",
    "NodeBuilder",
    "NodeRegistry",
    "NumberNode",
    "ObjectNode",
    "OneOfNode",
    "SchemaNode",
    "StringNode",
    "create",
    "default_registry",
]
