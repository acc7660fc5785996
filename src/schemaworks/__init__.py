"""schemaworks - Node-based schema definition and data validation."""

from schemaworks.core import ErrorEntry, ValidationReport, ValidationResult
from schemaworks.exceptions import (
    DataValidationError,
    SchemaDefinitionError,
    SchemaworksError,
)
from schemaworks.nodes import (
    AllOfNode,
    AnyOfNode,
    ArrayNode,
    BooleanNode,
    CombinationNode,
    IntegerNode,
    NodeBuilder,
    NodeRegistry,
    NumberNode,
    ObjectNode,
    OneOfNode,
    SchemaNode,
    StringNode,
    create,
    default_registry,
)

__all__ = [
    "AllOfNode",
    "AnyOfNode",
    "ArrayNode",
    "BooleanNode",
    "CombinationNode",
    "DataValidationError",
    "ErrorEntry",
    "IntegerNode",
    "NodeBuilder",
    "NodeRegistry",
    "NumberNode",
    "ObjectNode",
    "OneOfNode",
    "SchemaDefinitionError",
    "SchemaNode",
    "SchemaworksError",
    "StringNode",
    "ValidationReport",
    "ValidationResult",
    "create",
    "default_registry",
]
