"""
Leaf Nodes - Scalar and container validators.

These nodes only restrict the runtime shape of a value; everything else
comes from the shared pipeline in ``SchemaNode``. Containers recurse into
their children and return a copy of the data with child defaults applied.
"""

from decimal import Decimal
from typing import Any

from schemaworks.core.result import ValidationResult
from schemaworks.exceptions import SchemaDefinitionError
from schemaworks.nodes.base import SchemaNode, node_sequence


class BooleanNode(SchemaNode):
    """Accepts True and False only."""

    @property
    def node_type(self) -> str:
        return "boolean"

    def allowed_types(self) -> dict[type, str]:
        return {bool: "boolean"}


class StringNode(SchemaNode):
    @property
    def node_type(self) -> str:
        return "string"

    def allowed_types(self) -> dict[type, str]:
        return {str: "string"}


class IntegerNode(SchemaNode):
    @property
    def node_type(self) -> str:
        return "integer"

    def allowed_types(self) -> dict[type, str]:
        return {int: "integer"}


class NumberNode(SchemaNode):
    """Accepts ints, floats and decimals (never booleans)."""

    @property
    def node_type(self) -> str:
        return "number"

    def allowed_types(self) -> dict[type, str]:
        return {int: "number", float: "number", Decimal: "number"}


class ObjectNode(SchemaNode):
    """
    Validates a mapping property by property.

    Options:
        properties: Named child nodes, one per expected key
        additional_properties: Allow keys without a property node
    """

    @property
    def node_type(self) -> str:
        return "object"

    @classmethod
    def allowed_options(cls) -> tuple[str, ...]:
        return super().allowed_options() + ("properties", "additional_properties")

    def allowed_types(self) -> dict[type, str]:
        return {dict: "object"}

    def init(self) -> None:
        self.additional_properties = bool(self.options.pop("additional_properties", False))
        self.properties: dict[str, SchemaNode] = {}
        for node in node_sequence(self.options.pop("properties", None), "properties"):
            self.attach(node)
            if not node.name:
                raise SchemaDefinitionError("Object properties must be named.")
            if node.name in self.properties:
                raise SchemaDefinitionError(f'Duplicate property "{node.name}".')
            self.properties[node.name] = node

    @property
    def children(self) -> tuple[SchemaNode, ...]:
        return tuple(self.properties.values())

    def _validate(self, data: Any, result: ValidationResult) -> Any:
        super_data = super()._validate(data, result)
        if super_data is None:
            return None

        if not self.additional_properties:
            for key in super_data:
                if key not in self.properties:
                    result.error(f'Obsolete property "{key}".')

        casted = dict(super_data)
        for name, node in self.properties.items():
            with result.in_path(name):
                value = node._validate(super_data.get(name), result)
            if value is not None:
                casted[name] = value
        return casted


class ArrayNode(SchemaNode):
    """
    Validates a list (or tuple), element by element.

    Options:
        items: Node every element must satisfy
    """

    @property
    def node_type(self) -> str:
        return "array"

    @classmethod
    def allowed_options(cls) -> tuple[str, ...]:
        return super().allowed_options() + ("items",)

    def allowed_types(self) -> dict[type, str]:
        return {list: "array", tuple: "array"}

    def init(self) -> None:
        items = self.options.pop("items", None)
        self.items = self.attach(items) if items is not None else None

    @property
    def children(self) -> tuple[SchemaNode, ...]:
        return (self.items,) if self.items is not None else ()

    def _validate(self, data: Any, result: ValidationResult) -> Any:
        super_data = super()._validate(data, result)
        if super_data is None:
            return None
        if self.items is None:
            return list(super_data)

        casted = []
        for index, element in enumerate(super_data):
            element_result = ValidationResult()
            value = self.items._validate(element, element_result)
            result.merge(element_result, index)
            casted.append(value)
        return casted
