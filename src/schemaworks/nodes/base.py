"""
Base Schema Node - The contract every schema element implements.

A node is built once from an option bag and is read-only afterwards.
Validation walks the tree through ``_validate``, which every concrete node
extends by calling the shared pipeline first:

1. Required check - None on a required node is an error
2. Default substitution - None becomes the configured default
3. Type check - the value must be one of ``allowed_types()``
4. Enum check - the value must be one of the configured enum values

The pipeline returns the effective data, or None when the node has nothing
left to check (absent value, or an aborting error was recorded).
"""

import json
import logging
import weakref
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from schemaworks.core.models import NodeOptions
from schemaworks.core.result import ValidationResult
from schemaworks.exceptions import DataValidationError, SchemaDefinitionError

logger = logging.getLogger(__name__)


class SchemaNode(ABC):
    """
    Base class for all schema nodes.

    Subclasses declare their runtime shapes through ``allowed_types()``,
    extend ``allowed_options()`` for node-specific options, read those
    options in ``init()`` and enforce structural invariants in
    ``validate_self()``.
    """

    def __init__(self, **options: Any) -> None:
        disallowed = [key for key in options if key not in self.allowed_options()]
        if disallowed:
            logger.warning("Rejected options %s for %s", disallowed, type(self).__name__)
            raise SchemaDefinitionError(
                f"Options {disallowed!r} are not allowed for this node."
            )

        shared = {key: options.pop(key) for key in NodeOptions.model_fields if key in options}
        try:
            parsed = NodeOptions.model_validate(shared)
        except ValidationError as e:
            raise SchemaDefinitionError(f"Invalid options for {self.node_type}: {e}") from e

        self.name = parsed.name
        self.required = parsed.required
        self.default = parsed.default
        self.description = parsed.description
        self.example = parsed.example
        self.enum = _unique(parsed.enum) if parsed.enum is not None else None
        self.options: dict[str, Any] = options
        self._parent: weakref.ReferenceType["SchemaNode"] | None = None

        self.init()
        self.validate_self()

    @property
    @abstractmethod
    def node_type(self) -> str:
        """Type label of this node (e.g., 'string', 'anyOf')."""
        ...

    @classmethod
    def allowed_options(cls) -> tuple[str, ...]:
        """Option keys accepted by the constructor."""
        return ("name", "required", "default", "description", "example", "enum")

    def allowed_types(self) -> dict[type, str]:
        """Python types this node accepts, mapped to their type labels."""
        return {}

    @property
    def children(self) -> tuple["SchemaNode", ...]:
        return ()

    @property
    def parent(self) -> "SchemaNode | None":
        """Enclosing node, if it is still alive."""
        return self._parent() if self._parent is not None else None

    def attach(self, child: "SchemaNode") -> "SchemaNode":
        """Link a child back to this node; used only during construction."""
        if not isinstance(child, SchemaNode):
            raise SchemaDefinitionError(
                f"Expected a schema node, got: {type(child).__name__}"
            )
        child._parent = weakref.ref(self)
        return child

    def init(self) -> None:
        """Hook for subclasses to consume their own options."""

    def validate_self(self) -> None:
        """Construction-time structural check; raise SchemaDefinitionError."""

    # -------------------------------------------------------------------------
    # Validation entry points
    # -------------------------------------------------------------------------

    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data against this node.

        Args:
            data: The data to validate

        Returns:
            ValidationResult with errors and, if valid, the effective data
        """
        result = ValidationResult()
        effective = self._validate(data, result)
        if result.valid:
            result.data = effective
        return result

    def validate_or_fail(self, data: Any) -> Any:
        """
        Validate data and return the effective (defaulted) data.

        Raises:
            DataValidationError: If the data is invalid
        """
        result = self.validate(data)
        if not result.valid:
            raise DataValidationError(result.errors)
        return result.data

    def valid(self, data: Any) -> bool:
        return self.validate(data).valid

    def invalid(self, data: Any) -> bool:
        return not self.validate(data).valid

    # -------------------------------------------------------------------------
    # Shared pipeline
    # -------------------------------------------------------------------------

    def _validate(self, data: Any, result: ValidationResult) -> Any:
        if data is None and self.required:
            result.error("Value must be given.")
            return None

        if data is None:
            if self.default is None:
                return None
            data = self.default

        allowed = self.allowed_types()
        if allowed and not self._matches_type(data, allowed):
            labels = " or ".join(sorted({f'"{label}"' for label in allowed.values()}))
            result.error(f"Invalid type, expected {labels}.")
            return None

        # Recorded without aborting
        if self.enum is not None and not _includes(self.enum, data):
            result.error(f"Value not included in enum {_render_enum(self.enum)}.")

        return data

    @staticmethod
    def _matches_type(data: Any, allowed: dict[type, str]) -> bool:
        # bool is an int subclass but never stands in for a number
        if isinstance(data, bool) and bool not in allowed:
            return False
        return isinstance(data, tuple(allowed))

    def __repr__(self) -> str:
        name = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{name}>"


def _same(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def _includes(values: tuple[Any, ...], data: Any) -> bool:
    return any(_same(value, data) for value in values)


def _unique(values: list[Any]) -> tuple[Any, ...]:
    unique: list[Any] = []
    for value in values:
        if not _includes(tuple(unique), value):
            unique.append(value)
    return tuple(unique)


def _render_enum(values: tuple[Any, ...]) -> str:
    return json.dumps(list(values), ensure_ascii=False, default=str)


def node_sequence(value: Any, option: str) -> tuple[SchemaNode, ...]:
    """Normalise a child-node option: None, a single node, or an iterable of nodes."""
    if value is None:
        return ()
    if isinstance(value, SchemaNode):
        return (value,)
    if isinstance(value, (str, bytes, dict)):
        raise SchemaDefinitionError(
            f'Option "{option}" must be a node or a list of nodes, got: {type(value).__name__}'
        )
    try:
        return tuple(value)
    except TypeError as e:
        raise SchemaDefinitionError(
            f'Option "{option}" must be a node or a list of nodes, got: {type(value).__name__}'
        ) from e
