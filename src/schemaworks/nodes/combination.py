"""
Combination Nodes - Compose child schemas with boolean-style semantics.

- anyOf: the first item (in declaration order) that matches wins
- oneOf: exactly one item may match; ambiguity is an error
- allOf: every item must match; all item errors are reported

anyOf and oneOf probe items against disposable sub-results, so errors of
losing items never reach the caller. The chosen item is then validated a
second time against the real result.
"""

import logging
from typing import Any

from schemaworks.config import get_settings
from schemaworks.core.result import ValidationResult
from schemaworks.exceptions import SchemaDefinitionError
from schemaworks.nodes.base import SchemaNode, node_sequence

logger = logging.getLogger(__name__)


class CombinationNode(SchemaNode):
    """
    Base class for nodes holding an ordered list of items.

    Items are passed at construction time and frozen afterwards. A
    combination never restricts the runtime shape of a value itself.
    """

    @classmethod
    def allowed_options(cls) -> tuple[str, ...]:
        return super().allowed_options() + ("items",)

    def init(self) -> None:
        items = node_sequence(self.options.pop("items", None), "items")
        self.items: tuple[SchemaNode, ...] = tuple(self.attach(item) for item in items)

    @property
    def children(self) -> tuple[SchemaNode, ...]:
        return self.items

    def validate_self(self) -> None:
        if not self.items:
            logger.warning("Refusing to build %s without items", self.node_type)
            raise SchemaDefinitionError(
                f'Node "{self.node_type}" makes only sense with at least 1 item.'
            )

    def matches(self, data: Any, result: ValidationResult) -> list[SchemaNode]:
        """Items that validate ``data`` cleanly in isolation, in order."""
        return [item for item in self.items if self.item_matches(item, data, result)]

    def item_matches(self, item: SchemaNode, data: Any, result: ValidationResult) -> bool:
        """Probe an item with a disposable sub-result; ``result`` is untouched."""
        probe = result.sub_result()
        item._validate(data, probe)
        if (
            not probe.valid
            and get_settings().log_probe_failures
            and logger.isEnabledFor(logging.DEBUG)
        ):
            logger.debug(
                "%s item %r rejected at %s: %s", self.node_type, item, result.path, probe.messages
            )
        return probe.valid


class AnyOfNode(CombinationNode):
    """Matches when at least one item matches."""

    @property
    def node_type(self) -> str:
        return "anyOf"

    def _validate(self, data: Any, result: ValidationResult) -> Any:
        super_data = super()._validate(data, result)
        if super_data is None:
            return None

        match = next(
            (item for item in self.items if self.item_matches(item, super_data, result)),
            None,
        )
        if match is None:
            result.error("Does not match any anyOf condition.")
            return None

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("anyOf matched %r at %s", match, result.path)
        return match._validate(super_data, result)


class OneOfNode(CombinationNode):
    """Matches when exactly one item matches."""

    @property
    def node_type(self) -> str:
        return "oneOf"

    def _validate(self, data: Any, result: ValidationResult) -> Any:
        super_data = super()._validate(data, result)
        if super_data is None:
            return None

        matches = self.matches(super_data, result)
        if len(matches) == 1:
            return matches[0]._validate(super_data, result)

        if matches:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("oneOf ambiguous at %s: %s", result.path, matches)
            result.error("Matches more than one oneOf condition.")
        else:
            result.error("Does not match any oneOf condition.")
        return None


class AllOfNode(CombinationNode):
    """Matches when every item matches; item errors pass through."""

    @property
    def node_type(self) -> str:
        return "allOf"

    def _validate(self, data: Any, result: ValidationResult) -> Any:
        super_data = super()._validate(data, result)
        if super_data is None:
            return None

        for item in self.items:
            item._validate(super_data, result)
        return super_data
