"""schemaworks Core - Result model and boundary contracts."""

from schemaworks.core.models import ErrorEntry, NodeOptions, ValidationReport
from schemaworks.core.result import ValidationResult

__all__ = ["ErrorEntry", "NodeOptions", "ValidationReport", "ValidationResult"]
