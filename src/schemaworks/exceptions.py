"""Custom exceptions for schemaworks."""

from schemaworks.core.models import ErrorEntry


class SchemaworksError(Exception):
    """Base exception for schemaworks related errors."""
    pass


class SchemaDefinitionError(SchemaworksError):
    """Exception raised while building a schema tree.

    Unknown options, bad option values, combinators without items and
    unknown type tags all end up here. These are programmer errors and are
    never collected into a validation result.
    """
    pass


class DataValidationError(SchemaworksError):
    """Exception raised by ``validate_or_fail`` when data does not conform."""

    def __init__(self, errors: list[ErrorEntry]):
        self.errors = list(errors)
        super().__init__("\n".join(f"{e.path}: {e.message}" for e in self.errors))
