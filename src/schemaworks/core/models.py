"""Core models and contracts for schemaworks.

These models define the two boundaries of the engine:
- The option bag a node is constructed from
- The serialisable report a validation call produces
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool


# =============================================================================
# Construction boundary
# =============================================================================


class NodeOptions(BaseModel):
    """Options shared by every schema node."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    required: StrictBool = False
    default: Any = None
    description: str | None = None
    example: Any = None
    enum: list[Any] | None = None


# =============================================================================
# Validation boundary
# =============================================================================


class ErrorEntry(BaseModel):
    """A single validation error tagged with its location in the data."""

    model_config = ConfigDict(frozen=True)

    path: str
    message: str


class ValidationReport(BaseModel):
    """Serialisable outcome of one validate call."""

    valid: bool
    errors: list[ErrorEntry] = Field(default_factory=list)
