"""
Error taxonomy for the inventory core.

ValidationError and NotFoundError are also ValueErrors.
"""

import uuid

from pydantic import ValidationError as SchemaValidationError


class InventoryError(Exception):
    """Base class for all inventory errors."""


class ValidationError(InventoryError, ValueError):
    """Malformed or missing input. Never reaches the store."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []

    @classmethod
    def from_schema_error(cls, exc: SchemaValidationError) -> "ValidationError":
        """Build from a pydantic error, keeping every offending field."""
        fields: list[str] = []
        problems: list[str] = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            if field and field not in fields:
                fields.append(field)
            problems.append(f"{field}: {error['msg']}" if field else error["msg"])
        return cls("Invalid input: " + "; ".join(problems), fields)


class NotFoundError(InventoryError, ValueError):
    """A referenced identifier does not resolve to an existing item."""


class StoreError(InventoryError):
    """The database is unreachable or rejected the operation."""


class AuditWriteFailure(InventoryError):
    """An audit entry could not be persisted."""


def parse_item_id(value) -> uuid.UUID:
    """Parse an item identifier, rejecting malformed values up front."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"Invalid item ID: {value!r}", ["id"]) from None
