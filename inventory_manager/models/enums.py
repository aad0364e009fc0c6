"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An invalid category or
audit action is caught at the database level, not just
in Python validation.
"""

import enum


class ItemCategory(str, enum.Enum):
    """The fixed set of product categories."""
    FRUIT = "fruit"
    VEGETABLE = "vegetable"


class AuditAction(str, enum.Enum):
    """Kind of mutation an audit entry describes."""
    ADD_ITEM = "ADD_ITEM"
    UPDATE_ITEM = "UPDATE_ITEM"
    DELETE_ITEM = "DELETE_ITEM"
