"""
Database models package.

All models must be imported here so that Base.metadata knows
about every table before create_all() runs.
"""

from inventory_manager.models.base import Base
from inventory_manager.models.enums import ItemCategory, AuditAction
from inventory_manager.models.item import Item
from inventory_manager.models.audit_log import AuditLog

__all__ = [
    "Base",
    "ItemCategory",
    "AuditAction",
    "Item",
    "AuditLog",
]
