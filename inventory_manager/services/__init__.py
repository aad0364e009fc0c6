"""Business logic services."""

from inventory_manager.services.audit_logger import AuditLogger
from inventory_manager.services.item_service import ItemService
from inventory_manager.services.item_query_service import ItemQueryService
from inventory_manager.services.audit_log_service import AuditLogService

__all__ = ["AuditLogger", "ItemService", "ItemQueryService", "AuditLogService"]
