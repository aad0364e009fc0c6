"""
Pydantic schemas for audit log entries.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from inventory_manager.models.enums import AuditAction


class AuditLogResponse(BaseModel):
    """Audit entry in API responses."""
    id: int
    action: AuditAction
    item_id: uuid.UUID
    item_name: str | None
    performed_by: str
    timestamp: datetime
    details: dict[str, Any]

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
