"""
Audit log model.

Records every inventory mutation together with the item's
state before and/or after the change.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import String, DateTime, JSON, Enum as SAEnum, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from inventory_manager.models.base import Base
from inventory_manager.models.enums import AuditAction


class AuditLog(Base):
    """
    Immutable record of one item mutation.

    Audit entries are append-only. item_id is deliberately not a
    foreign key: the entry outlives the item it describes, and
    item_name plus details keep what is needed after a delete.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    action: Mapped[AuditAction] = mapped_column(
        SAEnum(AuditAction, name="audit_action_enum", create_constraint=True),
        nullable=False,
    )
    item_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    item_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    performed_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="system"
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    details: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )

    def __repr__(self) -> str:
        return f"<AuditLog {self.action.value} {self.item_id}>"
