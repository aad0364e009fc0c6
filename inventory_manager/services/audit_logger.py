"""
Audit writer: records one entry per item mutation.

Audit entries are committed separately from the item change they
describe. record() is the boundary used after a successful
mutation: whatever goes wrong while writing the entry is logged
and discarded, so the caller's result never depends on it.
"""

import logging
import uuid
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_manager.config import get_settings
from inventory_manager.errors import AuditWriteFailure
from inventory_manager.models.audit_log import AuditLog
from inventory_manager.models.enums import AuditAction

logger = logging.getLogger(__name__)


class AuditLogger:
    """Append audit entries with failure isolation."""

    def __init__(self, db: Session, performed_by: str | None = None):
        self.db = db
        self.performed_by = performed_by or get_settings().AUDIT_PERFORMED_BY

    def write(
        self,
        action: AuditAction,
        item_id: uuid.UUID,
        item_name: str | None,
        details: dict[str, Any],
    ) -> AuditLog:
        """
        Persist a single entry in its own commit.

        Raises AuditWriteFailure if the entry cannot be stored.
        The session is rolled back first so it stays usable.
        """
        entry = AuditLog(
            action=action,
            item_id=item_id,
            item_name=item_name,
            performed_by=self.performed_by,
            details=details,
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except Exception as exc:
            try:
                self.db.rollback()
            except SQLAlchemyError:
                logger.exception("Rollback after failed audit write failed")
            raise AuditWriteFailure(
                f"Could not record {action.value} for item {item_id}"
            ) from exc
        return entry

    def record(
        self,
        action: AuditAction,
        item_id: uuid.UUID,
        item_name: str | None,
        details: dict[str, Any],
    ) -> AuditLog | None:
        """Best-effort write. Returns None instead of raising."""
        try:
            return self.write(action, item_id, item_name, details)
        except Exception:
            logger.exception(
                "Audit log write failed for %s on item %s; "
                "the item change itself was saved",
                action.value, item_id,
            )
            return None
