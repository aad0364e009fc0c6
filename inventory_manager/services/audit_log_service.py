"""
Audit log queries.

The audit log is written only by ItemService (through
AuditLogger) and read only here. Entries come back newest
first; entries sharing a timestamp are ordered by id.
"""

import logging
from datetime import date, datetime, time

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_manager.config import get_settings
from inventory_manager.errors import StoreError, ValidationError, parse_item_id
from inventory_manager.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


class AuditLogService:

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def _newest_first(self):
        return select(AuditLog).order_by(
            AuditLog.timestamp.desc(), AuditLog.id.desc()
        )

    def _fetch_all(self, stmt) -> list[AuditLog]:
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error("Audit log query failed: %s", e)
            raise StoreError("Could not read audit log") from e

    def list_all(self, limit: int | str | None = None) -> list[AuditLog]:
        """Return the most recent entries, at most `limit` of them."""
        if limit is None or limit == "":
            limit = self.settings.AUDIT_LOG_DEFAULT_LIMIT
        max_limit = self.settings.AUDIT_LOG_MAX_LIMIT
        try:
            limit = int(limit)
        except (TypeError, ValueError):
            raise ValidationError(
                f"limit must be an integer, got {limit!r}", ["limit"]
            ) from None
        if not 1 <= limit <= max_limit:
            raise ValidationError(
                f"limit must be between 1 and {max_limit}", ["limit"]
            )
        return self._fetch_all(self._newest_first().limit(limit))

    def list_for_day(self, day: date | str) -> list[AuditLog]:
        """
        Return entries recorded on the given (UTC) day.

        Both ends of the day are inclusive: 00:00:00.000000
        through 23:59:59.999999. A string must be YYYY-MM-DD.
        """
        if isinstance(day, str):
            try:
                day = date.fromisoformat(day.strip())
            except ValueError:
                raise ValidationError(
                    f"date must be YYYY-MM-DD, got {day!r}", ["date"]
                ) from None
        start = datetime.combine(day, time.min)
        end = datetime.combine(day, time.max)
        return self._fetch_all(
            self._newest_first().where(
                AuditLog.timestamp >= start,
                AuditLog.timestamp <= end,
            )
        )

    def list_for_item(self, item_id) -> list[AuditLog]:
        """Return the history of one item, including deleted ones."""
        parsed_id = parse_item_id(item_id)
        return self._fetch_all(
            self._newest_first().where(AuditLog.item_id == parsed_id)
        )
