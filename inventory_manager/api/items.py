"""
Item and audit log API endpoints.

The API layer is thin: it maps service errors to HTTP status
codes and delegates all business logic to the services.
Mutation bodies are taken as plain JSON objects so validation
happens in one place, ItemService, and always reports the
offending fields.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from inventory_manager.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
)
from inventory_manager.models.base import get_db
from inventory_manager.schemas.audit_log import AuditLogResponse
from inventory_manager.schemas.item import ItemDeleteResponse, ItemResponse
from inventory_manager.services.audit_log_service import AuditLogService
from inventory_manager.services.item_query_service import ItemQueryService
from inventory_manager.services.item_service import ItemService

router = APIRouter(prefix="/api/items", tags=["Items"])


def to_http_error(e: Exception) -> HTTPException:
    """Translate a service error into the matching HTTP error."""
    if isinstance(e, ValidationError):
        return HTTPException(
            status_code=400, detail={"error": e.message, "fields": e.fields}
        )
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail={"error": str(e)})
    return HTTPException(status_code=503, detail={"error": str(e)})


# --- Item Endpoints ---

@router.post("", response_model=ItemResponse, status_code=201)
def create_item(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    """
    Add a new item.

    name, price, quantity, expiryDate and category are all
    required. category is case-insensitive.
    """
    service = ItemService(db)
    try:
        return service.create_item(payload)
    except (ValidationError, StoreError) as e:
        raise to_http_error(e)


@router.get("", response_model=list[ItemResponse])
def list_items(
    category: str | None = None,
    db: Session = Depends(get_db),
):
    """List all items, newest first."""
    service = ItemQueryService(db)
    try:
        return service.list_items(category)
    except (ValidationError, StoreError) as e:
        raise to_http_error(e)


@router.get("/search", response_model=list[ItemResponse])
def search_items(
    name: str | None = None,
    category: str | None = None,
    db: Session = Depends(get_db),
):
    """Search items by a case-insensitive part of their name."""
    service = ItemQueryService(db)
    try:
        return service.search_by_name(name, category)
    except (ValidationError, StoreError) as e:
        raise to_http_error(e)


@router.get("/search/first", response_model=ItemResponse)
def find_item(
    name: str | None = None,
    db: Session = Depends(get_db),
):
    """Return the newest item whose name matches, or 404."""
    service = ItemQueryService(db)
    try:
        return service.find_by_name(name)
    except (ValidationError, NotFoundError, StoreError) as e:
        raise to_http_error(e)


# --- Audit Log Endpoints ---

@router.get("/logs", response_model=list[AuditLogResponse])
def list_logs(
    limit: str | None = None,
    day: str | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
):
    """
    List audit entries, newest first.

    With date=YYYY-MM-DD, return every entry from that (UTC) day.
    Otherwise return the most recent entries, up to limit.
    """
    service = AuditLogService(db)
    try:
        if day is not None:
            return service.list_for_day(day)
        return service.list_all(limit)
    except (ValidationError, StoreError) as e:
        raise to_http_error(e)


@router.get("/logs/today", response_model=list[AuditLogResponse])
def list_todays_logs(db: Session = Depends(get_db)):
    """List today's audit entries (UTC), newest first."""
    service = AuditLogService(db)
    try:
        return service.list_for_day(datetime.utcnow().date())
    except StoreError as e:
        raise to_http_error(e)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
):
    """Get a single item."""
    service = ItemQueryService(db)
    try:
        return service.get_item(item_id)
    except (ValidationError, NotFoundError, StoreError) as e:
        raise to_http_error(e)


@router.get("/{item_id}/logs", response_model=list[AuditLogResponse])
def get_item_logs(
    item_id: str,
    db: Session = Depends(get_db),
):
    """Audit history of one item. Works for deleted items too."""
    service = AuditLogService(db)
    try:
        return service.list_for_item(item_id)
    except (ValidationError, StoreError) as e:
        raise to_http_error(e)


@router.put("/{item_id}", response_model=ItemResponse)
@router.patch("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: str,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    """
    Update an item.

    Any subset of the business fields may be sent; the rest
    are left as they are.
    """
    service = ItemService(db)
    try:
        return service.update_item(item_id, payload)
    except (ValidationError, NotFoundError, StoreError) as e:
        raise to_http_error(e)


@router.delete("/{item_id}", response_model=ItemDeleteResponse)
def delete_item(
    item_id: str,
    db: Session = Depends(get_db),
):
    """Delete an item. Its last state stays in the audit log."""
    service = ItemService(db)
    try:
        return service.delete_item(item_id)
    except (ValidationError, NotFoundError, StoreError) as e:
        raise to_http_error(e)
