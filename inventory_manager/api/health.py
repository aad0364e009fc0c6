"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_manager.config import get_settings
from inventory_manager.models.base import get_db

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/")
def root():
    """Service banner listing the available endpoints."""
    settings = get_settings()
    return {
        "message": f"{settings.APP_NAME} API is running",
        "version": settings.APP_VERSION,
        "endpoints": {
            "health": "/health",
            "items": "/api/items",
            "logs": "/api/items/logs",
        },
    }


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Return application health status including database connectivity.

    The database check executes a simple query. If it fails the
    endpoint still answers, but reports the service as degraded.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "inventory-manager",
        "environment": get_settings().ENVIRONMENT,
        "database": db_status,
    }
