"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from inventory_manager.config import get_settings

settings = get_settings()

# SQLite connections are bound to the creating thread by default;
# FastAPI runs sync endpoints in a threadpool, so lift that check.
connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles a database restart or a stale connection.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# --- Session Factory ---
# autocommit=False means services decide when changes are saved.
# An item write and its audit entry are committed separately,
# so the services call commit() themselves.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed when the
    request finishes, even if an error occurs, so connections
    are always returned to the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
