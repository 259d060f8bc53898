"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db(). Every write runs inside unit_of_work().
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from bookkeeping.config import get_settings
from bookkeeping.exceptions import LedgerError, StoreError

logger = logging.getLogger(__name__)

settings = get_settings()


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores REFERENCES clauses unless the pragma is set
    per connection. Without it a journal entry could point at
    an account that does not exist.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI serves sync endpoints from a thread pool
        connect_args["check_same_thread"] = False
    engine = create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    enable_sqlite_foreign_keys(engine)
    return engine


# --- Engine ---
engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# --- Session Factory ---
# autocommit=False: every write is committed explicitly by
# unit_of_work(), so a multi-entry transaction is all-or-nothing.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp for DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@contextmanager
def unit_of_work(db: Session):
    """
    Run a block of writes as one atomic database transaction.

    Commits when the block exits normally. Any exception rolls
    back everything written inside the block. Ledger errors are
    re-raised unchanged; database errors are logged and replaced
    with a StoreError so storage details never reach the caller.
    """
    try:
        yield db
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Unit of work rolled back after store failure")
        raise StoreError() from e
    except Exception:
        db.rollback()
        raise


@contextmanager
def store_read(db: Session):
    """
    Run ledger reads, reporting database failures as StoreError.

    Aggregates are summed by the database, so a read can fail on
    its own (SQLite raises on SUM overflow past BIGINT).
    """
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Ledger read failed")
        raise StoreError() from e


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, preventing connection leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
