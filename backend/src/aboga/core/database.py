"""
SQL database wiring for ABOGA.

Used when DATA_BACKEND=sql: the same tables the hosted backend exposes are
kept in a local SQLAlchemy database instead.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from aboga.core.config import BackendConfig

logger = logging.getLogger(__name__)


def create_database_engine(config: BackendConfig, debug: bool = False) -> Engine:
    """
    Create the engine for the configured database URL.

    SQLite gets a single shared connection so in-memory databases survive
    across sessions; every other backend uses a pre-pinged QueuePool.
    """
    url = config.database_url
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=debug,
        )
    else:
        engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_timeout=config.db_pool_timeout,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,   # Recycle connections every hour
            echo=debug,
        )

    @event.listens_for(engine, "connect")
    def set_connection_timeouts(dbapi_connection, connection_record):
        """Bound statement and idle-transaction time on PostgreSQL."""
        if engine.dialect.name == "postgresql":
            with dbapi_connection.cursor() as cursor:
                cursor.execute("SET statement_timeout = '300s'")
                cursor.execute("SET idle_in_transaction_session_timeout = '600s'")

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextmanager
def get_db_transaction(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Get database session with transaction management.

    Yields:
        Database session; committed on success, rolled back on error

    Raises:
        SQLAlchemyError: If database operation fails
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database transaction error: {e}")
        db.rollback()
        raise
    except Exception as e:
        logger.error(f"Unexpected error in database transaction: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    try:
        # Import all models to ensure they are registered with SQLAlchemy
        from aboga.models import Base
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database tables: {e}")
        raise


def ping_database(engine: Engine) -> bool:
    """Round-trip a trivial query; False when the SQL backend is unreachable."""
    try:
        with engine.connect() as connection:
            return connection.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError as e:
        logger.warning(f"SQL backend ping failed: {e}")
        return False
