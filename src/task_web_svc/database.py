"""Core database connection and session management using SQLAlchemy.

This module provides database connectivity for both PostgreSQL and SQLite,
with connection pooling, per-request session management and schema creation.
"""

import logging
import os
from typing import Generator, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Import config to ensure dotenv is loaded
from . import config
from .models.base import Base

logger = logging.getLogger(__name__)

# Module-level engine and session factory - initialized lazily
ENGINE: Engine | None = None
SESSION_FACTORY: sessionmaker | None = None


def get_db_url() -> str:
    """Get database URL from environment variables.

    Returns:
        Database URL string. Defaults to SQLite in-memory if DATABASE_URL is not set.
    """
    return os.getenv("DATABASE_URL", "sqlite:///:memory:")


def create_engine_and_session_factory(db_url: str | None = None) -> Tuple[Engine, sessionmaker]:
    """Create SQLAlchemy engine and session factory.

    Args:
        db_url: Database URL. If None, uses get_db_url().

    Returns:
        Tuple of (engine, sessionmaker)
    """
    if db_url is None:
        db_url = get_db_url()

    try:
        if db_url.startswith("postgresql"):
            engine = create_engine(
                db_url,
                pool_size=10,
                max_overflow=20,
                pool_timeout=30,
                pool_pre_ping=True
            )
        else:
            connect_args = {"check_same_thread": False}
            if db_url == "sqlite:///:memory:":
                # A single shared connection keeps the in-memory database alive
                engine = create_engine(
                    db_url,
                    connect_args=connect_args,
                    poolclass=StaticPool
                )
            else:
                engine = create_engine(db_url, connect_args=connect_args)

        SessionLocal = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False
        )

        return engine, SessionLocal

    except Exception as e:
        logger.error(f"Failed to create database engine: {e}", exc_info=True)
        raise


def _ensure_initialized() -> None:
    """Initialize the module-level ENGINE and SESSION_FACTORY on first use."""
    global ENGINE, SESSION_FACTORY

    if SESSION_FACTORY is None:
        ENGINE, SESSION_FACTORY = create_engine_and_session_factory()


def _reset_db_state() -> None:
    """Dispose the current engine and force re-initialization on next access.

    Primarily used for testing.
    """
    global ENGINE, SESSION_FACTORY

    if ENGINE is not None:
        try:
            ENGINE.dispose()
        except Exception as e:
            logger.error(f"Error disposing database engine: {e}", exc_info=True)

    ENGINE = None
    SESSION_FACTORY = None


def init_db() -> None:
    """Create the tables described by the ORM metadata if they do not exist."""
    _ensure_initialized()
    Base.metadata.create_all(bind=ENGINE)
    logger.info(f"Database schema ready on {ENGINE.url.render_as_string(hide_password=True)}")


def get_db() -> Generator[Session, None, None]:
    """Get database session generator.

    Yields:
        SQLAlchemy Session instance, closed once the request is done.
    """
    _ensure_initialized()

    db = SESSION_FACTORY()
    try:
        yield db
    finally:
        db.close()
