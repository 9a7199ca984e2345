"""Pytest configuration and fixtures for testing.

This module provides shared fixtures for database testing using in-memory SQLite
for fast and isolated test execution.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from task_web_svc.models.base import Base
from task_web_svc.api.app import app
from task_web_svc.database import get_db
import task_web_svc.database


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite engine with the schema applied.

    Yields:
        SQLAlchemy Engine instance configured for in-memory SQLite.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for testing.

    Yields:
        SQLAlchemy Session instance for database operations.
    """
    SessionLocal = sessionmaker(
        bind=db_engine,
        autoflush=False,
        expire_on_commit=False
    )

    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a FastAPI test client whose get_db dependency yields the test session.

    Yields:
        TestClient instance configured with test database session.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def clean_db_state():
    """Reset the module-level database state before and after a test."""
    task_web_svc.database._reset_db_state()

    yield

    task_web_svc.database._reset_db_state()
