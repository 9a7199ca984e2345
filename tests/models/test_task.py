"""Unit tests for the Task SQLAlchemy ORM model.

These tests verify defaults, automatic timestamp management and the
JSON serialization served by the API.
"""

import re
from datetime import datetime, timezone, timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase

from task_web_svc.models import Base, Task, DEFAULT_COLOR
from task_web_svc.models.task import format_timestamp

ISO_MILLIS_Z = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestTaskModel:
    """Test cases for the Task ORM model functionality."""

    def test_base_is_declarative_base(self):
        """Test that Base is a SQLAlchemy 2.x declarative base holding the tasks table."""
        assert issubclass(Base, DeclarativeBase)
        assert "tasks" in Base.metadata.tables

    def test_task_creation_and_retrieval(self, db_session):
        """Test basic Task creation, saving, and retrieval."""
        task = Task(title="Test Task", color="red", completed=True)

        db_session.add(task)
        db_session.commit()

        retrieved_task = db_session.get(Task, task.id)
        assert retrieved_task is not None
        assert isinstance(retrieved_task.id, int)
        assert retrieved_task.title == "Test Task"
        assert retrieved_task.color == "red"
        assert retrieved_task.completed is True

    def test_task_defaults(self, db_session):
        """Test that color and completed fall back to their defaults."""
        task = Task(title="Defaults")
        db_session.add(task)
        db_session.commit()

        assert task.color == DEFAULT_COLOR == "blue"
        assert task.completed is False

    def test_ids_are_assigned_sequentially(self, db_session):
        """Test that the datastore assigns distinct integer IDs."""
        first = Task(title="First")
        second = Task(title="Second")
        db_session.add_all([first, second])
        db_session.commit()

        assert first.id != second.id
        assert second.id > first.id

    def test_title_is_required(self, db_session):
        """Test that title cannot be null."""
        db_session.add(Task())

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_timestamps_synchronized_on_creation(self):
        """Test that created_at and updated_at start out equal and timezone-aware."""
        before = datetime.now(timezone.utc)
        task = Task(title="Timestamps")
        after = datetime.now(timezone.utc)

        assert task.created_at == task.updated_at
        assert before <= task.created_at <= after
        assert task.created_at.tzinfo is not None

    def test_updated_at_refreshed_on_update(self, db_session):
        """Test that the before_update listener refreshes updated_at only."""
        task = Task(title="Original")
        db_session.add(task)
        db_session.commit()
        created_at = task.created_at
        original_updated_at = task.updated_at

        task.title = "Changed"
        db_session.commit()

        assert task.created_at == created_at
        assert task.updated_at > original_updated_at

    def test_to_dict_shape(self, db_session):
        """Test that to_dict produces the camelCase JSON shape."""
        task = Task(title="Serialize me", color="green")
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)

        result = task.to_dict()

        assert set(result) == {"id", "title", "color", "completed", "createdAt", "updatedAt"}
        assert result["id"] == task.id
        assert result["title"] == "Serialize me"
        assert result["color"] == "green"
        assert result["completed"] is False
        assert ISO_MILLIS_Z.match(result["createdAt"])
        assert ISO_MILLIS_Z.match(result["updatedAt"])

    def test_repr(self):
        task = Task(id=7, title="Repr")
        assert repr(task) == "<Task(id=7, title='Repr', completed=False)>"


class TestFormatTimestamp:
    """Test cases for ISO-8601 timestamp rendering."""

    def test_aware_utc(self):
        value = datetime(2025, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2025-01-01T00:00:00.123Z"

    def test_naive_is_treated_as_utc(self):
        value = datetime(2025, 1, 1, 12, 30, 0)
        assert format_timestamp(value) == "2025-01-01T12:30:00.000Z"

    def test_other_timezone_converted_to_utc(self):
        value = datetime(2025, 1, 1, 2, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2025-01-01T00:00:00.000Z"

    def test_none(self):
        assert format_timestamp(None) is None
