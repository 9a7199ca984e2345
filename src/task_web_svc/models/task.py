"""Task SQLAlchemy ORM model for the task_web_svc application.

This module defines the Task model, its JSON serialization and the event
listener that keeps ``updated_at`` current.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index, event

from .base import Base

DEFAULT_COLOR = "blue"


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a timestamp as ISO-8601 UTC with millisecond precision.

    SQLite hands back naive datetimes; those are assumed to already be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(Base):
    """Task ORM model.

    A task carries a title, a color label and a completion flag, plus
    creation and modification timestamps managed by the model itself.
    """
    __tablename__ = 'tasks'

    __table_args__ = (
        Index('idx_task_created_at', 'created_at'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    color = Column(String, nullable=False, default=DEFAULT_COLOR)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __init__(self, **kwargs):
        """Initialize Task with defaults and synchronized timestamps."""
        now = datetime.now(timezone.utc)

        kwargs.setdefault('color', DEFAULT_COLOR)
        kwargs.setdefault('completed', False)
        if 'created_at' not in kwargs:
            kwargs['created_at'] = now
        if 'updated_at' not in kwargs:
            kwargs['updated_at'] = now

        super().__init__(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Task to the JSON shape served by the API.

        Returns:
            Dict with ``id``, ``title``, ``color``, ``completed``,
            ``createdAt`` and ``updatedAt`` (ISO-8601 strings).
        """
        return {
            'id': self.id,
            'title': self.title,
            'color': self.color,
            'completed': bool(self.completed),
            'createdAt': format_timestamp(self.created_at),
            'updatedAt': format_timestamp(self.updated_at),
        }

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', completed={self.completed})>"


@event.listens_for(Task, 'before_update')
def update_updated_at(mapper, connection, target):
    """Refresh updated_at before a Task row is updated."""
    target.updated_at = datetime.now(timezone.utc)
