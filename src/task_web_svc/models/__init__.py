"""SQLAlchemy ORM models for the task_web_svc application.

This package contains the declarative base and the Task model.
"""

from .base import Base
from .task import Task, DEFAULT_COLOR

__all__ = ["Base", "Task", "DEFAULT_COLOR"]
