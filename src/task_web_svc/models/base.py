"""Declarative base shared by the task_web_svc ORM models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all task_web_svc ORM models.

    Its metadata is what ``database.init_db`` uses to create the schema.
    """
    pass
