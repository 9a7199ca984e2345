"""Task service layer for input normalization and data persistence.

Each persistence function performs a single datastore round trip over the
given SQLAlchemy session and returns the task serialized with
``Task.to_dict``. Write operations roll back and re-raise on failure;
logging the failure is left to the caller.
"""

import logging
from typing import Dict, Any, Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.task import Task, DEFAULT_COLOR

logger = logging.getLogger(__name__)

FIELD_TYPES = {"title": str, "color": str, "completed": bool}


class TitleRequiredError(ValueError):
    """Exception raised when a title is missing or blank."""
    pass


class TaskNotFoundError(ValueError):
    """Exception raised when a task with the specified ID is not found."""
    pass


def clean_title(title: Any) -> str:
    """Return the title stripped of surrounding whitespace.

    Raises:
        TitleRequiredError: When title is missing, falsy or blank
        TypeError: When title is a non-empty value other than a string
    """
    if not title:
        raise TitleRequiredError("Title is required")
    if not isinstance(title, str):
        raise TypeError(f"Title must be a string, got {type(title).__name__}")
    if not title.strip():
        raise TitleRequiredError("Title is required")
    return title.strip()


def resolve_color(color: Any) -> Any:
    """Return the color, or the default when it is falsy."""
    return color or DEFAULT_COLOR


def check_field_types(fields: Dict[str, Any]) -> None:
    """Validate field names and value types before they reach the datastore.

    Raises:
        ValueError: When fields names a column that cannot be written
        TypeError: When a value has the wrong type (None included)
    """
    unknown = set(fields) - set(FIELD_TYPES)
    if unknown:
        raise ValueError(f"Cannot update fields: {sorted(unknown)}")

    for field_name, value in fields.items():
        expected = FIELD_TYPES[field_name]
        if not isinstance(value, expected):
            raise TypeError(
                f"Field '{field_name}' must be {expected.__name__}, got {type(value).__name__}"
            )


def list_tasks(db: Session) -> List[Dict[str, Any]]:
    """List all tasks, newest first.

    Tasks are ordered by created_at descending; id descending breaks ties.
    """
    logger.info("Listing all tasks")

    stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
    tasks = db.execute(stmt).scalars().all()

    logger.info(f"Successfully retrieved {len(tasks)} tasks")
    return [task.to_dict() for task in tasks]


def get_task_by_id(db: Session, task_id: int) -> Optional[Dict[str, Any]]:
    """Retrieve a task by its ID, or None when it does not exist."""
    task = db.get(Task, task_id)

    if task is None:
        logger.info(f"Task with ID {task_id} not found")
        return None

    return task.to_dict()


def create_task(db: Session, title: str, color: str, completed: bool = False) -> Dict[str, Any]:
    """Insert a new task.

    Args:
        db: SQLAlchemy database session
        title: Already-normalized task title
        color: Color label
        completed: Initial completion flag

    Returns:
        Dictionary representation of the created task, including its ID

    Raises:
        TypeError: When a value has the wrong type
    """
    check_field_types({"title": title, "color": color, "completed": completed})
    logger.info(f"Creating task with title: {title}")

    task = Task(title=title, color=color, completed=completed)

    try:
        db.add(task)
        db.commit()
        db.refresh(task)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Successfully created task with ID: {task.id}")
    return task.to_dict()


def update_task(db: Session, task_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Apply the given field values to an existing task.

    Only the keys present in ``fields`` are written. ``updated_at`` is
    refreshed by the model's before_update listener.

    Args:
        db: SQLAlchemy database session
        task_id: Integer ID of the task to update
        fields: Mapping of column name to new value (title, color, completed)

    Returns:
        Dictionary representation of the updated task

    Raises:
        TaskNotFoundError: When no task with the specified task_id exists
        ValueError: When fields names a column that cannot be updated
        TypeError: When a value has the wrong type
    """
    check_field_types(fields)
    logger.info(f"Updating task with ID: {task_id}, fields: {sorted(fields)}")

    try:
        task = db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(f"Task with ID {task_id} not found")

        for field_name, value in fields.items():
            setattr(task, field_name, value)

        db.add(task)
        db.commit()
        db.refresh(task)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Successfully updated task with ID: {task.id}")
    return task.to_dict()


def delete_task(db: Session, task_id: int) -> None:
    """Permanently delete a task.

    Raises:
        TaskNotFoundError: When no task with the specified task_id exists
    """
    logger.info(f"Deleting task with ID: {task_id}")

    try:
        task = db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(f"Task with ID {task_id} not found")

        db.delete(task)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Successfully deleted task with ID: {task_id}")
