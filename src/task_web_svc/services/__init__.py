"""Service layer for the task_web_svc application.

This package contains input normalization and persistence functions
for task management operations.
"""

from .task_service import (
    clean_title,
    resolve_color,
    check_field_types,
    list_tasks,
    get_task_by_id,
    create_task,
    update_task,
    delete_task,
    TitleRequiredError,
    TaskNotFoundError,
)

__all__ = [
    "clean_title",
    "resolve_color",
    "check_field_types",
    "list_tasks",
    "get_task_by_id",
    "create_task",
    "update_task",
    "delete_task",
    "TitleRequiredError",
    "TaskNotFoundError",
]
