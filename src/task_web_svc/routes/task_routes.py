"""FastAPI routes for task-related operations.

This module implements the task REST endpoints: listing, creation,
update-or-toggle and deletion. Datastore failures are logged and reported
with a fixed per-operation message; their detail never reaches the client.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ..api.errors import TaskApiError
from ..database import get_db
from ..schemas.task import TaskCreate, TaskUpdate, TaskResponse, TaskDeleteResponse, ErrorResponse
from ..services.task_service import (
    clean_title,
    resolve_color,
    list_tasks,
    get_task_by_id,
    create_task,
    update_task,
    delete_task,
    TitleRequiredError,
)

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required"
TASK_NOT_FOUND = "Task not found"

task_router = APIRouter(prefix="/tasks", tags=["tasks"])


def _title_required(error: TitleRequiredError) -> TaskApiError:
    logger.warning(f"Rejected request: {error}")
    return TaskApiError(400, TITLE_REQUIRED)


@task_router.get("", response_model=List[TaskResponse],
                 responses={500: {"model": ErrorResponse}})
@task_router.get("/", response_model=List[TaskResponse], include_in_schema=False)
async def list_tasks_endpoint(db: Session = Depends(get_db)):
    """Return every task, newest first."""
    logger.info("GET /tasks request")

    try:
        return list_tasks(db)
    except Exception as e:
        logger.error(f"Error fetching tasks: {e}", exc_info=True)
        raise TaskApiError(500, "Failed to fetch tasks")


@task_router.post("", response_model=TaskResponse, status_code=201,
                  responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
@task_router.post("/", response_model=TaskResponse, status_code=201, include_in_schema=False)
async def create_task_endpoint(
    body: Any = Body(None),
    db: Session = Depends(get_db)
):
    """Create a task.

    The title is trimmed and required; color falls back to the default when
    empty; new tasks always start as not completed.
    """
    payload = TaskCreate.from_body(body)
    logger.info(f"POST /tasks request - title: {payload.title!r}")

    try:
        title = clean_title(payload.title)
        return create_task(db, title=title, color=resolve_color(payload.color), completed=False)
    except TitleRequiredError as e:
        raise _title_required(e)
    except Exception as e:
        logger.error(f"Error creating task: {e}", exc_info=True)
        raise TaskApiError(500, "Failed to create task")


@task_router.put("/{task_id}", response_model=TaskResponse,
                 responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse},
                            500: {"model": ErrorResponse}})
async def update_task_endpoint(
    task_id: str,
    body: Any = Body(None),
    db: Session = Depends(get_db)
):
    """Update a task, or flip its completion when ``toggle`` is true.

    Args:
        task_id: Task ID from the path, parsed as an integer
        body: Update body; ``{"toggle": true}`` selects the toggle branch
        db: Database session dependency

    Returns:
        The updated task

    Raises:
        TaskApiError: 400 on a missing title (regular update only),
            404 when toggling an unknown task, 500 for datastore errors
            and values of the wrong type
    """
    payload = TaskUpdate.from_body(body)
    logger.info(f"PUT /tasks/{task_id} request - toggle: {payload.is_toggle}")

    if payload.is_toggle:
        return _toggle_task(db, task_id)

    try:
        fields = {
            "title": clean_title(payload.title),
            "color": resolve_color(payload.color),
            "completed": payload.completed_or_default,
        }
        return update_task(db, int(task_id), fields)
    except TitleRequiredError as e:
        raise _title_required(e)
    except Exception as e:
        logger.error(f"Error updating task: {e}", exc_info=True)
        raise TaskApiError(500, "Failed to update task")


def _toggle_task(db: Session, task_id: str):
    try:
        task_pk = int(task_id)
        current = get_task_by_id(db, task_pk)
    except Exception as e:
        logger.error(f"Error updating task: {e}", exc_info=True)
        raise TaskApiError(500, "Failed to update task")

    if current is None:
        logger.warning(f"Task not found for toggle: {task_id}")
        raise TaskApiError(404, TASK_NOT_FOUND)

    try:
        return update_task(db, task_pk, {"completed": not current["completed"]})
    except Exception as e:
        logger.error(f"Error updating task: {e}", exc_info=True)
        raise TaskApiError(500, "Failed to update task")


@task_router.delete("/{task_id}", response_model=TaskDeleteResponse,
                    responses={500: {"model": ErrorResponse}})
async def delete_task_endpoint(task_id: str, db: Session = Depends(get_db)):
    """Delete a task by ID.

    Deleting an unknown ID is reported as a failure, not a no-op.
    """
    logger.info(f"DELETE /tasks/{task_id} request")

    try:
        delete_task(db, int(task_id))
    except Exception as e:
        logger.error(f"Error deleting task: {e}", exc_info=True)
        raise TaskApiError(500, "Failed to delete task")

    return TaskDeleteResponse(message="Task deleted successfully")
