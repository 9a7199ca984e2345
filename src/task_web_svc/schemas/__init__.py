"""Pydantic schemas for the task_web_svc application.

This package contains all Pydantic models for request/response validation
and serialization.
"""

from .task import TaskCreate, TaskUpdate, TaskResponse, TaskDeleteResponse, ErrorResponse

__all__ = ["TaskCreate", "TaskUpdate", "TaskResponse", "TaskDeleteResponse", "ErrorResponse"]
