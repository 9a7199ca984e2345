"""HTTP route modules for the task_web_svc API."""

from .task_routes import task_router

__all__ = ["task_router"]
