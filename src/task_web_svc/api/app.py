"""FastAPI application for the task_web_svc API.

This module creates and configures the FastAPI application instance
with all necessary routes and middleware.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_cors_origins
from ..database import init_db
from ..routes.task_routes import task_router
from .errors import TaskApiError, task_api_error_handler, request_validation_error_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database schema before serving requests."""
    init_db()
    logger.info("Task API ready")
    yield


app = FastAPI(
    title="Task Web Service API",
    description="REST API for creating, listing, updating, toggling and deleting tasks",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TaskApiError, task_api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# Task routes live under /api/tasks
app.include_router(task_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "OK", "message": "Todo API is running"}
