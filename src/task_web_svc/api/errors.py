"""Error types raised while handling requests and their JSON rendering.

Every handled error reaches the client as ``{"error": message}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_REQUEST = "Invalid request body"


class TaskApiError(Exception):
    """An error with a fixed status code and client-facing message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def task_api_error_handler(request: Request, exc: TaskApiError) -> JSONResponse:
    """Render a TaskApiError as ``{"error": message}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render a request FastAPI could not decode, such as malformed JSON, as a 400."""
    logger.warning(f"Rejected undecodable request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": INVALID_REQUEST})
