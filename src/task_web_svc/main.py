"""Command-line entry point that serves the API with uvicorn."""

import logging

import uvicorn

from . import config


def run() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logging.getLogger(__name__).info(
        f"Starting task_web_svc on {config.SERVICE_HOST}:{config.SERVICE_PORT}"
    )
    uvicorn.run(
        "task_web_svc.api.app:app",
        host=config.SERVICE_HOST,
        port=config.SERVICE_PORT,
        log_level=config.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
