"""
Run the todo service with uvicorn.

Usage:
    python -m todo_service

PORT (default 3000) and HOST (default 0.0.0.0) are read from the environment.
Uvicorn stops the server cleanly on SIGINT and SIGTERM.
"""
from __future__ import annotations

import uvicorn

from .logging_config import get_logger, setup_logging
from .settings import get_settings

logger = get_logger(__name__)


# PUBLIC_INTERFACE
def main() -> None:
    """Load settings, configure logging and serve the application."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        "todo_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
