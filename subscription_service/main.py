"""FastAPI ASGI application entrypoint."""

import logging
import sys

import uvicorn

from .core.app_factory import create_application
from .core.config import Settings
from .core.logging import configure_logging
from .infrastructure.persistence.database import DatabaseUnavailableError, connect_with_retry

logger = logging.getLogger(__name__)

app = create_application()


def run() -> None:
    """Connect to the store, then serve until SIGINT/SIGTERM."""
    settings = Settings()
    configure_logging(settings.log_level)
    try:
        database = connect_with_retry(settings)
    except DatabaseUnavailableError as exc:
        logger.error("Startup aborted: %s", exc)
        sys.exit(1)

    logger.info("Starting server port=%s", settings.http_port)
    uvicorn.run(
        create_application(settings, database),
        host="0.0.0.0",
        port=settings.http_port,
        log_config=None,
    )
    logger.info("Server stopped")


__all__ = ("app", "run")
