"""Entry point for running the Users API with Uvicorn.

Host, port and log level come from the application settings (``HOST``,
``PORT`` and ``LOG_LEVEL`` environment variables, see
``users_api.app.core.config``).  Uvicorn handles SIGINT/SIGTERM and
shuts the server down gracefully.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from users_api.app.core.config import settings
from users_api.app.main import app

logger = logging.getLogger(__name__)


async def run_api() -> None:
    """Serve the API until the process is asked to stop."""
    base_url = f"http://{settings.host}:{settings.port}"
    logger.info("Server starting on %s:%s", settings.host, settings.port)
    logger.info("API documentation: %s/api/docs", base_url)
    logger.info("Health check: %s/health", base_url)
    logger.info("Environment: %s", settings.environment)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
