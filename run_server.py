import os

import uvicorn

from weatherapp.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def warn_if_unconfigured() -> None:
    """Log a clear warning when no API key is set; requests will fail with 401 upstream."""
    if not settings.api_key:
        logger.warning("WEATHER_API_KEY is not set; remote fetches will fail until it is configured")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="weather_server")
    warn_if_unconfigured()

    uvicorn.run(
        "weatherapp.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
        log_config=None,
    )
