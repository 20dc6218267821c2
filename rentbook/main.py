"""Main application entry point."""

import logging

import uvicorn
from dotenv import load_dotenv

from rentbook.config import get_settings
from rentbook.services.logging import setup_server_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Load .env, configure logging and serve the API."""
    load_dotenv()
    settings = get_settings()
    setup_server_logging(settings)

    logger.info("Starting Rentbook API on %s:%d", settings.host, settings.port)
    uvicorn.run("rentbook.api.app:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
